"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import pytest
from unittest.mock import AsyncMock, MagicMock

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("BUILD_SERVER_URL", "http://build-server.test/")
    monkeypatch.setenv("TEAMCITY_URL", "http://teamcity.test/app/rest")
    monkeypatch.setenv("TEAMCITY_USERNAME", "teamcity_user")
    monkeypatch.setenv("TEAMCITY_PASSWORD", "teamcity_password")


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def make_build():
    """Factory for TeamCity build snapshots."""
    from interactor.models.teamcity import Build, BuildType

    def _make(
        build_type_id="teamCityBuildName",
        build_id="teamCityBuildId",
        state="queued",
        status=None,
        number=None,
        name=None,
    ):
        return Build(BuildType(build_type_id, name), build_id, number, state, status)

    return _make


@pytest.fixture
def make_request():
    """Factory for build server queue requests."""
    from interactor.services.buildserver.schemas import QueueRequest

    def _make(request_id, response_url="http://slack.test/responseUrl"):
        return QueueRequest(id=request_id, response_url=response_url)

    return _make


@pytest.fixture
def build_config():
    """Build configuration with two builds and a few project groups."""
    from interactor.models.config import BuildConfig

    return BuildConfig.model_validate({
        "builds": [
            {"id": "teamCityBuildName1", "names": ["buildServerName1.1", "buildServerName1.2"]},
            {"id": "teamCityBuildName2", "names": ["buildServerName2"]},
        ],
        "groups": [
            {"names": ["Provisioning"], "projects": [{"id": "projectId1"}]},
            {
                "names": ["groupId([0-9]+)"],
                "projects": [
                    {"id": "projectId%s"},
                    {"id": "otherProjectId%s", "exclusion": {"projects": ["otherProjectId7"]}},
                ],
            },
        ],
    })


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_teamcity():
    """Create a mock TeamCityClient."""
    teamcity = MagicMock()
    teamcity.build = AsyncMock()
    teamcity.status = AsyncMock()
    teamcity.state = AsyncMock()
    teamcity.project = AsyncMock()
    teamcity.cancel = AsyncMock()
    return teamcity


@pytest.fixture
def mock_build_server():
    """Create a mock BuildServerClient."""
    build_server = MagicMock()
    build_server.list_pending = AsyncMock(return_value=[])
    build_server.delete = AsyncMock()
    return build_server


@pytest.fixture
def mock_reporting():
    """Create a mock ReportingClient."""
    reporting = MagicMock()
    reporting.report = AsyncMock()
    return reporting


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def resolver(build_config, mock_teamcity):
    """Create an IdentityResolver over the test configuration."""
    from interactor.services.resolver import IdentityResolver
    return IdentityResolver(build_config, mock_teamcity)


@pytest.fixture
def store():
    """Create an empty BuildsStore."""
    from interactor.state.builds import BuildsStore
    return BuildsStore()


@pytest.fixture
def tracker(store, resolver, mock_build_server, mock_teamcity, mock_reporting):
    """Create a BuildTracker wired to mocks."""
    from interactor.services.tracker import BuildTracker
    return BuildTracker(store, resolver, mock_build_server, mock_teamcity, mock_reporting)


@pytest.fixture
def teamcity_client():
    """Create a TeamCityClient with test config."""
    from interactor.services.teamcity.client import TeamCityClient
    return TeamCityClient("http://teamcity.test/app/rest/", "user", "secret")


@pytest.fixture
def build_server_client():
    """Create a BuildServerClient with test config."""
    from interactor.services.buildserver.client import BuildServerClient
    return BuildServerClient("http://build-server.test")
