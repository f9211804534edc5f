"""
Tests for TeamCity service.
"""

import pytest
from unittest.mock import patch, AsyncMock, MagicMock
import httpx


def _response(status_code=200, content=b""):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode()
    if status_code >= 400:
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("error", request=MagicMock(), response=response)
        )
    else:
        response.raise_for_status = MagicMock()
    return response


class TestSchemas:
    """Tests for TeamCity XML schemas."""

    def test_build_from_attributes(self):
        """Test parsing a build described with attributes, as TeamCity does."""
        from interactor.models.teamcity import Build

        build = Build.from_xml(
            '<build id="100" buildTypeId="bt1" number="17" state="finished" status="SUCCESS">'
            '<buildType id="bt1" name="Deploy"/></build>'
        )

        assert build.id == "100"
        assert build.number == "17"
        assert build.state == "finished"
        assert build.status == "SUCCESS"
        assert build.build_type.id == "bt1"
        assert build.build_type.display_name == "Deploy"

    def test_build_from_elements(self):
        """Test parsing a build described with child elements."""
        from interactor.models.teamcity import Build

        build = Build.from_xml(
            '<build><buildType id="bt1"></buildType><id>teamCityBuildId</id>'
            '<state>queued</state></build>'
        )

        assert build.id == "teamCityBuildId"
        assert build.state == "queued"
        assert build.number is None
        assert build.status is None
        assert build.build_type.display_name == "bt1"

    def test_build_with_state(self):
        from interactor.models.teamcity import Build

        build = Build.from_xml('<build id="1" state="queued"><buildType id="bt1"/></build>')

        assert build.with_state("none").state == "none"
        assert build.with_state("none").id == "1"

    def test_project_from_xml(self):
        """Test parsing project build types and sub-projects."""
        from interactor.models.teamcity import Project

        project = Project.from_xml(
            '<project id="P1">'
            '<buildTypes count="2"><buildType id="B1"/><buildType id="B2"/></buildTypes>'
            '<projects count="1"><project id="P2"/></projects>'
            '</project>'
        )

        assert project.id == "P1"
        assert project.build_type_ids == ["B1", "B2"]
        assert project.project_ids == ["P2"]

    def test_project_without_children(self):
        from interactor.models.teamcity import Project

        project = Project.from_xml('<project id="P1"><buildTypes count="0"/></project>')

        assert project.build_type_ids == []
        assert project.project_ids == []

    def test_request_bodies(self):
        from interactor.models.teamcity import build_request_xml, cancel_request_xml

        assert build_request_xml("bt1") == '<build><buildType id="bt1"></buildType></build>'
        assert 'comment="Build cancelled by the user"' in cancel_request_xml()
        assert 'readdIntoQueue="false"' in cancel_request_xml()


class TestTeamCityClient:
    """Tests for TeamCityClient class."""

    def test_init(self, teamcity_client):
        """Test client initialization."""
        assert teamcity_client._base_url == "http://teamcity.test/app/rest"
        assert teamcity_client._headers["Accept"] == "application/xml"

    @pytest.mark.asyncio
    async def test_build_posts_to_queue(self, teamcity_client):
        """Test build submission."""
        mock_response = _response(content=b'<build id="7" state="queued"><buildType id="bt1"/></build>')

        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(return_value=mock_response)

            build = await teamcity_client.build("bt1")

            assert build.id == "7"
            call = client_instance.request.call_args
            assert call.args == ("POST", "http://teamcity.test/app/rest/buildQueue")
            assert call.kwargs["content"] == '<build><buildType id="bt1"></buildType></build>'
            assert call.kwargs["headers"]["Content-Type"] == "application/xml"

    @pytest.mark.asyncio
    async def test_status_path(self, teamcity_client):
        mock_response = _response(content=b'<build id="7" state="running"><buildType id="bt1"/></build>')

        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(return_value=mock_response)

            build = await teamcity_client.status("7")

            assert build.state == "running"
            assert client_instance.request.call_args.args[1] == "http://teamcity.test/app/rest/buildQueue/id:7"

    @pytest.mark.asyncio
    async def test_state_not_found_raises(self, teamcity_client):
        """Test that 404 is reported as TeamCityNotFoundError."""
        from interactor.core.exceptions import TeamCityNotFoundError

        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(return_value=_response(status_code=404))

            with pytest.raises(TeamCityNotFoundError):
                await teamcity_client.state("bt1")

            assert client_instance.request.call_args.args[1] == "http://teamcity.test/app/rest/builds/buildType:bt1"

    @pytest.mark.asyncio
    async def test_server_error_raises(self, teamcity_client):
        """Test that other HTTP errors are not reported as not found."""
        from interactor.core.exceptions import TeamCityAPIError, TeamCityNotFoundError

        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(return_value=_response(status_code=500, content=b"oops"))

            with pytest.raises(TeamCityAPIError) as exc_info:
                await teamcity_client.project("P1")

            assert not isinstance(exc_info.value, TeamCityNotFoundError)

    @pytest.mark.asyncio
    async def test_network_error_raises(self, teamcity_client):
        from interactor.core.exceptions import TeamCityAPIError

        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(side_effect=httpx.ConnectError("Network error"))

            with pytest.raises(TeamCityAPIError):
                await teamcity_client.status("7")

    @pytest.mark.asyncio
    async def test_invalid_payload_raises(self, teamcity_client):
        from interactor.core.exceptions import TeamCityAPIError

        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(return_value=_response(content=b"not xml"))

            with pytest.raises(TeamCityAPIError):
                await teamcity_client.status("7")

    @pytest.mark.asyncio
    async def test_cancel_path(self, teamcity_client):
        with patch("httpx.AsyncClient") as mock_client:
            client_instance = mock_client.return_value.__aenter__.return_value
            client_instance.request = AsyncMock(return_value=_response())

            await teamcity_client.cancel("builds", "7")

            call = client_instance.request.call_args
            assert call.args == ("POST", "http://teamcity.test/app/rest/builds/id:7")
            assert "buildCancelRequest" in call.kwargs["content"]
