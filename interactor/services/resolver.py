"""
Resolution of request ids to configured builds and project groups.
"""

from interactor.core.exceptions import TeamCityNotFoundError
from interactor.core.logging import get_logger
from interactor.models.config import BuildConfig, BuildDefinition, ProjectRef
from interactor.services.teamcity import TeamCityClient

logger = get_logger(__name__)


class IdentityResolver:
    """Maps build server request ids to the build configuration."""

    def __init__(self, config: BuildConfig, teamcity: TeamCityClient):
        self._config = config
        self._teamcity = teamcity

    def resolve_build(self, request_id: str) -> BuildDefinition | None:
        """Find the first build whose names contain `request_id`, ignoring case."""
        return next((build for build in self._config.builds if build.matches(request_id)), None)

    async def resolve_group(self, request_id: str) -> list[ProjectRef] | None:
        """
        Find the project roots of the group named by `request_id`.

        Exact names are tried first. Otherwise the first single-group regex
        name matching the whole id is used and its capture is put into every
        project id of that group; such a group only resolves when at least
        one of its (non self-excluded) projects exists on TeamCity.

        Raises:
            TeamCityAPIError: If the existence check fails other than with 404
        """
        for group in self._config.groups:
            if group.matches(request_id):
                return list(group.projects)

        for group in self._config.groups:
            for pattern in group.patterns():
                match = pattern.fullmatch(request_id)
                if match is None:
                    continue
                projects = [project.substitute(match.group(1) or "") for project in group.projects]
                if await self._any_exists(projects):
                    return projects
                logger.info("Group %s matched %s but none of its projects exist", request_id, pattern.pattern)
                return None

        return None

    async def _any_exists(self, projects: list[ProjectRef]) -> bool:
        for project in projects:
            if project.is_excluded:
                continue
            try:
                await self._teamcity.project(project.id)
            except TeamCityNotFoundError:
                logger.info("Project %s does not exist", project.id)
                continue
            return True
        return False
