"""
Aggregated pass/fail state of TeamCity project trees.
"""

from interactor.core.exceptions import TeamCityNotFoundError
from interactor.core.logging import get_logger
from interactor.models.config import ProjectRef
from interactor.models.status import BuildStatus, classify
from interactor.services.teamcity import TeamCityClient

logger = get_logger(__name__)


class ProjectStateAggregator:
    """Collects the builds that are not green below a set of projects."""

    def __init__(self, teamcity: TeamCityClient):
        self._teamcity = teamcity

    async def failing_builds(self, projects: list[ProjectRef]) -> set[str]:
        """
        Walk every project tree and return names of builds not in SUCCESS.

        An excluded project id skips the whole subtree, an excluded build id
        skips only that build. Sub-projects inherit the exclusion of the
        project they were reached from. Build types without builds and
        missing projects are ignored.

        Raises:
            TeamCityAPIError: Any TeamCity error other than 404, which aborts
                the whole aggregation
        """
        failing: set[str] = set()
        for project in projects:
            failing |= await self._failing_in(project)
        return failing

    async def _failing_in(self, ref: ProjectRef) -> set[str]:
        if ref.is_excluded:
            logger.debug("Skipping excluded project %s", ref.id)
            return set()

        try:
            project = await self._teamcity.project(ref.id)
        except TeamCityNotFoundError:
            logger.warning("Project %s not found, skipping", ref.id)
            return set()

        failing: set[str] = set()
        for build_type_id in project.build_type_ids:
            if build_type_id in ref.exclusion.builds:
                continue
            try:
                build = await self._teamcity.state(build_type_id)
            except TeamCityNotFoundError:
                logger.info("No builds found for %s, ignoring", build_type_id)
                continue
            if classify(build.state, build.status) is not BuildStatus.SUCCESS:
                failing.add(build.build_type.display_name)

        for project_id in project.project_ids:
            failing |= await self._failing_in(ProjectRef(id=project_id, exclusion=ref.exclusion))

        return failing
