"""
Reports aggregated build state of project groups.
"""

from interactor.core.exceptions import InteractorError
from interactor.core.logging import get_logger
from interactor.models.status import BuildStatus
from interactor.services.aggregator import ProjectStateAggregator
from interactor.services.buildserver import BuildServerClient, QueueRequest, RequestKind
from interactor.services.reporting import Report, ReportingClient
from interactor.services.resolver import IdentityResolver

logger = get_logger(__name__)


def state_report(group_id: str, failing: set[str]) -> Report:
    """Build the report for a group given its failing build names."""
    if not failing:
        return Report.of(f"All *{group_id}* builds are successful!", BuildStatus.SUCCESS)
    lines = "\n".join(f"*{name}*" for name in sorted(failing))
    return Report.of(f"Following *{group_id}* builds are currently failing:\n{lines}", BuildStatus.FAILURE)


class GroupStateReporter:
    """Answers state requests with the failing builds of a project group."""

    def __init__(
        self,
        resolver: IdentityResolver,
        aggregator: ProjectStateAggregator,
        build_server: BuildServerClient,
        reporting: ReportingClient,
    ):
        self._resolver = resolver
        self._aggregator = aggregator
        self._build_server = build_server
        self._reporting = reporting

    async def report(self, requests: list[QueueRequest]) -> None:
        """
        Send one state report per distinct request and delete the request.

        A request that fails stays queued without affecting the others.
        """
        seen: set[str] = set()
        for request in requests:
            if request.id in seen:
                continue
            seen.add(request.id)
            try:
                await self._report_one(request)
            except InteractorError:
                logger.exception("Failed to report state of group %s", request.id)

    async def _report_one(self, request: QueueRequest) -> None:
        projects = await self._resolver.resolve_group(request.id)
        if projects is None:
            logger.warning("No group configured for request %s", request.id)
            report = Report.of(f"{request.id} group is not found", BuildStatus.NOT_FOUND)
        else:
            failing = await self._aggregator.failing_builds(projects)
            logger.info("Group %s has %d failing builds", request.id, len(failing))
            report = state_report(request.id, failing)

        await self._reporting.report(request.response_url, report)
        await self._build_server.delete(RequestKind.STATE, request.id)
