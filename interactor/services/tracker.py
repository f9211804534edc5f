"""
Build lifecycle tracking: trigger, watch and cancel TeamCity builds.
"""

from interactor.core.exceptions import APIError, TeamCityNotFoundError, UnknownBuildStatusError
from interactor.core.logging import get_logger
from interactor.models.status import BuildStatus, classify
from interactor.models.tracked import TrackedBuild
from interactor.services.buildserver import BuildServerClient, QueueRequest, RequestKind
from interactor.services.reporting import Report, ReportingClient
from interactor.services.resolver import IdentityResolver
from interactor.services.teamcity import BUILDS_PATH, QUEUE_PATH, Build, TeamCityClient
from interactor.state.builds import BuildsStore

logger = get_logger(__name__)

# Lifecycle state recorded for a build TeamCity has just accepted.
SUBMITTED_STATE = "none"
FINISHED_STATE = "finished"


def build_message(build: Build, status: BuildStatus) -> str:
    """Text of a build transition notification."""
    number = f"*{build.number}* " if build.number else ""
    return f"*{build.build_type.display_name}* build {number}is {status.label}"


class BuildTracker:
    """Owns the tracked builds registry and drives it from TeamCity state."""

    def __init__(
        self,
        store: BuildsStore,
        resolver: IdentityResolver,
        build_server: BuildServerClient,
        teamcity: TeamCityClient,
        reporting: ReportingClient,
    ):
        self._store = store
        self._resolver = resolver
        self._build_server = build_server
        self._teamcity = teamcity
        self._reporting = reporting

    async def trigger(self, requests: list[QueueRequest]) -> None:
        """
        Submit a TeamCity build for every resolvable build request.

        Unknown names are answered with a not found report. Each handled
        request is deleted from the build server; a request that hit an API
        error stays queued for the next run.
        """
        if not requests:
            return

        async def supplier(builds: list[TrackedBuild]) -> list[TrackedBuild]:
            tracked = list(builds)
            for request in requests:
                try:
                    await self._trigger_one(request, tracked)
                except APIError:
                    logger.exception("Failed to trigger build for request %s", request.id)
            return tracked

        builds = await self._store.update(supplier)
        logger.info("triggerBuilds: %d tracked builds", len(builds))

    async def _trigger_one(self, request: QueueRequest, tracked: list[TrackedBuild]) -> None:
        definition = self._resolver.resolve_build(request.id)
        if definition is None:
            logger.warning("No build configured for request %s", request.id)
            await self._reporting.report(
                request.response_url,
                Report.of(f"{request.id} build is not found", BuildStatus.NOT_FOUND),
            )
        else:
            build = await self._teamcity.build(definition.id)
            tracked.append(TrackedBuild(build.with_state(SUBMITTED_STATE), request.response_url))
            logger.info("Triggered %s as TeamCity build %s", definition.id, build.id)

        await self._build_server.delete(RequestKind.BUILD, request.id)

    async def watch(self) -> None:
        """
        Poll every tracked build and report state changes.

        Finished builds and builds TeamCity no longer knows are dropped after
        their report. A build whose poll or report fails keeps its previous
        entry without affecting the others.
        """
        if len(self._store) == 0:
            return

        async def supplier(builds: list[TrackedBuild]) -> list[TrackedBuild]:
            remaining = []
            for tracked in builds:
                latest = await self._watch_one(tracked)
                if latest is not None:
                    remaining.append(latest)
            return remaining

        builds = await self._store.update(supplier)
        logger.info("watchBuilds: %d tracked builds", len(builds))

    async def _watch_one(self, tracked: TrackedBuild) -> TrackedBuild | None:
        try:
            return await self._poll(tracked)
        except (APIError, UnknownBuildStatusError):
            logger.exception("Failed to watch build %s", tracked.build_id)
            return tracked

    async def _poll(self, tracked: TrackedBuild) -> TrackedBuild | None:
        try:
            latest = await self._teamcity.status(tracked.build_id)
        except TeamCityNotFoundError:
            logger.warning("Build %s is gone from TeamCity", tracked.build_id)
            status = BuildStatus.NOT_FOUND
            await self._reporting.report(tracked.response_url, Report.of(build_message(tracked.build, status), status))
            return None

        if latest.state != tracked.build.state:
            status = classify(latest.state, latest.status)
            await self._reporting.report(tracked.response_url, Report.of(build_message(latest, status), status))

        if latest.state == FINISHED_STATE:
            logger.info("Build %s finished with status %s", latest.id, latest.status)
            return None
        return TrackedBuild(latest, tracked.response_url)

    async def cancel(self, requests: list[QueueRequest]) -> None:
        """
        Cancel tracked builds of the build types named by cancel requests.

        Requests naming no build, or a build with nothing tracked, are
        answered with a not found report. Every distinct request id is
        deleted from the build server once.
        """
        distinct: dict[str, QueueRequest] = {}
        for request in requests:
            distinct.setdefault(request.id, request)

        buckets: dict[str | None, list[QueueRequest]] = {}
        for request in distinct.values():
            definition = self._resolver.resolve_build(request.id)
            buckets.setdefault(definition.id if definition else None, []).append(request)

        tracked = self._store.snapshot()
        for build_type_id, bucket in buckets.items():
            build_ids = [build.build_id for build in tracked if build_type_id and build.build_type_id == build_type_id]
            try:
                if build_ids:
                    for build_id in build_ids:
                        await self._cancel_build(build_id)
                else:
                    for request in bucket:
                        await self._reporting.report(
                            request.response_url,
                            Report.of(f"No queued/running {request.id} build is found", BuildStatus.NOT_FOUND),
                        )
            except APIError:
                logger.exception("Failed to cancel builds of %s", build_type_id)

        for request_id in distinct:
            try:
                await self._build_server.delete(RequestKind.CANCEL, request_id)
            except APIError:
                logger.exception("Failed to delete cancel request %s", request_id)

    async def _cancel_build(self, build_id: str) -> None:
        try:
            await self._teamcity.cancel(QUEUE_PATH, build_id)
        except TeamCityNotFoundError:
            # Already left the queue.
            await self._teamcity.cancel(BUILDS_PATH, build_id)
