"""
Periodic jobs registration.
"""

from interactor.jobs.scheduler import JobScheduler
from interactor.services.buildserver import BuildServerClient, RequestKind
from interactor.services.state_reporter import GroupStateReporter
from interactor.services.tracker import BuildTracker

TRIGGER_BUILDS = "triggerBuilds"
WATCH_BUILDS = "watchBuilds"
CANCEL_BUILDS = "cancelBuilds"
WATCH_STATE = "watchState"


def register_jobs(
    scheduler: JobScheduler,
    build_server: BuildServerClient,
    tracker: BuildTracker,
    reporter: GroupStateReporter,
) -> None:
    """Register all periodic jobs with the scheduler."""

    async def trigger_builds() -> None:
        await tracker.trigger(await build_server.list_pending(RequestKind.BUILD))

    async def cancel_builds() -> None:
        await tracker.cancel(await build_server.list_pending(RequestKind.CANCEL))

    async def watch_state() -> None:
        await reporter.report(await build_server.list_pending(RequestKind.STATE))

    scheduler.schedule(TRIGGER_BUILDS, trigger_builds)
    scheduler.schedule(WATCH_BUILDS, tracker.watch)
    scheduler.schedule(CANCEL_BUILDS, cancel_builds)
    scheduler.schedule(WATCH_STATE, watch_state)
