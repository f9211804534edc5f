"""
Application factory and main entry point.
"""

import asyncio
from dataclasses import dataclass

from interactor.core.config import Settings, settings
from interactor.core.logging import setup_logging, get_logger
from interactor.jobs import register_jobs
from interactor.jobs.scheduler import JobScheduler
from interactor.models.config import load_build_config, load_job_config
from interactor.services.aggregator import ProjectStateAggregator
from interactor.services.buildserver import BuildServerClient
from interactor.services.reporting import ReportingClient
from interactor.services.resolver import IdentityResolver
from interactor.services.state_reporter import GroupStateReporter
from interactor.services.teamcity import TeamCityClient
from interactor.services.tracker import BuildTracker
from interactor.state.builds import BuildsStore
from interactor.web.server import start_status_server

logger = get_logger(__name__)


@dataclass
class Application:
    """Wired application components."""

    store: BuildsStore
    build_server: BuildServerClient
    tracker: BuildTracker
    reporter: GroupStateReporter
    scheduler: JobScheduler


def create_app(config: Settings) -> Application:
    """Load static configuration and wire all components."""
    build_config = load_build_config(config.build_config_path)
    job_config = load_job_config(config.job_config_path)

    teamcity = TeamCityClient(
        config.teamcity_url,
        config.teamcity_username,
        config.teamcity_password,
        timeout=config.http_timeout,
    )
    build_server = BuildServerClient(config.build_server_url, timeout=config.http_timeout)
    reporting = ReportingClient(timeout=config.http_timeout)
    resolver = IdentityResolver(build_config, teamcity)
    store = BuildsStore()

    return Application(
        store=store,
        build_server=build_server,
        tracker=BuildTracker(store, resolver, build_server, teamcity, reporting),
        reporter=GroupStateReporter(resolver, ProjectStateAggregator(teamcity), build_server, reporting),
        scheduler=JobScheduler(job_config),
    )


async def main() -> None:
    """Main application entry point."""
    setup_logging(settings.log_level)
    logger.info("Starting interactor...")

    application = create_app(settings)
    register_jobs(application.scheduler, application.build_server, application.tracker, application.reporter)
    runner = await start_status_server(application.store, settings.status_host, settings.status_port)

    logger.info("Jobs running: %s", ", ".join(application.scheduler.job_names) or "none")

    # Keep running until cancelled
    stop_signal = asyncio.Event()
    try:
        await stop_signal.wait()
    except asyncio.CancelledError:
        pass
    finally:
        # Graceful shutdown
        await application.scheduler.shutdown()
        await runner.cleanup()
