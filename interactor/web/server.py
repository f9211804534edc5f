"""
Status server exposing health and tracked builds.
"""

from aiohttp import web

from interactor.core.logging import get_logger
from interactor.state.builds import BuildsStore

logger = get_logger(__name__)

STORE_KEY = web.AppKey("store", BuildsStore)


async def handle_health(request: web.Request) -> web.Response:
    """Liveness probe."""
    return web.Response(status=200, text="OK")


async def handle_builds(request: web.Request) -> web.Response:
    """List builds currently tracked."""
    store = request.app[STORE_KEY]
    return web.json_response([build.to_dict() for build in store.snapshot()])


def create_status_app(store: BuildsStore) -> web.Application:
    app = web.Application()
    app[STORE_KEY] = store
    app.router.add_get("/health", handle_health)
    app.router.add_get("/builds", handle_builds)
    return app


async def start_status_server(store: BuildsStore, host: str = "0.0.0.0", port: int = 8081) -> web.AppRunner:
    """
    Start the status server.

    Args:
        store: Registry whose builds are listed
        host: Host to bind to
        port: Port to bind to

    Returns:
        The runner, to be cleaned up on shutdown
    """
    runner = web.AppRunner(create_status_app(store))
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"Status server started on {host}:{port}")
    return runner
