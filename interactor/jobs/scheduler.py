"""
Fixed-period asyncio job runner.
"""

import asyncio
from collections.abc import Awaitable, Callable

from interactor.core.logging import get_logger
from interactor.models.config import Job, JobConfig

logger = get_logger(__name__)

Tick = Callable[[], Awaitable[None]]


class JobScheduler:
    """Runs each configured job in its own task at a fixed period."""

    def __init__(self, config: JobConfig):
        self._config = config
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def job_names(self) -> list[str]:
        return list(self._tasks)

    def schedule(self, name: str, tick: Tick) -> asyncio.Task | None:
        """
        Start running `tick` on the schedule configured for `name`.

        Returns:
            The job task, or None when the job is not configured
        """
        job = self._config.get(name)
        if job is None:
            logger.info("Job %s is not configured, skipping", name)
            return None

        task = asyncio.create_task(self._run(job, tick), name=name)
        self._tasks[name] = task
        logger.info("Scheduled %s every %d ms after %d ms", name, job.period, job.initial_delay)
        return task

    async def _run(self, job: Job, tick: Tick) -> None:
        loop = asyncio.get_running_loop()
        await asyncio.sleep(job.initial_delay / 1000)
        while True:
            started = loop.time()
            await run_tick(job.name, tick)
            # Ticks never overlap: a slow tick delays only its own next run.
            await asyncio.sleep(max(0.0, job.period / 1000 - (loop.time() - started)))

    async def shutdown(self) -> None:
        """Cancel all job tasks and wait for them to stop."""
        for task in self._tasks.values():
            task.cancel()
        await asyncio.gather(*self._tasks.values(), return_exceptions=True)
        self._tasks.clear()


async def run_tick(name: str, tick: Tick) -> bool:
    """Run one tick, logging instead of raising on failure."""
    try:
        await tick()
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("Job %s failed", name)
        return False
    return True
