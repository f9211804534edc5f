"""
Lock-guarded storage for tracked builds.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable

from interactor.models.tracked import TrackedBuild


class BuildsStore:
    """
    Registry of in-flight builds keyed by TeamCity build id.

    Writers compute the next full list while holding the lock and the
    result replaces the registry in one step.
    """

    def __init__(self, builds: Iterable[TrackedBuild] = ()):
        self._lock = asyncio.Lock()
        self._builds: dict[str, TrackedBuild] = {}
        self._replace(builds)

    def _replace(self, builds: Iterable[TrackedBuild]) -> None:
        # Later entries win for a duplicated build id.
        self._builds = {build.build_id: build for build in builds}

    async def update(
        self,
        supplier: Callable[[list[TrackedBuild]], Awaitable[Iterable[TrackedBuild]]],
    ) -> list[TrackedBuild]:
        """Replace the registry with what `supplier` computes from the current one."""
        async with self._lock:
            builds = await supplier(list(self._builds.values()))
            self._replace(builds)
            return list(self._builds.values())

    def snapshot(self) -> list[TrackedBuild]:
        """Get all tracked builds."""
        return list(self._builds.values())

    def __len__(self) -> int:
        return len(self._builds)
