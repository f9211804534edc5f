"""
Build server API client for pending build, cancel and state requests.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from interactor.core.exceptions import BuildServerAPIError
from interactor.core.logging import get_logger
from .schemas import QueueRequest, RequestKind

logger = get_logger(__name__)


class BuildServerClient:
    """HTTP client for the build server request queues."""

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _request(self, method: str, kind: RequestKind, **kwargs: Any) -> httpx.Response:
        url = f"{self._base_url}/{kind.value}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Build server error %s on %s /%s: %s", exc.response.status_code, method, kind.value, exc.response.text)
            raise BuildServerAPIError(f"Build server error: {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error("Build server request failed: %s", exc)
            raise BuildServerAPIError("Build server request failed") from exc

        return response

    async def list_pending(self, kind: RequestKind) -> list[QueueRequest]:
        """
        Fetch pending requests of the given kind.

        Raises:
            BuildServerAPIError: If API call fails or the payload is not a request list
        """
        response = await self._request("GET", kind, headers={"Accept": "application/json"})

        try:
            data = response.json()
        except ValueError as exc:
            raise BuildServerAPIError("Build server returned invalid JSON") from exc

        if not isinstance(data, list):
            raise BuildServerAPIError("Build server returned unexpected payload")

        try:
            return [QueueRequest.model_validate(item) for item in data]
        except ValidationError as exc:
            raise BuildServerAPIError(f"Build server returned malformed {kind.value} requests") from exc

    async def delete(self, kind: RequestKind, request_id: str) -> None:
        """Remove a handled request from its queue."""
        await self._request(
            "DELETE",
            kind,
            headers={"Content-Type": "application/json"},
            json={"id": request_id},
        )
        logger.info("Deleted %s request %s", kind.value, request_id)
