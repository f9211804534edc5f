"""
Client posting reports to per-request response URLs.
"""

import httpx

from interactor.core.exceptions import ReportingAPIError
from interactor.core.logging import get_logger
from .schemas import Report

logger = get_logger(__name__)


class ReportingClient:
    """Posts block reports to webhook URLs."""

    def __init__(self, timeout: float = 10.0):
        self._timeout = timeout

    async def report(self, url: str, report: Report) -> None:
        """
        Send a report to the given response URL.

        Raises:
            ReportingAPIError: If the webhook rejects the report or is unreachable
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    headers={"Content-Type": "application/json"},
                    json=report.to_dict(),
                )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Reporting error %s for %s: %s", exc.response.status_code, url, exc.response.text)
            raise ReportingAPIError(f"Reporting error: {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error("Reporting request to %s failed: %s", url, exc)
            raise ReportingAPIError("Reporting request failed") from exc

        logger.info("Reported to %s: %s", url, " | ".join(message.text for message in report.messages))
