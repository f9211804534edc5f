"""
TeamCity REST API client.
"""

from xml.parsers.expat import ExpatError

import httpx

from interactor.core.exceptions import TeamCityAPIError, TeamCityNotFoundError
from interactor.core.logging import get_logger
from interactor.models.teamcity import Build, Project, build_request_xml, cancel_request_xml

logger = get_logger(__name__)

QUEUE_PATH = "buildQueue"
BUILDS_PATH = "builds"

_PARSE_ERRORS = (ExpatError, KeyError, TypeError, AttributeError)


class TeamCityClient:
    """Client for the TeamCity REST API (XML payloads, basic auth)."""

    def __init__(self, base_url: str, username: str, password: str, timeout: float = 10.0):
        self._base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(username, password)
        self._timeout = timeout
        self._headers = {
            "Accept": "application/xml",
            "Content-Type": "application/xml",
        }

    async def _request(self, method: str, path: str, content: str | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers,
                    auth=self._auth,
                    content=content,
                )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise TeamCityNotFoundError(f"TeamCity resource not found: {method} {path}") from exc
            logger.error("TeamCity API error %s on %s %s: %s", exc.response.status_code, method, path, exc.response.text)
            raise TeamCityAPIError(f"TeamCity API error: {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error("TeamCity request %s %s failed: %s", method, path, exc)
            raise TeamCityAPIError("TeamCity request failed") from exc

        return response

    async def _get_build(self, path: str) -> Build:
        response = await self._request("GET", path)
        try:
            return Build.from_xml(response.content)
        except _PARSE_ERRORS as exc:
            raise TeamCityAPIError(f"TeamCity returned an unexpected build payload for {path}") from exc

    async def build(self, build_type_id: str) -> Build:
        """
        Put a build of the given build type into the queue.

        Returns:
            The queued build as reported by TeamCity

        Raises:
            TeamCityAPIError: If API call fails
        """
        response = await self._request("POST", f"/{QUEUE_PATH}", build_request_xml(build_type_id))
        try:
            return Build.from_xml(response.content)
        except _PARSE_ERRORS as exc:
            raise TeamCityAPIError("TeamCity returned an unexpected build payload") from exc

    async def status(self, build_id: str) -> Build:
        """Fetch the current snapshot of a queued, running or finished build."""
        return await self._get_build(f"/{QUEUE_PATH}/id:{build_id}")

    async def state(self, build_type_id: str) -> Build:
        """
        Fetch the latest build of a build type.

        Raises:
            TeamCityNotFoundError: If the build type has no builds or does not exist
            TeamCityAPIError: If API call fails
        """
        return await self._get_build(f"/{BUILDS_PATH}/buildType:{build_type_id}")

    async def project(self, project_id: str) -> Project:
        """
        Fetch a project with its build types and sub-projects.

        Raises:
            TeamCityNotFoundError: If the project does not exist
            TeamCityAPIError: If API call fails
        """
        response = await self._request("GET", f"/projects/id:{project_id}")
        try:
            return Project.from_xml(response.content)
        except _PARSE_ERRORS as exc:
            raise TeamCityAPIError(f"TeamCity returned an unexpected project payload for {project_id}") from exc

    async def cancel(self, path: str, build_id: str) -> None:
        """Cancel a build through the queue (`buildQueue`) or builds (`builds`) resource."""
        await self._request("POST", f"/{path}/id:{build_id}", cancel_request_xml())
        logger.info("Cancelled build %s via %s", build_id, path)
