"""Async client for the YouTrack REST API."""

from typing import Any, Self
from urllib.parse import quote

import httpx
import structlog

from release_notes_publisher.release_notes.exceptions import FetchFailureError
from release_notes_publisher.release_notes.models import ReleaseIdentity
from release_notes_publisher.utils.constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_YOUTRACK_PROJECT,
    FIX_VERSION_QUERY_TEMPLATE,
    ISSUE_FIELDS,
    SECURITY_COUNT_QUERY_TEMPLATE,
)
from release_notes_publisher.utils.retry import retry_idempotent_request

logger = structlog.get_logger(__name__)

UNKNOWN_SECURITY_COUNT = -1


def build_fix_version_query(project: str, full_version_escaped: str) -> str:
    """Build the URL-encoded fix-version query around an already escaped version."""
    head, tail = FIX_VERSION_QUERY_TEMPLATE.split("{version}")
    return quote(head.format(project=project), safe=":") + full_version_escaped + quote(tail.format(), safe=":")


class YouTrackClient:
    """Reads issues, counts and versions from a YouTrack instance."""

    def __init__(
        self,
        base_url: str,
        token: str,
        project: str = DEFAULT_YOUTRACK_PROJECT,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client with the instance URL and a permanent token."""
        if not token:
            raise RuntimeError("YouTrack access requires a token.")
        self.base_url = base_url.rstrip("/")
        self.project = project
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    @retry_idempotent_request()
    async def _get(self, url: str) -> httpx.Response:
        response = await self.client.get(url)
        response.raise_for_status()
        return response

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, turning HTTP failures into FetchFailureError."""
        try:
            if method == "GET":
                return await self._get(url)
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as exc:
            logger.error(
                "YouTrack request failed",
                method=method,
                url=str(exc.request.url),
                status_code=exc.response.status_code,
            )
            raise FetchFailureError("YouTrack request failed", status_code=exc.response.status_code, url=str(exc.request.url)) from exc
        except httpx.HTTPError as exc:
            logger.error("YouTrack request could not be sent", method=method, url=url, error=str(exc))
            raise FetchFailureError(f"YouTrack request could not be sent: {exc}", url=url) from exc

    async def fetch_issues_raw(self, identity: ReleaseIdentity) -> str:
        """Return the raw JSON text of issues fixed in the release.

        Raises:
            FetchFailureError: On a non-success response or an empty body
        """
        query = build_fix_version_query(self.project, identity.full_version_escaped)
        url = f"/api/issues?fields={ISSUE_FIELDS}&query={query}"
        logger.info("Fetching fixed issues", full_version=identity.full_version, project=self.project)
        response = await self._request("GET", url)
        if not response.text.strip():
            logger.error("YouTrack returned an empty issue list body", full_version=identity.full_version)
            raise FetchFailureError("YouTrack returned an empty response", status_code=response.status_code, url=str(response.url))
        return response.text

    async def count_security_issues(self, identity: ReleaseIdentity) -> int:
        """Return the number of security problems fixed in the release, -1 if unknown."""
        query = SECURITY_COUNT_QUERY_TEMPLATE.format(project=self.project, version=identity.full_version)
        response = await self._request("POST", "/api/issuesGetter/count?fields=count", json={"query": query})
        try:
            data = response.json()
        except ValueError:
            data = None
        count = data.get("count") if isinstance(data, dict) else None
        if not isinstance(count, int) or isinstance(count, bool):
            logger.warning("YouTrack did not return a security issue count", body=response.text[:200])
            return UNKNOWN_SECURITY_COUNT
        logger.info("Counted security issues", full_version=identity.full_version, count=count)
        return count

    async def list_versions(self, bundle_id: str) -> list[str]:
        """Return the names of the versions in a version bundle."""
        response = await self._request("GET", f"/api/admin/customFieldSettings/bundles/version/{bundle_id}?fields=values(name)")
        data = response.json()
        values = (data.get("values") or []) if isinstance(data, dict) else []
        versions = [value["name"] for value in values if isinstance(value, dict) and value.get("name")]
        logger.info("Listed versions", bundle_id=bundle_id, count=len(versions))
        return versions
