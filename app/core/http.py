"""Async HTTP client shared by the catalog providers."""

import logging
from typing import Any, Mapping

import niquests

from app.core.config import Settings, get_settings
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def join_url(base_url: str | None, url: str) -> str:
    """Join a base URL and a relative path the way fetch wrappers do."""
    if not base_url or url.startswith(("http://", "https://")):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


class HttpClient:
    """Thin JSON client around a niquests async session.

    Every call either returns the decoded JSON body or raises
    :class:`UpstreamError` carrying the status code. There is no retry.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: niquests.AsyncSession | None = None,
    ):
        settings = settings or get_settings()
        if session is None:
            session = niquests.AsyncSession()
            if settings.proxy:
                session.proxies = {"http": settings.proxy, "https": settings.proxy}
        self.session = session

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        base_url: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform a request and return its JSON payload."""
        full_url = join_url(base_url, url)
        try:
            response = await self.session.request(
                method, full_url, headers=dict(headers or {}), params=params
            )
        except niquests.exceptions.RequestException as exc:
            logger.error("Request to %s failed: %s", full_url, exc)
            raise UpstreamError(f"Request to {full_url} failed") from exc

        status = response.status_code or 0
        if not 200 <= status < 300:
            logger.debug("%s %s answered %s", method, full_url, status)
            raise UpstreamError(
                f"{method} {full_url} answered {status}",
                status_code=status,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Invalid JSON from {full_url}", status_code=status
            ) from exc

    async def aclose(self) -> None:
        """Properly close the internal HTTP session."""
        if self.session:
            await self.session.close()
