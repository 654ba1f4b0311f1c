"""Catalog client base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from app.core.config import Settings, get_settings
from app.core.errors import NotFoundError, UpstreamError
from app.core.http import HttpClient


class CatalogClient(ABC):
    """Abstract base class for catalog API clients.

    Subclasses set ``base_url``/``headers`` and call :meth:`_get`. Statuses
    listed in ``not_found_statuses`` are raised as :class:`NotFoundError` so
    callers can tell "content absent" from "service broken".
    """

    not_found_statuses: frozenset[int] = frozenset({404})

    def __init__(self, http: HttpClient, settings: Settings | None = None):
        self._settings = settings or get_settings()
        self.http = http

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique name of this catalog."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        pass

    @property
    def headers(self) -> Dict[str, str]:
        return {"accept": "application/json"}

    async def _get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            return await self.http.request(
                url, headers=self.headers, base_url=self.base_url, params=params
            )
        except UpstreamError as exc:
            if exc.status_code in self.not_found_statuses:
                raise NotFoundError(
                    f"{self.name}: {url} not found",
                    status_code=exc.status_code,
                    body=exc.body,
                ) from exc
            raise
