"""Poster URLs from the OMDb image API, spread over a pool of API keys."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from app.core.config import Settings, get_settings
from app.core.errors import PosterResolutionFailure, UpstreamError
from app.core.http import HttpClient

logger = logging.getLogger(__name__)


@dataclass
class PosterKey:
    key: str
    available: bool = True


class PosterKeyPool:
    """Ordered OMDb keys; exhausted keys are skipped until restart."""

    def __init__(self, keys: Iterable[str]):
        self.keys: List[PosterKey] = [PosterKey(key) for key in keys]

    def current(self) -> Optional[str]:
        """First available key, or the first key when all are exhausted."""
        if not self.keys:
            return None
        for entry in self.keys:
            if entry.available:
                return entry.key
        return self.keys[0].key

    def mark_exhausted(self, key: str) -> None:
        for entry in self.keys:
            if entry.key == key:
                entry.available = False

    def __len__(self) -> int:
        return len(self.keys)


def _is_rate_limited(exc: UpstreamError) -> bool:
    # OMDb answers 401 {"Error": "Request limit reached!"}
    if exc.status_code == 429:
        return True
    return exc.status_code == 401 and "limit" in (exc.body or "").lower()


class PosterResolver:
    """Resolves and memoizes poster URLs per media identifier.

    The key pool and the memo are plain in-process state. They are only
    touched from the event loop, so concurrent resolutions interleave at
    ``await`` points; the worst outcome is a URL built from a key that was
    exhausted a moment earlier.
    """

    def __init__(
        self,
        pool: PosterKeyPool,
        http: HttpClient | None = None,
        settings: Settings | None = None,
    ):
        self._settings = settings or get_settings()
        self.pool = pool
        self.http = http
        self.resolved: Dict[str, str] = {}

    @property
    def placeholder(self) -> str:
        return self._settings.poster_placeholder_url

    def build_url(self, key: str, external_id: str) -> str:
        return f"{self._settings.omdb_image_base}?apikey={key}&i={external_id}"

    async def _probe(self, key: str, external_id: str) -> bool:
        """Ask OMDb whether ``key`` still works. False means rate limited."""
        try:
            data = await self.http.request(
                self._settings.omdb_api_base, params={"apikey": key, "i": external_id}
            )
        except UpstreamError as exc:
            if _is_rate_limited(exc):
                return False
            raise PosterResolutionFailure(
                f"OMDb probe failed for {external_id}"
            ) from exc
        if isinstance(data, dict) and "limit" in str(data.get("Error", "")).lower():
            return False
        return True

    async def resolve_poster(
        self, identifier: str, external_id: Optional[str]
    ) -> Optional[str]:
        """Return a poster URL, the placeholder, or None if OMDb is unreachable."""
        if identifier and identifier in self.resolved:
            return self.resolved[identifier]

        key = self.pool.current()
        if not external_id or key is None:
            return self.placeholder

        if self._settings.poster_probe and self.http is not None:
            try:
                usable = await self._probe(key, external_id)
            except PosterResolutionFailure as exc:
                logger.warning("%s: %s", exc, exc.__cause__)
                return None
            if not usable:
                logger.warning("OMDb key #%d hit its request limit", self._index(key))
                self.pool.mark_exhausted(key)
                key = self.pool.current()

        url = self.build_url(key, external_id)
        if identifier:
            self.resolved[identifier] = url
        return url

    def _index(self, key: str) -> int:
        for index, entry in enumerate(self.pool.keys):
            if entry.key == key:
                return index
        return -1
