"""Search and detail lookups across the catalog providers."""

import asyncio
import logging
from functools import lru_cache
from typing import List, Optional

from app.core.cache import ResultCache
from app.core.config import Settings, get_settings
from app.core.http import HttpClient
from app.models.catalog import CatalogSeasonDetail
from app.models.media import DetailedMeta, MediaMeta, MediaQuery, MediaType
from app.models.tmdb import TMDBMovieResult, TMDBShowData, TMDBShowResult
from app.providers.justwatch import JustWatchClient, pick_external_id
from app.providers.tmdb import TMDBClient
from app.services.ids import canonical_id
from app.services.normalize import (
    format_justwatch_result,
    format_justwatch_season,
    format_tmdb_meta_result,
    format_tmdb_search_result,
    format_tmdb_season,
    to_internal_meta,
)
from app.services.posters import PosterKeyPool, PosterResolver

logger = logging.getLogger(__name__)


def same_query(a: MediaQuery, b: MediaQuery) -> bool:
    """Queries match on media type and whitespace-trimmed text."""
    return a.type == b.type and a.search_query.strip() == b.search_query.strip()


class MetadataService:
    """Entry point used by the API layer.

    Owns the catalog clients, the poster resolver and the search cache so
    their state lives exactly as long as the service instance.
    """

    def __init__(
        self,
        tmdb: TMDBClient,
        justwatch: JustWatchClient,
        posters: PosterResolver,
        settings: Settings | None = None,
        search_cache: ResultCache[MediaQuery, List[MediaMeta]] | None = None,
    ):
        self._settings = settings or get_settings()
        self.tmdb = tmdb
        self.justwatch = justwatch
        self.posters = posters
        self.search_cache = search_cache or ResultCache(compare=same_query)

    async def _format_search_hit(
        self, result: TMDBMovieResult | TMDBShowResult, media_type: MediaType
    ) -> MediaMeta:
        imdb_id = None
        if media_type == MediaType.MOVIE:
            details = await self.tmdb.get_details(str(result.id), media_type)
            imdb_id = getattr(details, "imdb_id", None)
        poster = await self.posters.resolve_poster(
            canonical_id(media_type, str(result.id)), imdb_id
        )
        return to_internal_meta(format_tmdb_search_result(result, media_type, poster))

    async def search(self, query: MediaQuery) -> List[MediaMeta]:
        """Search the primary catalog, reusing recent identical queries."""
        cached = self.search_cache.get(query)
        if cached is not None:
            logger.debug("Search cache hit for %r (%s)", query.search_query, query.type.value)
            return list(cached)

        results = await self.tmdb.search(query.search_query, query.type)
        metas = await asyncio.gather(
            *[self._format_search_hit(r, query.type) for r in results]
        )
        metas = list(metas)
        self.search_cache.set(query, metas, self._settings.search_cache_ttl)
        return metas

    async def get_meta_from_id(
        self, media_type: MediaType, tmdb_id: str, season_id: Optional[str] = None
    ) -> Optional[DetailedMeta]:
        """Full record for a TMDB id, with one season's episodes for series."""
        details = await self.tmdb.get_details(tmdb_id, media_type)
        if details is None:
            return None

        external_ids = await self.tmdb.get_external_ids(tmdb_id, media_type)
        imdb_id = external_ids.imdb_id

        season_data: Optional[CatalogSeasonDetail] = None
        if isinstance(details, TMDBShowData) and details.seasons:
            selected = next(
                (s for s in details.seasons if str(s.id) == season_id), None
            )
            if selected is None:
                selected = next(
                    (s for s in details.seasons if s.season_number == 1), None
                )
            if selected is None:
                selected = min(details.seasons, key=lambda s: s.season_number)

            episodes = await self.tmdb.get_episodes(
                str(details.id), selected.season_number
            )
            season_data = format_tmdb_season(selected, episodes)

        poster = await self.posters.resolve_poster(
            canonical_id(media_type, str(details.id)), imdb_id
        )
        media = format_tmdb_meta_result(details, media_type, poster)
        return DetailedMeta(
            meta=to_internal_meta(media, season_data),
            imdb_id=imdb_id,
            tmdb_id=tmdb_id,
        )

    async def get_legacy_meta_from_id(
        self, media_type: MediaType, jw_id: str, season_id: Optional[str] = None
    ) -> Optional[DetailedMeta]:
        """Record for a legacy JustWatch id, with its cross-provider ids."""
        data = await self.justwatch.get_detailed_meta(media_type, jw_id)
        if data is None:
            return None

        imdb_id = pick_external_id(data.external_ids, "imdb")
        tmdb_id = pick_external_id(data.external_ids, "tmdb")

        season_data: Optional[CatalogSeasonDetail] = None
        if data.object_type == "show":
            season_to_scrape = season_id
            if season_to_scrape is None and data.seasons:
                season_to_scrape = str(data.seasons[0].id)
            if season_to_scrape:
                season = await self.justwatch.get_season(season_to_scrape)
                season_data = format_justwatch_season(season)

        media = format_justwatch_result(data, self._settings.justwatch_image_base)
        return DetailedMeta(
            meta=to_internal_meta(media, season_data),
            imdb_id=imdb_id,
            tmdb_id=tmdb_id,
        )

    async def aclose(self) -> None:
        # All clients share one HttpClient.
        await self.tmdb.http.aclose()


def build_metadata_service(settings: Settings | None = None) -> MetadataService:
    settings = settings or get_settings()
    http = HttpClient(settings)
    return MetadataService(
        tmdb=TMDBClient(http, settings),
        justwatch=JustWatchClient(http, settings),
        posters=PosterResolver(PosterKeyPool(settings.omdb_api_keys), http, settings),
        settings=settings,
    )


@lru_cache
def get_metadata_service() -> MetadataService:
    """Get the process-wide service instance."""
    return build_metadata_service()
