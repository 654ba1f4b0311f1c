"""TMDB client for searching and fetching movie/series details."""

import logging
from typing import Dict, List, Optional

from cachetools import TTLCache

from app.core.errors import NotFoundError, UnsupportedTypeError
from app.models.media import MediaType
from app.models.tmdb import (
    TMDBEpisode,
    TMDBExternalIds,
    TMDBFindResult,
    TMDBMovieData,
    TMDBMovieResponse,
    TMDBMovieResult,
    TMDBSeasonData,
    TMDBShowData,
    TMDBShowResponse,
    TMDBShowResult,
)
from app.providers.base import CatalogClient

logger = logging.getLogger(__name__)

_ENDPOINTS = {MediaType.MOVIE: "movie", MediaType.SERIES: "tv"}


def _endpoint(media_type: MediaType) -> str:
    try:
        return _ENDPOINTS[media_type]
    except KeyError:
        raise UnsupportedTypeError(media_type) from None


class TMDBClient(CatalogClient):
    """Primary catalog client (TMDB v3, bearer token auth)."""

    def __init__(self, http, settings=None):
        super().__init__(http, settings)
        self.details_cache: TTLCache = TTLCache(
            maxsize=256, ttl=self._settings.details_cache_ttl
        )

    @property
    def name(self) -> str:
        return "TMDB"

    @property
    def base_url(self) -> str:
        return self._settings.tmdb_api_base

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "Authorization": f"Bearer {self._settings.tmdb_read_api_key}",
        }

    async def search(
        self, query: str, media_type: MediaType
    ) -> List[TMDBMovieResult] | List[TMDBShowResult]:
        """Search TMDB, first page only, adult content excluded."""
        params = {
            "query": query,
            "include_adult": "false",
            "language": "en-US",
            "page": 1,
        }
        data = await self._get(f"search/{_endpoint(media_type)}", params)
        if media_type == MediaType.MOVIE:
            return TMDBMovieResponse.model_validate(data).results
        return TMDBShowResponse.model_validate(data).results

    async def get_details(
        self, tmdb_id: str, media_type: MediaType
    ) -> Optional[TMDBMovieData | TMDBShowData]:
        """Fetch a full movie or show record, None if TMDB does not know it."""
        endpoint = _endpoint(media_type)
        cache_key = f"{endpoint}-{tmdb_id}"
        if cache_key in self.details_cache:
            return self.details_cache[cache_key]

        try:
            data = await self._get(f"/{endpoint}/{tmdb_id}")
        except NotFoundError:
            logger.info("TMDB has no %s with ID %s", endpoint, tmdb_id)
            return None

        if media_type == MediaType.MOVIE:
            details = TMDBMovieData.model_validate(data)
        else:
            details = TMDBShowData.model_validate(data)
        self.details_cache[cache_key] = details
        return details

    async def get_external_ids(
        self, tmdb_id: str, media_type: MediaType
    ) -> TMDBExternalIds:
        data = await self._get(f"/{_endpoint(media_type)}/{tmdb_id}/external_ids")
        return TMDBExternalIds.model_validate(data)

    async def get_episodes(self, show_id: str, season_number: int) -> List[TMDBEpisode]:
        """Fetch the episodes of one season."""
        data = await self._get(f"/tv/{show_id}/season/{season_number}")
        return TMDBSeasonData.model_validate(data).episodes

    async def get_movie_from_external_id(self, imdb_id: str) -> Optional[str]:
        """Translate an IMDB id into a TMDB movie id."""
        data = await self._get(f"/find/{imdb_id}", {"external_source": "imdb_id"})
        results = TMDBFindResult.model_validate(data).movie_results
        if not results:
            return None
        return str(results[0].id)
