"""Normalization of provider records into :class:`MediaMeta`."""

from typing import List, Optional

from app.core.errors import UnsupportedTypeError
from app.models.catalog import (
    CatalogEpisode,
    CatalogMovie,
    CatalogSeason,
    CatalogSeasonDetail,
    CatalogShow,
)
from app.models.justwatch import JWMediaResult, JWSeasonMetaResult
from app.models.media import EpisodeMeta, MediaMeta, MediaType, SeasonDetail, SeasonMeta
from app.models.tmdb import (
    TMDBEpisode,
    TMDBMovieData,
    TMDBMovieResult,
    TMDBSeason,
    TMDBShowData,
    TMDBShowResult,
)

JW_POSTER_PROFILE = "s592"


def parse_year(date: Optional[str]) -> Optional[int]:
    """Return the year from a ``YYYY-MM-DD`` date, or None if it has none."""
    if not date or len(date) < 4 or not date[:4].isdigit():
        return None
    return int(date[:4])


def format_tmdb_meta_result(
    details: TMDBMovieData | TMDBShowData,
    media_type: MediaType,
    poster: Optional[str] = None,
) -> CatalogMovie | CatalogShow:
    """Map a TMDB details record to a catalog record."""
    if media_type == MediaType.MOVIE and isinstance(details, TMDBMovieData):
        return CatalogMovie(
            id=details.id,
            title=details.title,
            poster=poster,
            original_release_year=parse_year(details.release_date),
        )
    if media_type == MediaType.SERIES and isinstance(details, TMDBShowData):
        return CatalogShow(
            id=details.id,
            title=details.name,
            poster=poster,
            original_release_year=parse_year(details.first_air_date),
            seasons=[
                CatalogSeason(id=s.id, season_number=s.season_number, title=s.name)
                for s in details.seasons
            ],
        )
    raise UnsupportedTypeError(media_type)


def format_tmdb_search_result(
    result: TMDBMovieResult | TMDBShowResult,
    media_type: MediaType,
    poster: Optional[str] = None,
) -> CatalogMovie | CatalogShow:
    """Map a TMDB search hit to a catalog record (no seasons)."""
    if media_type == MediaType.SERIES and isinstance(result, TMDBShowResult):
        return CatalogShow(
            id=result.id,
            title=result.name,
            poster=poster,
            original_release_year=parse_year(result.first_air_date),
        )
    if media_type == MediaType.MOVIE and isinstance(result, TMDBMovieResult):
        return CatalogMovie(
            id=result.id,
            title=result.title,
            poster=poster,
            original_release_year=parse_year(result.release_date),
        )
    raise UnsupportedTypeError(media_type)


def format_tmdb_season(
    season: TMDBSeason, episodes: List[TMDBEpisode]
) -> CatalogSeasonDetail:
    return CatalogSeasonDetail(
        id=season.id,
        season_number=season.season_number,
        title=season.name,
        episodes=[
            CatalogEpisode(id=e.id, episode_number=e.episode_number, title=e.name)
            for e in episodes
        ],
    )


def format_justwatch_result(
    media: JWMediaResult, image_base: str
) -> CatalogMovie | CatalogShow:
    """Map a JustWatch title to a catalog record."""
    poster = None
    if media.poster:
        poster = image_base.rstrip("/") + media.poster.replace(
            "{profile}", JW_POSTER_PROFILE
        )

    if media.object_type == "movie":
        return CatalogMovie(
            id=media.id,
            title=media.title,
            poster=poster,
            original_release_year=media.original_release_year,
        )
    if media.object_type == "show":
        return CatalogShow(
            id=media.id,
            title=media.title,
            poster=poster,
            original_release_year=media.original_release_year,
            seasons=[
                CatalogSeason(id=s.id, season_number=s.season_number, title=s.title)
                for s in media.seasons or []
            ],
        )
    raise UnsupportedTypeError(media.object_type)


def format_justwatch_season(season: JWSeasonMetaResult) -> CatalogSeasonDetail:
    return CatalogSeasonDetail(
        id=season.id,
        season_number=season.season_number,
        title=season.title,
        episodes=[
            CatalogEpisode(id=e.id, episode_number=e.episode_number, title=e.title)
            for e in season.episodes
        ],
    )


def _season_detail(season: CatalogSeasonDetail) -> SeasonDetail:
    episodes = sorted(season.episodes, key=lambda e: e.episode_number)
    return SeasonDetail(
        id=str(season.id),
        number=season.season_number,
        title=season.title,
        episodes=[
            EpisodeMeta(id=str(e.id), number=e.episode_number, title=e.title)
            for e in episodes
        ],
    )


def to_internal_meta(
    media: CatalogMovie | CatalogShow,
    season: Optional[CatalogSeasonDetail] = None,
) -> MediaMeta:
    """Build the internal record, sorting seasons and episodes by number."""
    year = (
        str(media.original_release_year)
        if media.original_release_year is not None
        else None
    )

    if isinstance(media, CatalogMovie):
        return MediaMeta(
            id=str(media.id),
            title=media.title,
            year=year,
            poster=media.poster,
            type=MediaType.MOVIE,
        )

    if isinstance(media, CatalogShow):
        seasons = sorted(media.seasons, key=lambda s: s.season_number)
        return MediaMeta(
            id=str(media.id),
            title=media.title,
            year=year,
            poster=media.poster,
            type=MediaType.SERIES,
            seasons=[
                SeasonMeta(id=str(s.id), number=s.season_number, title=s.title)
                for s in seasons
            ],
            season_data=_season_detail(season) if season else None,
        )

    raise UnsupportedTypeError(getattr(media, "object_type", type(media).__name__))
