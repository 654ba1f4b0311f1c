"""JustWatch response payloads used for legacy identifiers."""

from typing import List, Optional

from pydantic import BaseModel


class JWExternalId(BaseModel):
    """One (provider, id) pair, e.g. ``imdb_latest`` / ``tt0133093``."""

    provider: str
    external_id: str


class JWSeason(BaseModel):
    id: int
    season_number: int
    title: str = ""


class JWEpisode(BaseModel):
    id: int | str
    episode_number: int
    title: str = ""


class JWMediaResult(BaseModel):
    id: int
    object_type: str
    title: str
    original_release_year: Optional[int] = None
    poster: Optional[str] = None
    seasons: Optional[List[JWSeason]] = None


class JWDetailedMeta(JWMediaResult):
    """Record from ``/content/titles/{type}/{id}/locale/en_US``."""

    external_ids: List[JWExternalId] = []


class JWSeasonMetaResult(BaseModel):
    """Record from ``/content/titles/show_season/{id}/locale/en_US``."""

    id: int | str
    season_number: int
    title: str = ""
    episodes: List[JWEpisode] = []
