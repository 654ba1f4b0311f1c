"""TMDB response payloads, validated at the client boundary."""

from typing import List, Optional

from pydantic import BaseModel


class TMDBMovieResult(BaseModel):
    """A movie entry from ``search/movie``."""

    id: int
    title: str
    release_date: Optional[str] = None
    poster_path: Optional[str] = None


class TMDBShowResult(BaseModel):
    """A TV entry from ``search/tv``."""

    id: int
    name: str
    first_air_date: Optional[str] = None
    poster_path: Optional[str] = None


class TMDBMovieResponse(BaseModel):
    page: int = 1
    results: List[TMDBMovieResult] = []


class TMDBShowResponse(BaseModel):
    page: int = 1
    results: List[TMDBShowResult] = []


class TMDBSeason(BaseModel):
    """A season summary as listed in ``/tv/{id}``."""

    id: int
    season_number: int
    name: str = ""


class TMDBMovieData(BaseModel):
    """Full record from ``/movie/{id}``."""

    id: int
    title: str
    release_date: Optional[str] = None
    imdb_id: Optional[str] = None
    poster_path: Optional[str] = None


class TMDBShowData(BaseModel):
    """Full record from ``/tv/{id}``."""

    id: int
    name: str
    first_air_date: Optional[str] = None
    poster_path: Optional[str] = None
    seasons: List[TMDBSeason] = []


class TMDBEpisode(BaseModel):
    id: int
    episode_number: int
    name: str = ""


class TMDBSeasonData(BaseModel):
    """Record from ``/tv/{id}/season/{number}``."""

    id: Optional[int] = None
    season_number: Optional[int] = None
    episodes: List[TMDBEpisode] = []


class TMDBExternalIds(BaseModel):
    """Payload of ``/movie/{id}/external_ids`` and ``/tv/{id}/external_ids``."""

    id: Optional[int] = None
    imdb_id: Optional[str] = None
    tvdb_id: Optional[int] = None
    wikidata_id: Optional[str] = None


class TMDBFindMovie(BaseModel):
    id: int


class TMDBFindResult(BaseModel):
    """Payload of ``/find/{external_id}``."""

    movie_results: List[TMDBFindMovie] = []
