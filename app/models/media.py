"""Internal media models served to the rest of the application."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class MediaType(str, Enum):
    """Media type of a catalog entry."""

    MOVIE = "movie"
    SERIES = "series"


class EpisodeMeta(BaseModel):
    """An episode in a season."""

    model_config = ConfigDict(frozen=True)

    id: str
    number: int
    title: str


class SeasonMeta(BaseModel):
    """A season of a TV series."""

    model_config = ConfigDict(frozen=True)

    id: str
    number: int
    title: str


class SeasonDetail(SeasonMeta):
    """A season with its episodes, ordered by episode number."""

    episodes: List[EpisodeMeta] = []


class MediaMeta(BaseModel):
    """A movie or series, normalized from either catalog provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    year: Optional[str] = None
    poster: Optional[str] = None
    type: MediaType
    seasons: Optional[List[SeasonMeta]] = None
    season_data: Optional[SeasonDetail] = None

    @model_validator(mode="after")
    def check_series_fields(self) -> "MediaMeta":
        if self.type != MediaType.SERIES and (
            self.seasons is not None or self.season_data is not None
        ):
            raise ValueError("Only series carry seasons")
        return self


class DetailedMeta(BaseModel):
    """Detail lookup result with the identifiers resolved on the way."""

    meta: MediaMeta
    imdb_id: Optional[str] = None
    tmdb_id: Optional[str] = None


class MediaQuery(BaseModel):
    """A free-text search restricted to one media type."""

    search_query: str
    type: MediaType
