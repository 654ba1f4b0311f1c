"""Provider-agnostic records handed to the normalizer.

Both catalog clients map their payloads into these shapes so the normalizer
only ever sees one tagged union, discriminated by ``object_type``.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class CatalogSeason(BaseModel):
    id: int | str
    season_number: int
    title: str = ""


class CatalogEpisode(BaseModel):
    id: int | str
    episode_number: int
    title: str = ""


class CatalogSeasonDetail(CatalogSeason):
    episodes: List[CatalogEpisode] = []


class CatalogMovie(BaseModel):
    object_type: Literal["movie"] = "movie"
    id: int | str
    title: str
    poster: Optional[str] = None
    original_release_year: Optional[int] = None


class CatalogShow(BaseModel):
    object_type: Literal["show"] = "show"
    id: int | str
    title: str
    poster: Optional[str] = None
    original_release_year: Optional[int] = None
    seasons: List[CatalogSeason] = []


CatalogMedia = Annotated[
    Union[CatalogMovie, CatalogShow], Field(discriminator="object_type")
]
