"""Media type tags and canonical ``tmdb-<tag>-<id>`` identifiers."""

from typing import Literal, NamedTuple, Optional

from app.core.errors import UnsupportedTypeError
from app.models.media import MediaMeta, MediaType

MediaTag = Literal["movie", "show"]

CANONICAL_PREFIX = "tmdb"


class DecodedId(NamedTuple):
    type: MediaType
    id: str


def media_type_to_tag(media_type: MediaType) -> MediaTag:
    """Map a media type to the tag used in ids and by the legacy catalog."""
    if media_type == MediaType.MOVIE:
        return "movie"
    if media_type == MediaType.SERIES:
        return "show"
    raise UnsupportedTypeError(media_type)


def tag_to_media_type(tag: str) -> MediaType:
    if tag == "movie":
        return MediaType.MOVIE
    if tag == "show":
        return MediaType.SERIES
    raise UnsupportedTypeError(tag)


def canonical_id(media_type: MediaType, media_id: str) -> str:
    return "-".join([CANONICAL_PREFIX, media_type_to_tag(media_type), media_id])


def encode_canonical_id(media: MediaMeta) -> str:
    return canonical_id(media.type, media.id)


def decode_canonical_id(param_id: str) -> Optional[DecodedId]:
    """Decode a canonical id, returning ``None`` when it is malformed."""
    parts = param_id.split("-", 2)
    if len(parts) != 3 or parts[0] != CANONICAL_PREFIX or not parts[2].isdigit():
        return None
    try:
        media_type = tag_to_media_type(parts[1])
    except UnsupportedTypeError:
        return None
    return DecodedId(type=media_type, id=parts[2])
