"""Migration of old JustWatch-based media routes to canonical TMDB routes."""

import logging
from typing import Optional

from app.models.media import MediaType
from app.services.ids import CANONICAL_PREFIX, tag_to_media_type
from app.services.metadata import MetadataService

logger = logging.getLogger(__name__)

LEGACY_PREFIX = "/media/JW"


def is_legacy_url(url: str) -> bool:
    return url.startswith(LEGACY_PREFIX)


async def convert_legacy_url(url: str, service: MetadataService) -> Optional[str]:
    """Return the canonical route for a legacy ``/media/JW<n>-<tag>-<id>`` URL.

    Movies are matched through their IMDB id first since TMDB always carries
    it for movies; otherwise the TMDB id listed by JustWatch is used.
    Returns None when the title can't be mapped.
    """
    if not is_legacy_url(url):
        return None

    segment = url.split("/")[2]
    parts = segment.split("-")
    tag = parts[1] if len(parts) > 1 else ""
    jw_id = parts[2] if len(parts) > 2 else ""

    media_type = tag_to_media_type(tag)
    if not jw_id:
        return None

    meta = await service.get_legacy_meta_from_id(media_type, jw_id)
    if meta is None:
        return None
    if not meta.imdb_id and not meta.tmdb_id:
        logger.info("Legacy title %s has no external ids", segment)
        return None

    if meta.imdb_id and media_type == MediaType.MOVIE:
        movie_id = await service.tmdb.get_movie_from_external_id(meta.imdb_id)
        if movie_id:
            return f"/media/{CANONICAL_PREFIX}-movie-{movie_id}"

    if meta.tmdb_id:
        return f"/media/{CANONICAL_PREFIX}-{tag}-{meta.tmdb_id}"
    return None
