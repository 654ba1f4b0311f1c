"""API routes returning normalized media metadata as JSON."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from app.models.media import DetailedMeta, MediaMeta, MediaQuery, MediaType
from app.services.ids import decode_canonical_id
from app.services.legacy import convert_legacy_url, is_legacy_url
from app.services.metadata import MetadataService, get_metadata_service

router = APIRouter()


class MigrationResult(BaseModel):
    legacy: bool
    url: Optional[str] = None


@router.get("/search", response_model=List[MediaMeta])
async def api_search(
    q: str = Query(..., description="Search query"),
    media_type: MediaType = Query(MediaType.MOVIE, description="movie or series"),
    service: MetadataService = Depends(get_metadata_service),
):
    """Search the primary catalog for one media type."""
    return await service.search(MediaQuery(search_query=q, type=media_type))


@router.get("/media/{media_id}", response_model=DetailedMeta)
async def api_media(
    media_id: str,
    season_id: Optional[str] = Query(None, description="Season to expand"),
    service: MetadataService = Depends(get_metadata_service),
):
    """Look up a title by canonical id, e.g. ``tmdb-movie-603``."""
    decoded = decode_canonical_id(media_id)
    if decoded is None:
        raise HTTPException(status_code=400, detail="Invalid media id")

    meta = await service.get_meta_from_id(decoded.type, decoded.id, season_id)
    if meta is None:
        raise HTTPException(status_code=404, detail="Media not found")
    return meta


@router.get("/legacy/{media_type}/{jw_id}", response_model=DetailedMeta)
async def api_legacy_media(
    media_type: MediaType,
    jw_id: str,
    season_id: Optional[str] = Query(None, description="Season to expand"),
    service: MetadataService = Depends(get_metadata_service),
):
    """Look up a title by its legacy JustWatch id."""
    meta = await service.get_legacy_meta_from_id(media_type, jw_id, season_id)
    if meta is None:
        raise HTTPException(status_code=404, detail="Media not found")
    return meta


@router.get("/migrate", response_model=MigrationResult)
async def api_migrate(
    url: str = Query(..., description="Route to migrate"),
    service: MetadataService = Depends(get_metadata_service),
):
    """Translate a legacy media route into its canonical form."""
    if not is_legacy_url(url):
        return MigrationResult(legacy=False)
    return MigrationResult(legacy=True, url=await convert_legacy_url(url, service))


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "mediameta"}
