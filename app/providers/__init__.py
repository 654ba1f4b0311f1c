"""Catalog API clients."""

from app.providers.base import CatalogClient
from app.providers.justwatch import JustWatchClient
from app.providers.tmdb import TMDBClient

__all__ = ["CatalogClient", "JustWatchClient", "TMDBClient"]
