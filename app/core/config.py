"""Configuration management for the metadata service."""

from pydantic import PositiveInt, field_validator
from functools import lru_cache
from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from urllib.parse import urlparse

PLACEHOLDER_POSTER_URL = (
    "https://upload.wikimedia.org/wikipedia/commons/thumb/6/65/"
    "No-Image-Placeholder.svg/1665px-No-Image-Placeholder.svg.png"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # TMDB (primary catalog)
    tmdb_read_api_key: str
    tmdb_api_base: str = "https://api.themoviedb.org/3"

    # JustWatch (legacy catalog)
    justwatch_api_base: str = "https://apis.justwatch.com"
    justwatch_image_base: str = "https://images.justwatch.com"

    # OMDb posters
    # JSON list in the environment, e.g. OMDB_API_KEYS='["key1", "key2"]'
    omdb_api_keys: List[str] = []
    omdb_image_base: str = "https://img.omdbapi.com/"
    omdb_api_base: str = "https://www.omdbapi.com/"
    poster_placeholder_url: str = PLACEHOLDER_POSTER_URL
    poster_probe: bool = False  # Check the key against OMDb before handing out a URL

    # Caching (seconds)
    search_cache_ttl: PositiveInt = 3600
    details_cache_ttl: PositiveInt = 1800

    # Network settings
    # Proxy configuration in the format http://host:port or socks5://host:port
    proxy: str | None = None

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https", "socks4", "socks5", "socks5h"):
            raise ValueError(
                "Proxy must be a valid URL with scheme http/https/socks4/socks5/socks5h"
            )
        if not parsed.netloc:
            raise ValueError("Proxy must have a host and port")
        return v

    # App settings
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
