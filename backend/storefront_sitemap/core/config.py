"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from pydantic import ValidationError
from dataclasses import dataclass, field
from typing import Optional
import json
import logging

from storefront_sitemap.schemas.sitemap import CacheSettings

logger = logging.getLogger(__name__)

# The storefront API returns at most 250 resources per pagination page
GRAPHQL_MAX_ENTRIES = 250
# Search engines accept at most 50K URLs per sitemap file
MAX_URLS = 50000
# Cap on the number of indexed sitemap files
SITEMAPS_LIMIT = 300


class SitemapConfigurationError(Exception):
    """Raised when the sitemap engine is wired without a required collaborator"""
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Storefront API
    STOREFRONT_API_URL: Optional[str] = None
    STOREFRONT_ACCESS_TOKEN: Optional[str] = None
    STOREFRONT_API_VERSION: str = "2024-01"
    STOREFRONT_LANGUAGE: str = "EN"
    STOREFRONT_TIMEOUT: float = 30.0

    # Sitemap overrides, kept raw so bad values can be logged and defaulted
    SITEMAP_URL_CHUNK_SIZE: Optional[str] = None
    SITEMAP_GRAPHQL_CACHE_SETTINGS_JSON: Optional[str] = None
    SITEMAP_FILES_LIMIT: int = SITEMAPS_LIMIT

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()

# Validate required settings in production
if settings.ENVIRONMENT == "production":
    required_settings = [
        "STOREFRONT_API_URL",
        "STOREFRONT_ACCESS_TOKEN",
    ]

    missing_settings = []
    for setting in required_settings:
        if not getattr(settings, setting):
            missing_settings.append(setting)

    if missing_settings:
        raise ValueError(f"Missing required production settings: {', '.join(missing_settings)}")


@dataclass(frozen=True)
class SitemapConfig:
    """Sitemap limits resolved once per request"""

    chunk_size: int = MAX_URLS
    fetch_page_size: int = GRAPHQL_MAX_ENTRIES
    files_limit: int = SITEMAPS_LIMIT
    language: str = "EN"
    cache_settings: CacheSettings = field(default_factory=CacheSettings)

    @property
    def entry_limit(self) -> int:
        """Upper bound on entries fetched per resource type"""
        return self.files_limit * self.chunk_size


def resolve_fetch_page_size() -> int:
    """Page size for a single storefront call"""
    return min(GRAPHQL_MAX_ENTRIES, MAX_URLS)


def resolve_chunk_size(override: Optional[object] = None, default: int = MAX_URLS) -> int:
    """
    Resolve the number of URLs per sitemap file

    Args:
        override: Raw override value (usually SITEMAP_URL_CHUNK_SIZE)
        default: Chunk size used when the override is absent or invalid

    Returns:
        Positive chunk size, never above MAX_URLS
    """
    if isinstance(default, bool) or not isinstance(default, int) or default <= 0:
        raise SitemapConfigurationError(f"Sitemap chunk size must be positive, got {default!r}")

    if override is None or (isinstance(override, str) and not override.strip()):
        return min(default, MAX_URLS)

    try:
        if isinstance(override, bool):
            raise ValueError("boolean chunk size")
        chunk_size = int(str(override).strip())
    except ValueError:
        logger.error(f"SITEMAP_URL_CHUNK_SIZE is not a number: {override!r}")
        return min(default, MAX_URLS)

    if chunk_size <= 0:
        logger.warning(f"SITEMAP_URL_CHUNK_SIZE must be positive, got {chunk_size}; using {default}")
        return min(default, MAX_URLS)

    if chunk_size > MAX_URLS:
        logger.warning(f"SITEMAP_URL_CHUNK_SIZE {chunk_size} exceeds {MAX_URLS}; clamping")
        return MAX_URLS

    return chunk_size


def resolve_cache_settings(raw: Optional[str] = None) -> CacheSettings:
    """Parse the storefront cache policy, falling back to the default on bad input"""
    if not raw:
        return CacheSettings()

    try:
        return CacheSettings(**json.loads(raw))
    except (ValueError, TypeError, ValidationError) as e:
        logger.error(f"Invalid SITEMAP_GRAPHQL_CACHE_SETTINGS_JSON: {e}")
        return CacheSettings()


def resolve_sitemap_config(app_settings: Settings) -> SitemapConfig:
    """Build the per-request sitemap configuration from application settings"""
    files_limit = app_settings.SITEMAP_FILES_LIMIT
    if files_limit <= 0:
        logger.warning(f"SITEMAP_FILES_LIMIT must be positive, got {files_limit}; using {SITEMAPS_LIMIT}")
        files_limit = SITEMAPS_LIMIT

    return SitemapConfig(
        chunk_size=resolve_chunk_size(app_settings.SITEMAP_URL_CHUNK_SIZE),
        fetch_page_size=resolve_fetch_page_size(),
        files_limit=files_limit,
        language=app_settings.STOREFRONT_LANGUAGE,
        cache_settings=resolve_cache_settings(app_settings.SITEMAP_GRAPHQL_CACHE_SETTINGS_JSON),
    )
