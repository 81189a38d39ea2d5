"""
Pydantic schemas for storefront data and sitemap entries
"""

from .sitemap import (
    ResourceType, CacheSettings, FeaturedImage, RawNode, CatalogPage,
    SitemapImage, UrlEntry
)

__all__ = [
    # Storefront data
    "ResourceType", "CacheSettings", "FeaturedImage", "RawNode", "CatalogPage",
    # Sitemap output
    "SitemapImage", "UrlEntry",
]
