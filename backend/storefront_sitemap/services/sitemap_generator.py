"""
Sitemap generation for the storefront catalog

Products, collections and pages are fetched concurrently, merged in that
order and rendered either as a single <urlset> or, when the catalog is
larger than one sitemap file, as a <sitemapindex> of numbered chunks.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from storefront_sitemap.core.config import SitemapConfig
from storefront_sitemap.schemas.sitemap import ResourceType, UrlEntry
from storefront_sitemap.services.partitioner import chunk_count, index_urls, select_page
from storefront_sitemap.services.renderer import render_sitemap_index, render_urlset
from storefront_sitemap.services.resource_fetcher import CatalogClient, PaginationCursor, ResourceFetcher

logger = logging.getLogger(__name__)

# Merge order of the sitemap
RESOURCE_ORDER = (ResourceType.PRODUCTS, ResourceType.COLLECTIONS, ResourceType.PAGES)


class SitemapGenerator:
    """Collects sitemap entries for one request"""

    def __init__(self, client: CatalogClient, config: SitemapConfig, base_url: str):
        self.config = config
        self.base_url = base_url.rstrip("/")
        self.fetcher = ResourceFetcher(client, config, self.base_url, PaginationCursor())

    async def generate_sitemap_urls(self) -> List[UrlEntry]:
        """Fetch all resource types concurrently and merge them in RESOURCE_ORDER"""
        results = await asyncio.gather(
            *(self.fetcher.fetch_all(resource_type) for resource_type in RESOURCE_ORDER)
        )

        entries: List[UrlEntry] = []
        for resource_type, resource_entries in zip(RESOURCE_ORDER, results):
            logger.info(f"Collected {len(resource_entries)} {resource_type.value} entries")
            entries.extend(resource_entries)

        return entries


def render_sitemap(entries: Sequence[UrlEntry], config: SitemapConfig, base_url: str) -> str:
    """Render /sitemap.xml: a sitemap index when entries exceed one chunk, else a urlset"""
    if len(entries) > config.chunk_size:
        total_chunks = chunk_count(len(entries), config.chunk_size)
        logger.info(f"Rendering sitemap index with {total_chunks} sitemaps for {len(entries)} entries")
        return render_sitemap_index(index_urls(base_url, total_chunks))

    return render_urlset(entries)


def render_sitemap_page(entries: Sequence[UrlEntry], config: SitemapConfig,
                        page_index: int) -> Optional[str]:
    """Render /sitemap/{page_index}.xml, or None when no such chunk exists"""
    page = select_page(entries, config.chunk_size, page_index)
    if page is None:
        return None

    return render_urlset(page)
