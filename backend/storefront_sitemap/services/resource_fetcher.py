"""
Cursor-paginated fetching of sitemap resources from the storefront
"""

import logging
from typing import Dict, List, Optional, Protocol

from storefront_sitemap.core.config import SitemapConfig, SitemapConfigurationError
from storefront_sitemap.schemas.sitemap import CacheSettings, CatalogPage, ResourceType, UrlEntry
from storefront_sitemap.services.storefront_client import StorefrontClientError
from storefront_sitemap.services.url_entries import build_url_entry

logger = logging.getLogger(__name__)


class CatalogClient(Protocol):
    async def fetch_page(self, resource_type: ResourceType, *, page_size: int, language: str,
                         cursor: Optional[str] = None,
                         cache_settings: Optional[CacheSettings] = None) -> CatalogPage:
        ...


class PaginationCursor:
    """End-of-page cursors per resource type, owned by a single sitemap request"""

    def __init__(self):
        self._cursors: Dict[ResourceType, Optional[str]] = {}

    def get(self, resource_type: ResourceType) -> Optional[str]:
        return self._cursors.get(resource_type)

    def advance(self, resource_type: ResourceType, value: Optional[str]) -> None:
        self._cursors[resource_type] = value

    def reset(self, resource_type: ResourceType) -> None:
        self._cursors[resource_type] = None


class ResourceFetcher:
    """Walks a storefront connection page by page and collects sitemap entries"""

    def __init__(self, client: CatalogClient, config: SitemapConfig, base_url: str,
                 cursor: Optional[PaginationCursor] = None):
        if client is None:
            raise SitemapConfigurationError("Storefront client is not defined")

        self.client = client
        self.config = config
        self.base_url = base_url
        self.cursor = cursor if cursor is not None else PaginationCursor()

    async def fetch_all(self, resource_type: ResourceType) -> List[UrlEntry]:
        """
        Fetch every published entry of a resource type

        Stops when the storefront reports no further page, when a query fails
        (partial results are returned) or once config.entry_limit nodes have been
        fetched.

        Args:
            resource_type: Resource to fetch

        Returns:
            Sitemap entries in storefront order
        """
        if resource_type is None:
            raise SitemapConfigurationError("Resource type is not defined")

        entries: List[UrlEntry] = []
        fetched_nodes = 0
        limit = self.config.entry_limit

        try:
            while True:
                try:
                    page = await self.client.fetch_page(
                        resource_type,
                        page_size=self.config.fetch_page_size,
                        language=self.config.language,
                        cursor=self.cursor.get(resource_type),
                        cache_settings=self.config.cache_settings,
                    )
                except StorefrontClientError as e:
                    logger.error(f"Error fetching {resource_type.value}: {e}")
                    break

                if page.errors:
                    for error in page.errors:
                        logger.error(f"GraphQL error fetching {resource_type.value}: {error}")
                    break

                logger.debug(f"Fetched {len(page.nodes)} {resource_type.value} nodes")

                fetched_nodes += len(page.nodes)
                for node in page.nodes:
                    entry = build_url_entry(node, resource_type, self.base_url)
                    if entry is not None:
                        entries.append(entry)

                # unpublished nodes count too, so a source of hidden nodes still ends
                if fetched_nodes >= limit:
                    logger.warning(
                        f"Reached limit of sitemap files for {resource_type.value}: "
                        f"{fetched_nodes} nodes fetched, {len(entries)} entries collected"
                    )
                    del entries[limit:]
                    break

                if not page.has_next_page or not page.nodes:
                    break

                if not page.end_cursor:
                    logger.warning(f"Storefront reported more {resource_type.value} without an end cursor")
                    break

                self.cursor.advance(resource_type, page.end_cursor)
        finally:
            self.cursor.reset(resource_type)

        return entries
