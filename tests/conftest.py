from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from storefront_sitemap.core.config import SitemapConfig
from storefront_sitemap.schemas.sitemap import CacheSettings, CatalogPage, RawNode, ResourceType
from storefront_sitemap.services.storefront_client import StorefrontClientError


def make_node(handle: str, published: bool = True, **extra) -> RawNode:
    return RawNode(
        updatedAt=extra.pop("updatedAt", "2024-01-15T10:30:00Z"),
        handle=handle,
        onlineStoreUrl=f"https://shop.example/{handle}" if published else None,
        **extra,
    )


class FakeCatalogClient:
    """In-memory storefront whose cursors are stringified offsets"""

    def __init__(
        self,
        nodes: Optional[Dict[ResourceType, List[RawNode]]] = None,
        errors: Optional[Dict[ResourceType, int]] = None,
        failures: Optional[Dict[ResourceType, int]] = None,
        endless: bool = False,
        endless_published: bool = True,
    ) -> None:
        self.nodes = nodes or {}
        # resource type -> number of successful pages before the failure
        self.errors = errors or {}
        self.failures = failures or {}
        self.endless = endless
        self.endless_published = endless_published
        self.calls: List[dict] = []

    async def fetch_page(
        self,
        resource_type: ResourceType,
        *,
        page_size: int,
        language: str,
        cursor: Optional[str] = None,
        cache_settings: Optional[CacheSettings] = None,
    ) -> CatalogPage:
        calls_so_far = sum(1 for call in self.calls if call["type"] is resource_type)
        self.calls.append(
            {"type": resource_type, "page_size": page_size, "language": language, "cursor": cursor}
        )

        if resource_type in self.errors and calls_so_far >= self.errors[resource_type]:
            return CatalogPage(errors=[{"message": "Throttled"}])
        if resource_type in self.failures and calls_so_far >= self.failures[resource_type]:
            raise StorefrontClientError("connection reset")

        start = int(cursor) if cursor else 0
        if self.endless:
            batch = [
                make_node(f"{resource_type.value}-{start + i}", published=self.endless_published)
                for i in range(page_size)
            ]
            return CatalogPage(nodes=batch, has_next_page=True, end_cursor=str(start + page_size))

        items = self.nodes.get(resource_type, [])
        batch = items[start:start + page_size]
        end = start + len(batch)
        return CatalogPage(nodes=batch, has_next_page=end < len(items), end_cursor=str(end) if batch else None)


@pytest.fixture
def config() -> SitemapConfig:
    return SitemapConfig(chunk_size=10, fetch_page_size=4, files_limit=3, language="EN")
