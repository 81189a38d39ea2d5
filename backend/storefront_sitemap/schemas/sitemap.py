"""
Pydantic schemas for storefront sitemap data
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Any
from enum import Enum


class ResourceType(str, Enum):
    """Catalog resources listed in the sitemap"""

    PRODUCTS = "products"
    COLLECTIONS = "collections"
    PAGES = "pages"

    @property
    def path_segment(self) -> str:
        """URL path segment for the resource, e.g. /products/<handle>"""
        return self.value

    @property
    def change_frequency(self) -> str:
        """Crawl hint written to <changefreq>"""
        if self is ResourceType.PAGES:
            return "weekly"
        return "daily"


class CacheSettings(BaseModel):
    """Cache policy forwarded with every storefront query"""

    mode: str = Field("public", description="Cache visibility", example="public")
    max_age: int = Field(1, alias="maxAge", ge=0, description="Seconds a response stays fresh")
    stale_while_revalidate: int = Field(
        300,
        alias="staleWhileRevalidate",
        ge=0,
        description="Seconds a stale response may be served while revalidating"
    )

    class Config:
        populate_by_name = True
        frozen = True

    def as_cache_control(self) -> str:
        return f"{self.mode}, max-age={self.max_age}, stale-while-revalidate={self.stale_while_revalidate}"


class FeaturedImage(BaseModel):
    url: Optional[str] = None
    alt_text: Optional[str] = Field(None, alias="altText")

    class Config:
        populate_by_name = True


class RawNode(BaseModel):
    """A single product, collection or page returned by the storefront API"""

    updated_at: str = Field(..., alias="updatedAt", example="2024-01-15T10:30:00Z")
    handle: str = Field(..., description="Resource handle (URL slug)", example="premium-cotton-t-shirt")
    online_store_url: Optional[str] = Field(None, alias="onlineStoreUrl")
    title: Optional[str] = None
    featured_image: Optional[FeaturedImage] = Field(None, alias="featuredImage")

    class Config:
        populate_by_name = True

    @property
    def is_published(self) -> bool:
        """Only resources visible on the online store get a sitemap entry"""
        return bool(self.online_store_url)


class CatalogPage(BaseModel):
    """One page of a cursor-paginated storefront connection"""

    nodes: List[RawNode] = Field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None
    errors: List[Any] = Field(default_factory=list)


class SitemapImage(BaseModel):
    url: str
    title: Optional[str] = None
    caption: Optional[str] = None


class UrlEntry(BaseModel):
    """A <url> block of a sitemap, text fields already escaped"""

    url: str
    last_mod: str
    change_freq: str
    image: Optional[SitemapImage] = None
