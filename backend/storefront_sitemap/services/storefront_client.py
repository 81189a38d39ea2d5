"""
Shopify Storefront API client for the sitemap GraphQL queries
"""

import httpx
import logging
from typing import Dict, Any, Optional

from pydantic import ValidationError

from storefront_sitemap.core.config import GRAPHQL_MAX_ENTRIES, Settings
from storefront_sitemap.schemas.sitemap import CacheSettings, CatalogPage, ResourceType

logger = logging.getLogger(__name__)


class StorefrontClientError(Exception):
    """Custom exception for Storefront API errors"""
    pass


class SitemapQueries:
    """GraphQL documents used to page through sitemap resources"""

    @staticmethod
    def get_products_query() -> str:
        """Get GraphQL query for published products with their featured image"""
        return """
        query SitemapProducts($urlLimits: Int, $language: LanguageCode, $cursor: String)
        @inContext(language: $language) {
            products(
                first: $urlLimits
                after: $cursor
                query: "published_status:'online_store:visible'"
            ) {
                nodes {
                    updatedAt
                    handle
                    onlineStoreUrl
                    title
                    featuredImage {
                        url
                        altText
                    }
                }
                pageInfo {
                    hasNextPage
                    endCursor
                }
            }
        }
        """

    @staticmethod
    def get_collections_query() -> str:
        """Get GraphQL query for published collections"""
        return """
        query SitemapCollections($urlLimits: Int, $language: LanguageCode, $cursor: String)
        @inContext(language: $language) {
            collections(
                first: $urlLimits
                after: $cursor
                query: "published_status:'online_store:visible'"
            ) {
                nodes {
                    updatedAt
                    handle
                    onlineStoreUrl
                }
                pageInfo {
                    hasNextPage
                    endCursor
                }
            }
        }
        """

    @staticmethod
    def get_pages_query() -> str:
        """Get GraphQL query for published online store pages"""
        return """
        query SitemapPages($urlLimits: Int, $language: LanguageCode, $cursor: String)
        @inContext(language: $language) {
            pages(
                first: $urlLimits
                after: $cursor
                query: "published_status:'published'"
            ) {
                nodes {
                    updatedAt
                    handle
                    onlineStoreUrl
                }
                pageInfo {
                    hasNextPage
                    endCursor
                }
            }
        }
        """

    @classmethod
    def for_resource(cls, resource_type: ResourceType) -> str:
        queries = {
            ResourceType.PRODUCTS: cls.get_products_query,
            ResourceType.COLLECTIONS: cls.get_collections_query,
            ResourceType.PAGES: cls.get_pages_query,
        }
        return queries[resource_type]()


class StorefrontClient:
    """Client for the Shopify Storefront GraphQL endpoint"""

    def __init__(self, api_url: str, access_token: str, api_version: str = "2024-01",
                 timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize Storefront API client

        Args:
            api_url: Shop URL, e.g. https://example.myshopify.com
            access_token: Storefront API access token
            api_version: Storefront API version
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not api_url:
            raise StorefrontClientError("Storefront API URL is not configured")

        if not access_token:
            raise StorefrontClientError("No valid storefront access token")

        self.api_url = api_url.rstrip("/")
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "StorefrontClient":
        return cls(
            api_url=app_settings.STOREFRONT_API_URL,
            access_token=app_settings.STOREFRONT_ACCESS_TOKEN,
            api_version=app_settings.STOREFRONT_API_VERSION,
            timeout=app_settings.STOREFRONT_TIMEOUT,
        )

    @property
    def graphql_url(self) -> str:
        """Get GraphQL endpoint URL"""
        return f"{self.api_url}/api/{self.api_version}/graphql.json"

    def headers(self, cache_settings: Optional[CacheSettings] = None) -> Dict[str, str]:
        """Get headers for API calls"""
        headers = {
            'X-Shopify-Storefront-Access-Token': self.access_token,
            'Content-Type': 'application/json'
        }
        if cache_settings is not None:
            headers['Cache-Control'] = cache_settings.as_cache_control()
        return headers

    async def graphql_query(self, query: str, variables: Optional[Dict[str, Any]] = None,
                            cache_settings: Optional[CacheSettings] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query

        Args:
            query: GraphQL query string
            variables: Query variables
            cache_settings: Cache policy sent along with the request

        Returns:
            Full GraphQL payload, including the 'errors' list when present
        """
        payload = {
            'query': query,
            'variables': variables or {}
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.graphql_url,
                    headers=self.headers(cache_settings),
                    json=payload
                )
                response.raise_for_status()
                return response.json()

        except httpx.HTTPError as e:
            logger.error(f"Failed to execute GraphQL query: {e}")
            raise StorefrontClientError(f"Failed to execute GraphQL query: {e}")
        except ValueError as e:
            logger.error(f"Storefront returned invalid JSON: {e}")
            raise StorefrontClientError(f"Invalid JSON response: {e}")

    async def fetch_page(self, resource_type: ResourceType, *, page_size: int, language: str,
                         cursor: Optional[str] = None,
                         cache_settings: Optional[CacheSettings] = None) -> CatalogPage:
        """
        Fetch one page of a sitemap resource

        GraphQL errors are returned in CatalogPage.errors instead of being raised.

        Args:
            resource_type: Resource to query
            page_size: Number of nodes requested (max 250)
            language: Storefront language code
            cursor: End cursor of the previous page, None for the first page
            cache_settings: Cache policy sent along with the request

        Returns:
            CatalogPage with nodes and pagination info
        """
        variables = {
            'urlLimits': min(page_size, GRAPHQL_MAX_ENTRIES),
            'language': language,
            'cursor': cursor
        }

        data = await self.graphql_query(
            SitemapQueries.for_resource(resource_type),
            variables,
            cache_settings
        )

        if not isinstance(data, dict):
            raise StorefrontClientError(f"Unexpected {resource_type.value} payload: {data!r}")

        errors = data.get('errors') or []
        if errors:
            return CatalogPage(errors=errors if isinstance(errors, list) else [errors])

        body = data.get('data') or {}
        if not isinstance(body, dict):
            raise StorefrontClientError(f"Unexpected {resource_type.value} payload: {body!r}")

        connection = body.get(resource_type.value) or {}
        if not isinstance(connection, dict):
            raise StorefrontClientError(f"Unexpected {resource_type.value} connection: {connection!r}")

        page_info = connection.get('pageInfo') or {}
        if not isinstance(page_info, dict):
            raise StorefrontClientError(f"Unexpected {resource_type.value} pageInfo: {page_info!r}")

        try:
            return CatalogPage(
                nodes=connection.get('nodes') or [],
                has_next_page=bool(page_info.get('hasNextPage')),
                end_cursor=page_info.get('endCursor')
            )
        except ValidationError as e:
            logger.error(f"Unexpected {resource_type.value} payload: {e}")
            raise StorefrontClientError(f"Unexpected {resource_type.value} payload: {e}")
