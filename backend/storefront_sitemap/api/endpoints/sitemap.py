"""
Sitemap endpoints
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from typing import Callable, Optional
import logging

from storefront_sitemap.core.config import Settings, SitemapConfig, resolve_sitemap_config, settings
from storefront_sitemap.services.resource_fetcher import CatalogClient
from storefront_sitemap.services.sitemap_generator import SitemapGenerator, render_sitemap, render_sitemap_page
from storefront_sitemap.services.storefront_client import StorefrontClient

logger = logging.getLogger(__name__)

router = APIRouter()

SITEMAP_CACHE_CONTROL = f"max-age={60 * 60 * 24}"


def get_settings() -> Settings:
    return settings


def get_sitemap_config(app_settings: Settings = Depends(get_settings)) -> SitemapConfig:
    """Sitemap limits, resolved fresh for every request"""
    return resolve_sitemap_config(app_settings)


def get_catalog_client_factory(app_settings: Settings = Depends(get_settings)) -> Callable[[], CatalogClient]:
    """Storefront client builder, called only once a request needs catalog data"""
    return lambda: StorefrontClient.from_settings(app_settings)


def _base_url(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


def _xml_response(content: str) -> Response:
    return Response(
        content=content,
        media_type="application/xml",
        headers={"Cache-Control": SITEMAP_CACHE_CONTROL}
    )


def _no_data_response() -> Response:
    logger.info("No sitemap data found")
    return PlainTextResponse("No data found", status_code=404)


def _redirect_to_main_sitemap() -> Response:
    return RedirectResponse(url="/sitemap.xml", status_code=302)


def _parse_sitemap_index(raw_index: str) -> Optional[int]:
    if not raw_index.isdigit() or not raw_index.isascii():
        return None
    index = int(raw_index)
    return index if index >= 1 else None


@router.get("/sitemap.xml")
async def get_sitemap(request: Request,
                      config: SitemapConfig = Depends(get_sitemap_config),
                      client_factory: Callable[[], CatalogClient] = Depends(get_catalog_client_factory)):
    """
    Sitemap of published products, collections and pages

    Returns a sitemap index when the catalog does not fit in one sitemap file.
    """
    base_url = _base_url(request)
    entries = await SitemapGenerator(client_factory(), config, base_url).generate_sitemap_urls()

    if not entries:
        return _no_data_response()

    return _xml_response(render_sitemap(entries, config, base_url))


@router.get("/sitemap/{index}.xml")
async def get_sitemap_chunk(index: str, request: Request,
                            config: SitemapConfig = Depends(get_sitemap_config),
                            client_factory: Callable[[], CatalogClient] = Depends(get_catalog_client_factory)):
    """
    One chunk of an indexed sitemap

    Redirects to /sitemap.xml when the chunk does not exist.
    """
    sitemap_index = _parse_sitemap_index(index)
    if sitemap_index is None:
        logger.info(f"Invalid sitemap index {index!r}, redirecting")
        return _redirect_to_main_sitemap()

    entries = await SitemapGenerator(client_factory(), config, _base_url(request)).generate_sitemap_urls()

    if not entries:
        return _no_data_response()

    sitemap = render_sitemap_page(entries, config, sitemap_index)
    if sitemap is None:
        logger.info(f"Sitemap {sitemap_index} does not exist, redirecting")
        return _redirect_to_main_sitemap()

    return _xml_response(sitemap)
