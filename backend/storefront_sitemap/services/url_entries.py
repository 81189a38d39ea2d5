"""
Mapping of storefront nodes to sitemap <url> entries
"""

import re
from typing import Optional
from urllib.parse import quote

from storefront_sitemap.schemas.sitemap import RawNode, ResourceType, SitemapImage, UrlEntry

_XML_RESERVED = re.compile(r"[&<>'\"]")


def xml_encode(value: str) -> str:
    """Replace & < > ' " with numeric character references"""
    return _XML_RESERVED.sub(lambda match: f"&#{ord(match.group(0))};", value)


def build_url_entry(node: RawNode, resource_type: ResourceType, base_url: str) -> Optional[UrlEntry]:
    """
    Build the sitemap entry for a storefront node

    Args:
        node: Product, collection or page returned by the storefront
        resource_type: Type the node was fetched as
        base_url: Origin of the storefront, without trailing slash

    Returns:
        UrlEntry, or None when the node is not published on the online store
    """
    if not node.is_published:
        return None

    # Handles are percent-encoded for the path and XML-encoded for <loc>
    slug = xml_encode(quote(node.handle, safe=""))
    entry = UrlEntry(
        url=f"{base_url.rstrip('/')}/{resource_type.path_segment}/{slug}",
        last_mod=node.updated_at,
        change_freq=resource_type.change_frequency,
    )

    image = node.featured_image
    if resource_type is ResourceType.PRODUCTS and image is not None and image.url:
        entry.image = SitemapImage(
            url=xml_encode(image.url),
            title=xml_encode(node.title) if node.title else None,
            caption=xml_encode(image.alt_text) if image.alt_text else None,
        )

    return entry
