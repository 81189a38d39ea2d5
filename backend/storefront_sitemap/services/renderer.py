"""
Sitemap XML documents
"""

from typing import Iterable

from storefront_sitemap.schemas.sitemap import UrlEntry

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"


def render_url_tag(entry: UrlEntry) -> str:
    """Render one <url> block; image title and caption are empty when missing"""
    image_tag = ""
    if entry.image is not None:
        image_tag = (
            "<image:image>"
            f"<image:loc>{entry.image.url}</image:loc>"
            f"<image:title>{entry.image.title or ''}</image:title>"
            f"<image:caption>{entry.image.caption or ''}</image:caption>"
            "</image:image>"
        )

    return (
        "<url>"
        f"<loc>{entry.url}</loc>"
        f"<lastmod>{entry.last_mod}</lastmod>"
        f"<changefreq>{entry.change_freq}</changefreq>"
        f"{image_tag}"
        "</url>"
    )


def render_sitemap_tag(url: str) -> str:
    return f"<sitemap><loc>{url}</loc></sitemap>"


def render_urlset(entries: Iterable[UrlEntry]) -> str:
    """Render a <urlset> document with the image sitemap namespace"""
    body = "\n".join(render_url_tag(entry) for entry in entries)
    return (
        f"{XML_DECLARATION}\n"
        f'<urlset xmlns="{SITEMAP_NS}" xmlns:image="{IMAGE_NS}">\n'
        f"{body}\n"
        "</urlset>\n"
    )


def render_sitemap_index(urls: Iterable[str]) -> str:
    """Render a <sitemapindex> document pointing at the given sitemap files"""
    body = "\n".join(render_sitemap_tag(url) for url in urls)
    return (
        f"{XML_DECLARATION}\n"
        f'<sitemapindex xmlns="{SITEMAP_NS}">\n'
        f"{body}\n"
        "</sitemapindex>\n"
    )
