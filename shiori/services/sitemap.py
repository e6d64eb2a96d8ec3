"""XML sitemap generation."""

from collections.abc import Iterable
from xml.etree import ElementTree as ET

from shiori.models.post import Post

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (path, changefreq, priority)
STATIC_PAGES = [
    ("/", "daily", "1.0"),
    ("/blog", "daily", "0.9"),
    ("/about", "monthly", "0.7"),
]


def _add_url(
    urlset: ET.Element, loc: str, changefreq: str, priority: str, lastmod: str | None = None
) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    if lastmod:
        ET.SubElement(url, "lastmod").text = lastmod
    ET.SubElement(url, "changefreq").text = changefreq
    ET.SubElement(url, "priority").text = priority


def build_sitemap(site_url: str, posts: Iterable[Post]) -> str:
    """Render the sitemap for static pages and every post."""
    base = site_url.rstrip("/")
    urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)

    for path, changefreq, priority in STATIC_PAGES:
        _add_url(urlset, f"{base}{path}", changefreq, priority)

    for post in posts:
        lastmod = post.created_at.isoformat() if post.created_at else None
        _add_url(urlset, f"{base}/blog/{post.slug}", "weekly", "0.8", lastmod)

    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'
