"""XML sitemap output."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Iterable

from inkpress.models import Post

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_CONTENT_TYPE = "application/xml; charset=utf-8"
SITEMAP_POST_LIMIT = 9999

_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def sitemap_base_url(url: str, https_url: str, https_usage: str) -> str:
    """Pick the blog's public address: the HTTPS one unless HTTPS is unused."""
    return url if https_usage == "None" else https_url


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset()
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if not offset:
        return stamp + "Z"
    total = int(offset.total_seconds()) // 60
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total), 60)
    return f"{stamp}{sign}{hours:02d}:{minutes:02d}"


def _add_url(
    urlset: ET.Element,
    loc: str,
    changefreq: str,
    priority: str,
    lastmod: str = "",
) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    if lastmod:
        ET.SubElement(url, "lastmod").text = lastmod
    ET.SubElement(url, "changefreq").text = changefreq
    ET.SubElement(url, "priority").text = priority


def _add_posts(
    urlset: ET.Element,
    base_url: str,
    posts: list[Post],
    pages: bool,
    changefreq: str,
    priority: str,
) -> None:
    for post in posts:
        if post.is_published and post.is_page == pages:
            lastmod = _rfc3339(post.date) if post.date is not None else ""
            _add_url(urlset, f"{base_url}/{post.slug}/", changefreq, priority, lastmod)


def build_sitemap(base_url: str, posts: Iterable[Post]) -> str:
    """Render the sitemap: the home page, then published posts, then published pages."""
    posts = list(posts)
    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NAMESPACE})
    _add_url(urlset, base_url, "daily", "1.0")
    _add_posts(urlset, base_url, posts, False, "weekly", "0.8")
    _add_posts(urlset, base_url, posts, True, "monthly", "0.6")
    ET.indent(urlset, space="  ")
    return _DECLARATION + ET.tostring(urlset, encoding="unicode")