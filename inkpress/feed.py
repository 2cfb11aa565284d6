"""RSS feed output for lists of posts."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional

from inkpress.models import Blog, Post

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
MEDIA_NAMESPACE = "http://search.yahoo.com/mrss/"
FEED_POST_LIMIT = 15

_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _rfc1123(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return format_datetime(moment)


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = value
    return element


def _item(channel: ET.Element, blog: Blog, post: Post) -> None:
    item = ET.SubElement(channel, "item")
    _text(item, "title", post.title)
    _text(item, "link", f"{blog.url}/{post.slug}")
    _text(item, "description", post.html)
    if post.author is not None and post.author.name:
        _text(item, "author", post.author.name)
    guid = _text(item, "guid", post.uuid)
    guid.set("isPermaLink", "false")
    if post.date is not None:
        _text(item, "pubDate", _rfc1123(post.date))
    if post.image:
        ET.SubElement(
            item, "media:content", {"url": blog.url + post.image, "medium": "image"}
        )


def render_rss(blog: Blog, posts: Iterable[Post], now: Optional[datetime] = None) -> str:
    """Render an RSS 2.0 document for the blog and its posts.

    Posts without an id are left out.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    rss = ET.Element(
        "rss",
        {"version": "2.0", "xmlns:atom": ATOM_NAMESPACE, "xmlns:media": MEDIA_NAMESPACE},
    )
    channel = ET.SubElement(rss, "channel")
    _text(channel, "title", blog.title)
    _text(channel, "link", blog.url)
    _text(channel, "description", blog.description)
    ET.SubElement(
        channel,
        "atom:link",
        {"href": blog.url + "/rss/", "rel": "self", "type": "application/rss+xml"},
    )
    _text(channel, "lastBuildDate", _rfc1123(now))
    image = ET.SubElement(channel, "image")
    _text(image, "url", blog.url + blog.logo)
    _text(image, "title", blog.title)
    _text(image, "link", blog.url)
    for post in posts:
        if post.id != 0:
            _item(channel, blog, post)
    ET.indent(rss, space="  ")
    return _DECLARATION + ET.tostring(rss, encoding="unicode")