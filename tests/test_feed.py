import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from inkpress.feed import ATOM_NAMESPACE, MEDIA_NAMESPACE, render_rss
from inkpress.models import Blog, Post, User

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
POSTED = datetime(2024, 4, 2, 8, 15, tzinfo=timezone.utc)


def _blog():
    return Blog(
        url="https://blog.example.com",
        title="My Blog",
        description="Notes & thoughts",
        logo="/images/logo.png",
    )


def _post(post_id, slug, **extra):
    return Post(
        id=post_id,
        uuid=f"uuid-{post_id}",
        title=f"Title {post_id}",
        slug=slug,
        html="<p>Body & more</p>",
        date=POSTED,
        author=User(name="Ann"),
        **extra,
    )


def _channel(text):
    root = ET.fromstring(text.encode("utf-8"))
    assert root.tag == "rss"
    return root, root.find("channel")


def test_document_header_and_version():
    text = render_rss(_blog(), [], NOW)
    root, _ = _channel(text)
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert root.get("version") == "2.0"


def test_channel_metadata():
    blog = _blog()
    _, channel = _channel(render_rss(blog, [], NOW))
    assert channel.findtext("title") == blog.title
    assert channel.findtext("link") == blog.url
    assert channel.findtext("description") == blog.description
    assert channel.find("image").findtext("url") == blog.url + blog.logo
    assert channel.find("image").findtext("link") == blog.url
    self_link = channel.find(f"{{{ATOM_NAMESPACE}}}link")
    assert self_link.get("href") == blog.url + "/rss/"


def test_last_build_date_round_trips():
    _, channel = _channel(render_rss(_blog(), [], NOW))
    assert parsedate_to_datetime(channel.findtext("lastBuildDate")) == NOW


def test_naive_time_is_treated_as_utc():
    naive = datetime(2024, 5, 1, 12, 30)
    _, channel = _channel(render_rss(_blog(), [], naive))
    assert parsedate_to_datetime(channel.findtext("lastBuildDate")) == NOW


def test_posts_without_id_are_skipped_and_order_kept():
    posts = [_post(2, "second"), _post(0, "empty"), _post(1, "first")]
    _, channel = _channel(render_rss(_blog(), posts, NOW))
    titles = [item.findtext("title") for item in channel.findall("item")]
    assert titles == ["Title 2", "Title 1"]


def test_item_fields():
    blog = _blog()
    post = _post(7, "hello-world")
    _, channel = _channel(render_rss(blog, [post], NOW))
    [item] = channel.findall("item")
    assert item.findtext("link") == blog.url + "/" + post.slug
    assert item.findtext("guid") == post.uuid
    assert item.findtext("description") == post.html
    assert item.findtext("author") == "Ann"
    assert parsedate_to_datetime(item.findtext("pubDate")) == POSTED


def test_item_image_only_when_set():
    blog = _blog()
    posts = [_post(1, "plain"), _post(2, "pictured", image="/images/cover.jpg")]
    _, channel = _channel(render_rss(blog, posts, NOW))
    plain, pictured = channel.findall("item")
    media = f"{{{MEDIA_NAMESPACE}}}content"
    assert plain.find(media) is None
    assert pictured.find(media).get("url") == blog.url + "/images/cover.jpg"