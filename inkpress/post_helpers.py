"""Template helpers for posts, tags and authors."""

from __future__ import annotations

import re

from inkpress.arguments import process_helper_arguments
from inkpress.blog_helpers import FALSE, TRUE, evaluate_escape
from inkpress.engine import RenderError, Renderer
from inkpress.models import Helper, HelperContext, Post, RequestData, Tag, User

DEFAULT_EXCERPT_WORDS = 50

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(html_text: str) -> str:
    """Remove HTML tags from a fragment, keeping its text."""
    return _TAG_PATTERN.sub("", html_text)


def _current_post(values: RequestData) -> Post:
    try:
        return values.posts[values.current_post_index]
    except IndexError:
        raise RenderError("No post in scope.") from None


def _current_author(values: RequestData) -> User:
    author = _current_post(values).author
    if author is None:
        raise RenderError("Post has no author.")
    return author


def _current_post_tag(values: RequestData) -> Tag:
    try:
        return _current_post(values).tags[values.current_tag_index]
    except IndexError:
        raise RenderError("No tag in scope.") from None


def _first_words(text: str, count: int) -> str:
    words = text.split()
    if len(words) < count:
        return text
    return " ".join(words[:count])


def post_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return renderer.execute(helper, values, HelperContext.POST)


def posts_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return TRUE if values.posts else FALSE


def excerpt_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if values.current_helper_context != HelperContext.POST:
        return FALSE
    text = strip_tags(_current_post(values).html)
    for key, value in process_helper_arguments(helper.arguments).items():
        if key not in ("words", "characters"):
            continue
        try:
            number = int(value)
        except ValueError:
            continue
        if key == "words":
            return _first_words(text, number)
        return text[: max(number, 0)]
    return _first_words(text, DEFAULT_EXCERPT_WORDS)


def title_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_post(values).title, helper.unescaped)


def content_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return _current_post(values).html


def post_class_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    post = _current_post(values)
    classes = "post"
    if post.is_featured:
        classes += " featured"
    if post.is_page:
        classes += " page"
    classes += "".join(f" tag-{tag.slug}" for tag in post.tags)
    return evaluate_escape(classes, helper.unescaped)


def featured_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return TRUE if _current_post(values).is_featured else FALSE


def id_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return str(_current_post(values).id)


def tags_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    tags = _current_post(values).tags
    if not tags:
        return FALSE
    separator, prefix, suffix, make_link = ", ", "", "", True
    for key, value in process_helper_arguments(helper.arguments).items():
        if key == "separator":
            separator = value
        elif key == "suffix":
            suffix = value
        elif key == "prefix":
            prefix = value
        elif key == "autolink" and value == "false":
            make_link = False
    rendered = []
    for tag in tags:
        name = evaluate_escape(tag.name, helper.unescaped)
        if make_link:
            name = f'<a href="/tag/{tag.slug}/">{name}</a>'
        rendered.append(name)
    output = separator.join(rendered)
    if prefix:
        output = f"{prefix} {output}"
    if suffix:
        output = f"{output} {suffix}"
    return output


def tag_name_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    tag = values.current_tag
    if tag is not None and tag.name:
        return evaluate_escape(tag.name, helper.unescaped)
    return evaluate_escape(_current_post_tag(values).name, helper.unescaped)


def tag_slug_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    tag = values.current_tag
    if tag is not None and tag.slug:
        return evaluate_escape(tag.slug, helper.unescaped)
    return evaluate_escape(_current_post_tag(values).slug, helper.unescaped)


def author_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if helper.block:
        return renderer.execute(helper, values, HelperContext.AUTHOR)
    author = _current_author(values)
    name = evaluate_escape(author.name, helper.unescaped)
    if process_helper_arguments(helper.arguments).get("autolink") == "false":
        return name
    return f'<a href="/author/{author.slug}/">{name}</a>'


def author_name_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).name, helper.unescaped)


def bio_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).bio, helper.unescaped)


def email_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).email, helper.unescaped)


def website_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).website, helper.unescaped)


def image_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    context = values.current_helper_context
    if context == HelperContext.POST:
        return evaluate_escape(_current_post(values).image, helper.unescaped)
    if context == HelperContext.AUTHOR:
        return evaluate_escape(_current_author(values).image, helper.unescaped)
    return FALSE


def author_image_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).image, helper.unescaped)


def cover_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).cover, helper.unescaped)


def location_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(_current_author(values).location, helper.unescaped)


def _scoped_index(values: RequestData) -> tuple[int, int] | None:
    """(index, length) of the post or tag loop in scope, or None."""
    context = values.current_helper_context
    if context == HelperContext.POST:
        return values.current_post_index, len(values.posts)
    if context == HelperContext.TAG:
        return values.current_tag_index, len(_current_post(values).tags)
    return None


def at_first_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    scoped = _scoped_index(values)
    return TRUE if scoped is not None and scoped[0] == 0 else FALSE


def at_last_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    scoped = _scoped_index(values)
    return TRUE if scoped is not None and scoped[0] == scoped[1] - 1 else FALSE


def at_even_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    # Counting starts at one, so index 0 is odd.
    scoped = _scoped_index(values)
    return TRUE if scoped is not None and scoped[0] % 2 == 1 else FALSE


def at_odd_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    scoped = _scoped_index(values)
    return TRUE if scoped is not None and scoped[0] % 2 == 0 else FALSE


def name_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if values.current_helper_context == HelperContext.TAG:
        return evaluate_escape(_current_post_tag(values).name, helper.unescaped)
    return evaluate_escape(_current_author(values).name, helper.unescaped)


def url_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    context = values.current_helper_context
    navigation_url = ""
    if context == HelperContext.NAVIGATION:
        try:
            navigation_url = values.blog.navigation_items[values.current_navigation_index].url
        except IndexError:
            raise RenderError("No navigation item in scope.") from None
    prefix = ""
    if process_helper_arguments(helper.arguments).get("absolute") == "true":
        external = navigation_url.startswith(("http://", "https://"))
        if context != HelperContext.NAVIGATION or not external:
            prefix = values.blog.url
    if context == HelperContext.POST:
        return evaluate_escape(f"{prefix}/{_current_post(values).slug}/", helper.unescaped)
    if context == HelperContext.AUTHOR:
        return evaluate_escape(
            f"{prefix}/author/{_current_author(values).slug}/", helper.unescaped
        )
    if context == HelperContext.NAVIGATION:
        return evaluate_escape(prefix + navigation_url, helper.unescaped)
    return FALSE