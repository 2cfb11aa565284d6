"""Template helpers for general, blog-wide, navigation and pagination output."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote_plus

from inkpress.arguments import process_helper_arguments
from inkpress.engine import RenderError, Renderer
from inkpress.models import Helper, HelperContext, Post, RequestData

log = logging.getLogger(__name__)

TRUE = "\x01"
FALSE = ""

_ESCAPES = str.maketrans(
    {"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;"}
)


def evaluate_escape(value: str, unescaped: bool) -> str:
    """HTML-escape value unless the helper was written with triple braces."""
    if unescaped:
        return value
    return value.translate(_ESCAPES)


def positive_ceiling(value: float) -> int:
    """Round a non-negative number up to the next integer."""
    whole = int(value)
    if value - whole > 0:
        whole += 1
    return whole


def _evaluate(renderer: Renderer, argument: Helper, values: RequestData, subject: Helper) -> str:
    function = argument.function or null_helper
    return function(renderer, subject, values)


def _current_post(values: RequestData) -> Post:
    try:
        return values.posts[values.current_post_index]
    except IndexError:
        raise RenderError("No post in scope.") from None


def _current_author_slug(values: RequestData) -> str:
    author = _current_post(values).author
    if author is None:
        raise RenderError("Post has no author.")
    return author.slug


def _post_count(renderer: Renderer, values: RequestData) -> Optional[int]:
    """Number of posts for the template being rendered, or None if unknown."""
    template = values.current_template
    if template == HelperContext.INDEX:
        return values.blog.post_count
    if template not in (HelperContext.TAG, HelperContext.AUTHOR):
        return 0
    try:
        if renderer.counter is None:
            raise LookupError("no post counter configured")
        if template == HelperContext.TAG:
            if values.current_tag is None:
                raise LookupError("no tag in scope")
            return renderer.counter.posts_by_tag(values.current_tag.id)
        post = _current_post(values)
        if post.author is None:
            raise LookupError("post has no author")
        return renderer.counter.posts_by_user(post.author.id)
    except LookupError as error:
        log.warning("Couldn't get number of posts: %s", error)
        return None


def _max_pages(count: int, posts_per_page: int) -> int:
    if posts_per_page < 1:
        return 0
    return positive_ceiling(count / posts_per_page)


def _listing_prefix(values: RequestData) -> str:
    if values.current_template == HelperContext.AUTHOR:
        return "/author/" + _current_author_slug(values)
    if values.current_template == HelperContext.TAG:
        return "/tag/" + (values.current_tag.slug if values.current_tag else "")
    return ""


def null_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    log.warning("This helper is not implemented: %s", helper.name)
    return FALSE


def if_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    condition = helper.arguments[0]
    if _evaluate(renderer, condition, values, condition):
        return renderer.execute(helper, values, values.current_helper_context)
    otherwise = helper.arguments[-1]
    if otherwise.name == "else":
        return renderer.execute(otherwise, values, values.current_helper_context)
    return FALSE


def unless_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    condition = helper.arguments[0]
    if not _evaluate(renderer, condition, values, condition):
        return renderer.execute(helper, values, values.current_helper_context)
    return FALSE


def foreach_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    kind = helper.arguments[0].name
    parts = []
    if kind == "posts":
        for index, _ in enumerate(values.posts):
            values.current_post_index = index
            parts.append(renderer.execute(helper, values, HelperContext.POST))
    elif kind == "tags":
        for index, _ in enumerate(_current_post(values).tags):
            values.current_tag_index = index
            parts.append(renderer.execute(helper, values, HelperContext.TAG))
    elif kind == "navigation":
        for index, _ in enumerate(values.blog.navigation_items):
            values.current_navigation_index = index
            parts.append(renderer.execute(helper, values, HelperContext.NAVIGATION))
    return "".join(parts)


def extend_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return helper.arguments[0].name if helper.arguments else FALSE


def body_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return helper.block


def asset_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    return values.blog.asset_path + helper.arguments[0].name


def encode_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    argument = helper.arguments[0]
    return quote_plus(_evaluate(renderer, argument, values, argument), safe="")


def insert_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if helper.arguments:
        template = renderer.templates.get(helper.arguments[0].name)
        if template is not None:
            return renderer.execute(template, values, values.current_helper_context)
    return FALSE


def meta_title_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    template = values.current_template
    if template == HelperContext.POST:
        return evaluate_escape(_current_post(values).title, helper.unescaped)
    if template == HelperContext.AUTHOR:
        author = _current_post(values).author
        name = author.name if author else ""
        return evaluate_escape(f"{name} - {values.blog.title}", helper.unescaped)
    if template == HelperContext.TAG:
        name = values.current_tag.name if values.current_tag else ""
        return evaluate_escape(f"{name} - {values.blog.title}", helper.unescaped)
    return evaluate_escape(values.blog.title, helper.unescaped)


def meta_description_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if (
        values.current_template == HelperContext.POST
        or values.current_helper_context == HelperContext.POST
    ):
        return evaluate_escape(_current_post(values).meta_description, helper.unescaped)
    return evaluate_escape(values.blog.description, helper.unescaped)


def ghost_head_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    url = evaluate_escape(values.blog.url, helper.unescaped)
    return f'<link rel="canonical" href="{url}{values.current_path}">'


def ghost_foot_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return FALSE


def body_class_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    template = values.current_template
    if template == HelperContext.POST:
        post = _current_post(values)
        classes = "post-template"
        if post.is_page:
            classes += " page-template page"
        return classes + "".join(f" tag-{tag.slug}" for tag in post.tags)
    if template == HelperContext.INDEX:
        return "home-template" if values.current_index_page == 1 else "paged archive-template"
    if template == HelperContext.AUTHOR:
        classes = "author-template author-" + _current_author_slug(values)
    elif template == HelperContext.TAG:
        slug = values.current_tag.slug if values.current_tag else ""
        classes = "tag-template tag-" + slug
    else:
        return "post-template"
    if values.current_index_page > 1:
        classes += " paged archive-template"
    return classes


def plural_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    count = _evaluate(renderer, helper.arguments[0], values, helper)
    if count == "":
        log.warning("Couldn't get count in plural helper")
        return FALSE
    for key, value in process_helper_arguments(helper.arguments).items():
        if (
            (count == "0" and key == "empty")
            or (count == "1" and key == "singular")
            or (count not in ("0", "1") and key == "plural")
        ):
            return value.replace("%", count)
    return FALSE


def content_for_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    values.content_for_helpers.append(helper)
    return FALSE


def block_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    wanted = helper.arguments[0].name
    for content in values.content_for_helpers:
        if content.arguments and content.arguments[0].name == wanted:
            return renderer.execute(content, values, values.current_helper_context)
    return FALSE


def blog_title_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(values.blog.title, helper.unescaped)


def blog_url_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(values.blog.url + "/", helper.unescaped)


def blog_logo_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(values.blog.logo, helper.unescaped)


def blog_cover_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(values.blog.cover, helper.unescaped)


def blog_description_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return evaluate_escape(values.blog.description, helper.unescaped)


def navigation_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not values.blog.navigation_items:
        return FALSE
    template = renderer.templates.get("navigation")
    if template is None:
        return FALSE
    return renderer.execute(template, values, values.current_helper_context)


def label_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    items = values.blog.navigation_items
    if not items:
        return FALSE
    return evaluate_escape(items[values.current_navigation_index].label, helper.unescaped)


def current_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    items = values.blog.navigation_items
    if items:
        url = items[values.current_navigation_index].url
        if not url.endswith("/"):
            url += "/"
        if values.current_path == url:
            return TRUE
    return FALSE


def slug_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    items = values.blog.navigation_items
    if not items:
        return FALSE
    return evaluate_escape(items[values.current_navigation_index].slug, helper.unescaped)


def pagination_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    template = renderer.templates.get("pagination")
    if template is None:
        return FALSE
    return renderer.execute(template, values, values.current_helper_context)


def prev_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return TRUE if values.current_index_page > 1 else FALSE


def next_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    count = _post_count(renderer, values)
    if count is None:
        return FALSE
    if values.current_index_page < _max_pages(count, values.blog.posts_per_page):
        return TRUE
    return FALSE


def page_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    return str(values.current_index_page)


def pages_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    count = _post_count(renderer, values)
    if count is None:
        return FALSE
    return str(max(_max_pages(count, values.blog.posts_per_page), 1) if count >= 0 else 1)


def page_url_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if not helper.arguments:
        return FALSE
    direction = helper.arguments[0].name
    if direction in ("prev", "pagination.prev"):
        if values.current_index_page <= 1:
            return FALSE
        page = values.current_index_page - 1
    elif direction in ("next", "pagination.next"):
        count = _post_count(renderer, values)
        if count is None:
            return FALSE
        if values.current_index_page >= _max_pages(count, values.blog.posts_per_page):
            return FALSE
        page = values.current_index_page + 1
    else:
        return FALSE
    url = _listing_prefix(values)
    if page > 1:
        url += f"/page/{page}"
    return url + "/"


def pagination_total_helper(renderer: Renderer, helper: Helper, values: RequestData) -> str:
    if values.current_template not in (
        HelperContext.INDEX,
        HelperContext.TAG,
        HelperContext.AUTHOR,
    ):
        return FALSE
    count = _post_count(renderer, values)
    return FALSE if count is None else str(count)