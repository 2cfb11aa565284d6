"""Execution of compiled templates against per-request data."""

from __future__ import annotations

import logging
from typing import Mapping, MutableMapping, Optional, Protocol, Sequence

from inkpress.models import Blog, Helper, HelperContext, Post, RequestData, Tag

log = logging.getLogger(__name__)

EXTEND_HELPER_NAME = "!<"


class RenderError(Exception):
    """Raised when a template cannot be rendered."""


class PostCounter(Protocol):
    """Source of post counts used by pagination helpers.

    Implementations raise LookupError when a count cannot be determined.
    """

    def posts_by_user(self, user_id: int) -> int: ...

    def posts_by_tag(self, tag_id: int) -> int: ...


class Renderer:
    """Renders compiled templates (a name -> Helper mapping)."""

    def __init__(
        self,
        templates: MutableMapping[str, Helper],
        counter: Optional[PostCounter] = None,
    ) -> None:
        self.templates = templates
        self.counter = counter

    def _call(self, helper: Helper, values: RequestData) -> str:
        if helper.function is None:
            log.warning("This helper is not implemented: %s", helper.name)
            return ""
        return helper.function(self, helper, values)

    def _template(self, name: str) -> Helper:
        try:
            return self.templates[name]
        except KeyError:
            raise RenderError(f"Template '{name}' is not available.") from None

    def execute(self, helper: Helper, values: RequestData, context: int) -> str:
        """Render a helper's block, splicing in the output of its children."""
        previous = values.current_helper_context
        values.current_helper_context = HelperContext(context)
        try:
            block = helper.block
            offset = 0
            extend_name: Optional[str] = None
            for index, child in enumerate(helper.children):
                if index == 0 and child.name == EXTEND_HELPER_NAME:
                    extend_name = self._call(child, values)
                    continue
                addition = self._call(child, values)
                cut = child.position + offset
                block = block[:cut] + addition + block[cut:]
                offset += len(addition)
            if extend_name is not None:
                parent = self.templates.get(extend_name)
                if parent is None:
                    raise RenderError(f"Extended template '{extend_name}' is not available.")
                if parent.body_helper is not None:
                    parent.body_helper.block = block
                return self.execute(parent, values, values.current_helper_context)
            return block
        finally:
            values.current_helper_context = previous

    def render_post(self, post: Post, blog: Blog, path: str = "") -> str:
        """Render a single post or page."""
        if not post.is_published:
            raise RenderError("Post not published.")
        with blog.lock:
            values = RequestData(
                posts=[post],
                blog=blog,
                current_template=HelperContext.POST,
                current_path=path,
            )
            template = self.templates.get(f"page-{post.slug}")
            if template is None and post.is_page:
                template = self.templates.get("page")
            if template is None:
                template = self._template("post")
            return self.execute(template, values, HelperContext.POST)

    def _render_listing(
        self,
        names: Sequence[str],
        posts: Sequence[Post],
        blog: Blog,
        page: int,
        path: str,
        template_kind: HelperContext,
        tag: Optional[Tag] = None,
    ) -> str:
        with blog.lock:
            values = RequestData(
                posts=list(posts),
                blog=blog,
                current_tag=tag,
                current_index_page=page,
                current_template=template_kind,
                current_path=path,
            )
            template = next(
                (self.templates[name] for name in names if name in self.templates), None
            )
            if template is None:
                raise RenderError(f"Template '{names[-1]}' is not available.")
            return self.execute(template, values, HelperContext.INDEX)

    def render_index(self, posts: Sequence[Post], blog: Blog, page: int = 1, path: str = "/") -> str:
        """Render a page of the index."""
        return self._render_listing(("index",), posts, blog, page, path, HelperContext.INDEX)

    def render_author(self, posts: Sequence[Post], blog: Blog, page: int = 1, path: str = "") -> str:
        """Render an author's page, falling back to the index template."""
        return self._render_listing(
            ("author", "index"), posts, blog, page, path, HelperContext.AUTHOR
        )

    def render_tag(
        self, tag: Tag, posts: Sequence[Post], blog: Blog, page: int = 1, path: str = ""
    ) -> str:
        """Render a tag's page, falling back to the index template."""
        return self._render_listing(
            ("tag", "index"), posts, blog, page, path, HelperContext.TAG, tag=tag
        )


TemplateMap = Mapping[str, Helper]