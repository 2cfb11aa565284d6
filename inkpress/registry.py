"""Lookup of helper functions by the name used in templates."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from inkpress import blog_helpers as bh
from inkpress import post_helpers as ph
from inkpress.models import HelperFunction

HELPER_FUNCTIONS: Mapping[str, HelperFunction] = MappingProxyType(
    {
        "null": bh.null_helper,
        # General
        "if": bh.if_helper,
        "unless": bh.unless_helper,
        "foreach": bh.foreach_helper,
        "!<": bh.extend_helper,
        "body": bh.body_helper,
        "asset": bh.asset_helper,
        "encode": bh.encode_helper,
        ">": bh.insert_helper,
        "meta_title": bh.meta_title_helper,
        "meta_description": bh.meta_description_helper,
        "ghost_head": bh.ghost_head_helper,
        "ghost_foot": bh.ghost_foot_helper,
        "body_class": bh.body_class_helper,
        "plural": bh.plural_helper,
        "image": ph.image_helper,
        "contentFor": bh.content_for_helper,
        "block": bh.block_helper,
        # @blog
        "@blog.title": bh.blog_title_helper,
        "@blog.url": bh.blog_url_helper,
        "@blog.logo": bh.blog_logo_helper,
        "@blog.cover": bh.blog_cover_helper,
        "@blog.description": bh.blog_description_helper,
        "@blog.navigation": bh.navigation_helper,
        # Post
        "post": ph.post_helper,
        "excerpt": ph.excerpt_helper,
        "title": ph.title_helper,
        "content": ph.content_helper,
        "post_class": ph.post_class_helper,
        "featured": ph.featured_helper,
        "id": ph.id_helper,
        "post.id": ph.id_helper,
        # Tag
        "tag.name": ph.tag_name_helper,
        "tag.slug": ph.tag_slug_helper,
        # Author
        "author": ph.author_helper,
        "bio": ph.bio_helper,
        "email": ph.email_helper,
        "website": ph.website_helper,
        "cover": ph.cover_helper,
        "location": ph.location_helper,
        "author.name": ph.author_name_helper,
        "author.bio": ph.bio_helper,
        "author.email": ph.email_helper,
        "author.website": ph.website_helper,
        "author.image": ph.author_image_helper,
        "author.cover": ph.cover_helper,
        "author.location": ph.location_helper,
        # Navigation
        "navigation": bh.navigation_helper,
        "label": bh.label_helper,
        "current": bh.current_helper,
        "slug": bh.slug_helper,
        # Loops
        "@first": ph.at_first_helper,
        "@last": ph.at_last_helper,
        "@even": ph.at_even_helper,
        "@odd": ph.at_odd_helper,
        "name": ph.name_helper,
        "url": ph.url_helper,
        # Pagination
        "pagination": bh.pagination_helper,
        "prev": bh.prev_helper,
        "next": bh.next_helper,
        "page": bh.page_helper,
        "pages": bh.pages_helper,
        "page_url": bh.page_url_helper,
        "pageUrl": bh.page_url_helper,
        # Conditions
        "posts": ph.posts_helper,
        "tags": ph.tags_helper,
        "pagination.prev": bh.prev_helper,
        "pagination.next": bh.next_helper,
        # Plural counts
        "pagination.total": bh.pagination_total_helper,
        "../pagination.total": bh.pagination_total_helper,
    }
)


def resolve_helper(name: str) -> HelperFunction:
    """Return the helper function for a template name, or the null helper."""
    return HELPER_FUNCTIONS.get(name, bh.null_helper)