"""Core data types shared by the template engine and the blog helpers."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Callable, Optional


class HelperContext(IntEnum):
    """Scope a helper is evaluated in; also used for the template being rendered."""

    INDEX = 0
    POST = 1
    TAG = 2
    AUTHOR = 3
    NAVIGATION = 4


@dataclass
class Navigation:
    """An entry in the navigation menu."""

    label: str = ""
    url: str = ""
    slug: str = ""


@dataclass
class Tag:
    id: int = 0
    name: str = ""
    slug: str = ""


@dataclass
class User:
    """A blog author. Role: 1 administrator, 2 editor, 3 author, 4 owner."""

    id: int = 0
    name: str = ""
    slug: str = ""
    email: str = ""
    image: str = ""
    cover: str = ""
    bio: str = ""
    website: str = ""
    location: str = ""
    role: int = 0


@dataclass
class Post:
    id: int = 0
    uuid: str = ""
    title: str = ""
    slug: str = ""
    markdown: str = ""
    html: str = ""
    is_featured: bool = False
    is_page: bool = False
    is_published: bool = False
    date: Optional[datetime] = None
    tags: list[Tag] = field(default_factory=list)
    author: Optional[User] = None
    meta_description: str = ""
    image: str = ""


@dataclass
class Blog:
    """Blog-wide settings used while rendering templates."""

    url: str = ""
    title: str = ""
    description: str = ""
    logo: str = ""
    cover: str = ""
    asset_path: str = "/assets/"
    post_count: int = 0
    posts_per_page: int = 0
    active_theme: str = ""
    navigation_items: list[Navigation] = field(default_factory=list)
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)


HelperFunction = Callable[[Any, "Helper", "RequestData"], str]


@dataclass
class Helper:
    """A parsed template node. Shared across requests; never altered while rendering."""

    name: str = ""
    arguments: list[Helper] = field(default_factory=list)
    unescaped: bool = False
    position: int = 0
    block: str = ""
    children: list[Helper] = field(default_factory=list)
    function: Optional[HelperFunction] = field(default=None, compare=False)
    body_helper: Optional[Helper] = field(default=None, repr=False, compare=False)


@dataclass
class RequestData:
    """State specific to one rendering request."""

    posts: list[Post] = field(default_factory=list)
    blog: Blog = field(default_factory=Blog)
    current_tag: Optional[Tag] = None
    current_index_page: int = 0
    current_post_index: int = 0
    current_tag_index: int = 0
    current_navigation_index: int = 0
    current_helper_context: HelperContext = HelperContext.INDEX
    current_template: HelperContext = HelperContext.INDEX
    content_for_helpers: list[Helper] = field(default_factory=list)
    current_path: str = ""