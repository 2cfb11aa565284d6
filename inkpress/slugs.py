"""URL slug generation."""

from __future__ import annotations

import re
import unicodedata
from typing import Callable, Optional

MAX_SLUG_LENGTH = 75
RESERVED_POST_SLUGS = frozenset({"rss", "tag", "author", "page", "admin"})
_HYPHENS = re.compile("-+")

SlugExists = Callable[[str, str], bool]


def _map_char(char: str) -> str:
    if char in " -/":
        return "-"
    if char == "_" or char.isalpha() or unicodedata.category(char) == "Nd":
        return char
    return ""


def _truncate(slug: str) -> str:
    if len(slug) <= MAX_SLUG_LENGTH:
        return slug
    cut = slug[:MAX_SLUG_LENGTH]
    lower_bound = MAX_SLUG_LENGTH - MAX_SLUG_LENGTH // 2
    # Prefer to cut at a hyphen, but not too close to the start.
    for i in range(MAX_SLUG_LENGTH - 1, lower_bound, -1):
        if cut[i] == "-":
            return cut[:i]
    return cut


def generate_slug(text: str, table: str, exists: Optional[SlugExists] = None) -> str:
    """Turn text into a slug that is unique in the given table.

    ``exists(table, slug)`` reports whether a slug is already taken. Slugs for
    "tags" and "navigation" are not made unique.
    """
    mapped = "".join(_map_char(c) for c in text.strip().lower())
    output = _truncate(_HYPHENS.sub("-", mapped))
    if table == "posts" and output in RESERVED_POST_SLUGS:
        output = unique_slug(output, table, exists, 2)
    elif table in ("tags", "navigation"):
        return output
    return unique_slug(output, table, exists, 1)


def unique_slug(
    slug: str, table: str, exists: Optional[SlugExists] = None, suffix: int = 1
) -> str:
    """Return slug, or slug-N with the lowest N >= suffix that is not taken."""
    while True:
        candidate = slug if suffix <= 1 else f"{slug}-{suffix}"
        if exists is None or not exists(table, candidate):
            return candidate
        suffix += 1