"""Helpers for reading template arguments and tag lists."""

from __future__ import annotations

from typing import Iterable

from inkpress.models import Helper, Tag
from inkpress.slugs import generate_slug


def process_helper_arguments(arguments: Iterable[Helper]) -> dict[str, str]:
    """Map "key=value" argument names to {key: value}; bare names map to ""."""
    result: dict[str, str] = {}
    for argument in arguments:
        key, sep, value = argument.name.partition("=")
        if sep:
            result[key] = value
        else:
            result[argument.name] = ""
    return result


def tags_from_comma_string(text: str) -> list[Tag]:
    """Build tags from a comma separated list, skipping empty entries."""
    names = (part.strip() for part in text.split(","))
    return [Tag(name=name, slug=generate_slug(name, "tags")) for name in names if name]