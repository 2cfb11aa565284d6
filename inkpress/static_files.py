"""Serving of the blog's root-level static files (favicon, robots.txt, ...)."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

STATIC_FILE_NAMES = (
    "favicon.ico",
    "robots.txt",
    "android-chrome-192x192.png",
    "android-chrome-512x512.png",
    "apple-touch-icon.png",
    "favicon-16x16.png",
    "favicon-32x32.png",
)

STATIC_ROUTES = tuple("/" + name for name in STATIC_FILE_NAMES)


@dataclass(frozen=True)
class StaticFile:
    name: str
    path: Path
    ext: str
    content: bytes
    mime_type: str


def _load(name: str, path: Path) -> StaticFile:
    content = path.read_bytes()
    mime_type = mimetypes.guess_type(path.name)[0] or ""
    return StaticFile(name=name, path=path, ext=path.suffix, content=content, mime_type=mime_type)


class StaticFiles:
    """The well-known static files of a directory, kept in memory once read."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self._cache: dict[str, StaticFile] = {}
        for name in STATIC_FILE_NAMES:
            try:
                self._cache[name] = _load(name, self.directory / name)
            except OSError as error:
                log.warning("Error reading static file %s: %s", name, error)

    def get(self, path: str) -> StaticFile:
        """Return the file for a request path; raise FileNotFoundError if absent."""
        name = path.lstrip("/")
        cached = self._cache.get(name)
        if cached is not None:
            return cached
        root = self.directory.resolve()
        target = (root / name).resolve()
        if target != root and root not in target.parents:
            raise FileNotFoundError(f"Static file not found: {path}")
        if not target.is_file():
            raise FileNotFoundError(f"Static file not found: {path}")
        return _load(name, target)