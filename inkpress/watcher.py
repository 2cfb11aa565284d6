"""Reloading of themes and plugins when their files change."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class _ModifiedHandler(FileSystemEventHandler):
    def __init__(self, watcher: "ThemeWatcher") -> None:
        super().__init__()
        self._watcher = watcher

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        try:
            self._watcher.dispatch(os.fsdecode(event.src_path))
        except RuntimeError:
            log.exception("Error while reloading theme or plugins")


class ThemeWatcher:
    """Watches directory trees and calls a handler for changed files by extension."""

    def __init__(self, handlers: Mapping[str, Callable[[], None]]) -> None:
        self.handlers = dict(handlers)
        self._observer: Optional[Observer] = None
        self._event_handler = _ModifiedHandler(self)
        self._watches: list = []
        self._directories: list[str] = []
        self._lock = threading.Lock()

    @property
    def watched_directories(self) -> list[str]:
        return list(self._directories)

    def watch(self, paths: Iterable[PathLike]) -> list[str]:
        """Watch every directory below the given paths, replacing earlier watches."""
        directories: list[str] = []
        for path in paths:
            root = Path(path)
            if not root.exists():
                raise FileNotFoundError(f"Cannot watch missing path: {root}")
            if not root.is_dir():
                continue
            directories.append(str(root))
            for current, subdirs, _ in os.walk(root):
                subdirs.sort()
                directories.extend(os.path.join(current, name) for name in subdirs)
        with self._lock:
            if self._observer is None:
                self._observer = Observer()
                self._observer.start()
            for watch in self._watches:
                self._observer.unschedule(watch)
            self._watches = [
                self._observer.schedule(self._event_handler, directory, recursive=False)
                for directory in directories
            ]
            self._directories = directories
        return list(directories)

    def dispatch(self, path: PathLike) -> bool:
        """Call the handler registered for the file's extension.

        Returns whether a handler ran. A failing handler raises RuntimeError.
        """
        target = Path(path)
        if target.is_dir():
            return False
        handler = self.handlers.get(target.suffix)
        if handler is None:
            return False
        try:
            handler()
        except Exception as error:
            raise RuntimeError(f"Error while reloading theme or plugins: {error}") from error
        return True

    def stop(self) -> None:
        """Stop watching and release the observer thread."""
        with self._lock:
            observer, self._observer = self._observer, None
            self._watches = []
            self._directories = []
        if observer is not None:
            observer.stop()
            observer.join()