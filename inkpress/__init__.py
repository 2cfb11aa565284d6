"""Theme compiler and renderer, slugs, RSS feeds, sitemaps, static files and a theme watcher for a small blog."""

__version__ = "0.1.0"