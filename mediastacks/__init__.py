"""Unified search over movie, book and album catalogs with a small favorites list."""

__version__ = "0.1.0"
