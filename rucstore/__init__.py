"""Paged file storage, an LRU buffer pool, a fixed-size record manager and SQL syntax tree nodes."""

__version__ = "0.1.0"