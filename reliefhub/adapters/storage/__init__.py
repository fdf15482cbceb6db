"""
Storage adapters for ReliefHub hexagonal architecture.

This module contains the cache adapters: a SQLite-backed store for
deployments and an in-process store for tests and single-node runs.
"""

from .sqlite_cache import SQLiteCache
from .memory_cache import MemoryCache

__all__ = ["SQLiteCache", "MemoryCache"]
