"""
SQLite-based cache for ReliefHub.

This module implements the cache port on SQLite. Each set is a single
INSERT OR REPLACE, so readers observe either the previous or the new
value of a key, never a mix.
"""

import json
import time
from typing import Any, Callable, Optional
import aiosqlite
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.cache")

# SQLite schema
SCHEMA = """
CREATE TABLE IF NOT EXISTS cache (
    k TEXT PRIMARY KEY,
    v TEXT NOT NULL,
    exp REAL NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_cache_exp ON cache(exp);
"""

class SQLiteCache:
    """SQLite-backed expiring cache"""

    def __init__(self, path: str, default_ttl_sec: int, clock: Callable[[], float] = time.time,
                 sweep_interval_sec: float = 300.0):
        """
        Initializes the cache.

        Args:
            path: SQLite database file path
            default_ttl_sec: TTL used when set() gets none
            clock: epoch-seconds clock
            sweep_interval_sec: minimum time between gc() runs triggered by set()
        """
        self.path = path
        self.default_ttl = default_ttl_sec
        self.sweep_interval = sweep_interval_sec
        self._clock = clock
        self._last_sweep = clock()
        log.info(f"SQLiteCache initialized: {path}, default TTL: {default_ttl_sec}s")

    async def init(self) -> None:
        """Creates the schema."""
        async with aiosqlite.connect(self.path) as db:
            await db.executescript(SCHEMA)
            await db.commit()
        log.info("SQLiteCache schema ready")

    async def get(self, key: str) -> Optional[Any]:
        """
        Reads a live entry.

        Args:
            key: cache key

        Returns:
            decoded value, or None on miss, expiry or backend error
        """
        try:
            async with aiosqlite.connect(self.path) as db:
                cursor = await db.execute("SELECT v, exp FROM cache WHERE k = ?", (key,))
                row = await cursor.fetchone()
        except Exception as e:
            log.error(f"SQLiteCache get error, treating as miss: {e}")
            return None

        if row is None or row[1] <= self._clock():
            return None

        try:
            return json.loads(row[0])
        except ValueError as e:
            log.warning(f"SQLiteCache entry is not valid JSON, treating as miss: key={key} error={e}")
            return None

    async def set(self, key: str, value: Any, ttl_sec: Optional[int] = None) -> None:
        """
        Writes an entry whole, replacing any previous one.

        Args:
            key: cache key
            value: JSON-serializable value
            ttl_sec: TTL in seconds, None for the default
        """
        ttl = self.default_ttl if ttl_sec is None else ttl_sec
        try:
            payload = json.dumps(value, ensure_ascii=False)
            async with aiosqlite.connect(self.path) as db:
                await db.execute(
                    "INSERT OR REPLACE INTO cache (k, v, exp) VALUES (?, ?, ?)",
                    (key, payload, self._clock() + ttl)
                )
                await db.commit()
        except Exception as e:
            log.error(f"SQLiteCache set error, entry skipped: key={key} error={e}")

        if self._clock() - self._last_sweep >= self.sweep_interval:
            await self.gc()

    async def gc(self, now: Optional[float] = None) -> int:
        """
        Removes expired entries.

        Args:
            now: epoch seconds, None for the clock

        Returns:
            number of removed entries
        """
        if now is None:
            now = self._clock()
        self._last_sweep = now

        try:
            async with aiosqlite.connect(self.path) as db:
                cursor = await db.execute("DELETE FROM cache WHERE exp <= ?", (now,))
                await db.commit()
                deleted = cursor.rowcount
                if deleted > 0:
                    log.info(f"Removed {deleted} expired cache entries")
                return deleted
        except Exception as e:
            log.error(f"SQLiteCache gc error: {e}")
            return 0
