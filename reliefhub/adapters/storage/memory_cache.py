"""
In-process cache for ReliefHub.

Used when no cache path is configured, and by tests. Values are stored
as JSON text so callers never share mutable state with the cache.
Expired entries are dropped when read, and swept in bulk by a write once
the sweep interval has passed.
"""

import asyncio
import json
import time
from typing import Any, Callable, Dict, Optional, Tuple
from reliefhub.observability.logging_setup import get_logger

log = get_logger("reliefhub.cache")


class MemoryCache:
    """Dictionary-backed expiring cache"""

    def __init__(self, default_ttl_sec: int, clock: Callable[[], float] = time.monotonic,
                 sweep_interval_sec: float = 300.0):
        self.default_ttl = default_ttl_sec
        self.sweep_interval = sweep_interval_sec
        self._clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}
        self._lock = asyncio.Lock()
        self._last_sweep = clock()

    def _purge_expired(self, now: float) -> int:
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now
        if expired:
            log.debug(f"MemoryCache swept {len(expired)} expired entries")
        return len(expired)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if expires_at <= self._clock():
            async with self._lock:
                # Another writer may have refreshed the key meanwhile
                if self._entries.get(key) is entry:
                    del self._entries[key]
            return None
        return json.loads(payload)

    async def set(self, key: str, value: Any, ttl_sec: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl_sec is None else ttl_sec
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            log.error(f"MemoryCache value not serializable, entry skipped: key={key} error={e}")
            return
        async with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.sweep_interval:
                self._purge_expired(now)
            self._entries[key] = (now + ttl, payload)

    async def gc(self) -> int:
        """Removes every expired entry and returns how many were removed."""
        async with self._lock:
            return self._purge_expired(self._clock())

    def __len__(self) -> int:
        return len(self._entries)
