"""
Storage adapter unit tests

Tests the SQLite and in-process cache adapters.
"""

import aiosqlite
import pytest
from reliefhub.adapters.storage.memory_cache import MemoryCache
from reliefhub.adapters.storage.sqlite_cache import SQLiteCache
from tests.factories import ManualClock


class TestSQLiteCache:
    """SQLite cache tests"""

    @pytest.fixture
    def clock(self):
        return ManualClock(start=1_700_000_000.0)

    @pytest.fixture
    def cache(self, temp_db_path, clock):
        """SQLite cache for tests"""
        return SQLiteCache(temp_db_path, default_ttl_sec=60, clock=clock)

    @pytest.mark.asyncio
    async def test_set_then_get(self, cache):
        await cache.init()
        await cache.set("k", {"items": [1, 2], "name": "x"})
        assert await cache.get("k") == {"items": [1, 2], "name": "x"}

    @pytest.mark.asyncio
    async def test_miss(self, cache):
        await cache.init()
        assert await cache.get("absent") is None

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, cache, clock):
        await cache.init()
        await cache.set("k", "v", ttl_sec=10)

        clock.advance(9)
        assert await cache.get("k") == "v"
        clock.advance(1)
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_default_ttl(self, cache, clock):
        await cache.init()
        await cache.set("k", "v")
        clock.advance(59)
        assert await cache.get("k") == "v"
        clock.advance(1)
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_set_replaces_whole_entry(self, cache):
        await cache.init()
        await cache.set("k", {"a": 1})
        await cache.set("k", {"b": 2})
        assert await cache.get("k") == {"b": 2}

    @pytest.mark.asyncio
    async def test_gc_removes_expired_entries(self, cache, clock):
        await cache.init()
        await cache.set("short", 1, ttl_sec=5)
        await cache.set("long", 2, ttl_sec=500)

        clock.advance(10)
        assert await cache.gc() == 1
        assert await cache.get("long") == 2

    @pytest.mark.asyncio
    async def test_set_sweeps_expired_rows_after_interval(self, temp_db_path, clock):
        cache = SQLiteCache(temp_db_path, default_ttl_sec=60, clock=clock, sweep_interval_sec=100)
        await cache.init()
        for i in range(50):
            await cache.set(f"k{i}", i, ttl_sec=1)

        clock.advance(10)
        await cache.set("early", 0)
        assert await self._row_count(temp_db_path) == 51

        clock.advance(100)
        await cache.set("late", 1)
        assert await self._row_count(temp_db_path) == 1
        assert await cache.get("late") == 1

    @staticmethod
    async def _row_count(path):
        async with aiosqlite.connect(path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM cache")
            (count,) = await cursor.fetchone()
        return count

    @pytest.mark.asyncio
    async def test_backend_failure_is_a_miss(self, tmp_path):
        # Directory path: sqlite cannot open it as a database
        cache = SQLiteCache(str(tmp_path), default_ttl_sec=60)
        assert await cache.get("k") is None
        await cache.set("k", "v")

    @pytest.mark.asyncio
    async def test_unserializable_value_is_skipped(self, cache):
        await cache.init()
        await cache.set("k", object())
        assert await cache.get("k") is None


class TestMemoryCache:
    """In-process cache tests"""

    @pytest.mark.asyncio
    async def test_set_then_get(self, memory_cache):
        await memory_cache.set("k", [1, "two"])
        assert await memory_cache.get("k") == [1, "two"]

    @pytest.mark.asyncio
    async def test_values_are_copies(self, memory_cache):
        value = {"items": [1]}
        await memory_cache.set("k", value)
        value["items"].append(2)
        cached = await memory_cache.get("k")
        cached["items"].append(3)
        assert await memory_cache.get("k") == {"items": [1]}

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, memory_cache, clock):
        await memory_cache.set("k", "v", ttl_sec=30)
        clock.advance(29)
        assert await memory_cache.get("k") == "v"
        clock.advance(1)
        assert await memory_cache.get("k") is None
        assert len(memory_cache) == 0

    @pytest.mark.asyncio
    async def test_unserializable_value_is_skipped(self):
        cache = MemoryCache(default_ttl_sec=60)
        await cache.set("k", {1, 2})
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_writes_sweep_expired_entries(self, clock):
        cache = MemoryCache(default_ttl_sec=60, clock=clock, sweep_interval_sec=30)
        for i in range(1000):
            await cache.set(f"geocode:place {i}", i, ttl_sec=1)

        clock.advance(10)
        await cache.set("fresh-0", 0)
        assert len(cache) == 1001

        clock.advance(30)
        for i in range(1, 5):
            await cache.set(f"fresh-{i}", i)
        assert len(cache) == 5
        assert await cache.get("fresh-0") == 0

    @pytest.mark.asyncio
    async def test_gc_removes_only_expired(self, memory_cache, clock):
        await memory_cache.set("short", 1, ttl_sec=5)
        await memory_cache.set("long", 2, ttl_sec=500)

        clock.advance(10)
        assert await memory_cache.gc() == 1
        assert len(memory_cache) == 1
        assert await memory_cache.get("long") == 2
