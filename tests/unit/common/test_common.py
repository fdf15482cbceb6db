"""
Common module unit tests

Tests the read-through cache gate and the clock helper.
"""

from datetime import timezone
from unittest.mock import AsyncMock
import pytest
from reliefhub.common.cache import read_through
from reliefhub.common.clock import utc_now
from reliefhub.core.models import Coordinate


def _coordinate(source: str = "nominatim") -> Coordinate:
    return Coordinate(lat=1.0, lng=2.0, source=source)


class TestReadThrough:
    """read_through tests"""

    @pytest.mark.asyncio
    async def test_miss_computes_and_stores(self, memory_cache):
        compute = AsyncMock(return_value=_coordinate())

        value, hit = await read_through(memory_cache, "k", Coordinate, compute, operation="test")

        assert hit is False
        assert value.source == "nominatim"
        assert await memory_cache.get("k") == {"lat": 1.0, "lng": 2.0, "formatted_address": "", "source": "nominatim"}

    @pytest.mark.asyncio
    async def test_hit_skips_compute(self, memory_cache):
        await memory_cache.set("k", _coordinate("google_maps").model_dump(mode="json"))
        compute = AsyncMock()

        value, hit = await read_through(memory_cache, "k", Coordinate, compute, operation="test")

        assert hit is True
        assert value.source == "google_maps"
        compute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_shape_is_recomputed(self, memory_cache):
        await memory_cache.set("k", {"unexpected": True})
        compute = AsyncMock(return_value=_coordinate())

        value, hit = await read_through(memory_cache, "k", Coordinate, compute, operation="test")

        assert hit is False
        compute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_compute_error_propagates_without_write(self, memory_cache):
        compute = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await read_through(memory_cache, "k", Coordinate, compute, operation="test")
        assert await memory_cache.get("k") is None

    @pytest.mark.asyncio
    async def test_cache_outage_is_a_miss(self):
        cache = AsyncMock()
        cache.get.side_effect = ConnectionError("down")
        cache.set.side_effect = ConnectionError("down")
        compute = AsyncMock(return_value=_coordinate())

        value, hit = await read_through(cache, "k", Coordinate, compute, operation="test")

        assert hit is False
        assert value.lat == 1.0

    @pytest.mark.asyncio
    async def test_ttl_is_forwarded(self):
        cache = AsyncMock()
        cache.get.return_value = None
        await read_through(cache, "k", Coordinate, AsyncMock(return_value=_coordinate()), ttl_sec=42, operation="test")
        assert cache.set.await_args.args[2] == 42


def test_utc_now_is_aware():
    assert utc_now().tzinfo == timezone.utc
