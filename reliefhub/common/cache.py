"""
Read-through caching for ReliefHub.

Every aggregation runs behind this gate: the cache is read before any
provider is called, and written after the result is final and before it
is returned. A cache backend that misbehaves is only ever a miss.
"""

from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar
from pydantic import BaseModel, ValidationError
from reliefhub.observability.logging_setup import get_logger
from reliefhub.observability.metrics import cache_lookups, operation_seconds
from reliefhub.ports.cache import CachePort

log = get_logger("reliefhub.cache")

M = TypeVar("M", bound=BaseModel)


async def read_through(
    cache: CachePort,
    key: str,
    model: Type[M],
    compute: Callable[[], Awaitable[M]],
    *,
    ttl_sec: Optional[int] = None,
    operation: str,
) -> Tuple[M, bool]:
    """
    Returns the cached value for `key`, computing and storing it on miss.

    Exceptions raised by `compute` propagate and nothing is written.

    Args:
        cache: cache port
        key: cache key
        model: pydantic model the value decodes into
        compute: coroutine factory producing the value on miss
        ttl_sec: TTL, None for the cache default
        operation: metric and log label

    Returns:
        (value, hit) where hit tells whether the cache served it
    """
    try:
        cached = await cache.get(key)
    except Exception as e:
        log.error(f"Cache read failed, treating as miss: key={key} error={e}")
        cached = None

    if cached is not None:
        try:
            value = model.model_validate(cached)
        except ValidationError as e:
            log.warning(f"Stale cache shape, recomputing: key={key} error={e.error_count()} issues")
        else:
            cache_lookups.labels(operation=operation, result="hit").inc()
            log.debug(f"Cache hit: {key}")
            return value, True

    cache_lookups.labels(operation=operation, result="miss").inc()
    with operation_seconds.labels(operation=operation).time():
        value = await compute()

    try:
        await cache.set(key, value.model_dump(mode="json"), ttl_sec)
    except Exception as e:
        log.error(f"Cache write failed, result still returned: key={key} error={e}")

    return value, False
