"""
Cache port interface.

This module defines the protocol for the expiring key-value cache
that wraps every aggregation.
"""

from typing import Any, Optional, Protocol


class CachePort(Protocol):
    """Expiring key-value cache port interface"""

    async def get(self, key: str) -> Optional[Any]:
        """
        Looks up a key.

        Backend failures must be reported as a miss, never raised.

        Args:
            key: cache key

        Returns:
            the stored JSON value, or None on miss or expiry
        """
        ...

    async def set(self, key: str, value: Any, ttl_sec: Optional[int] = None) -> None:
        """
        Stores a JSON-serializable value, replacing any previous entry whole.

        Backend failures must be logged and swallowed.

        Args:
            key: cache key
            value: JSON-serializable value
            ttl_sec: TTL in seconds, None for the adapter default
        """
        ...
