"""ReadCache protocol for read-through caching of remote reference data.

Entries expire on their own after a time-to-live; there is no write-side
invalidation. A caller that needs fresh data bypasses the cache with a
force-refresh flag and stores the new value.

Usage:
    key = cache_key("projects", {"customerId": 42})
    hit = await cache.get(key)
    if hit is None:
        value = await fetch()
        await cache.set(key, value)
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ReadCache(Protocol):
    """Protocol for a TTL-bounded key/value cache.

    The expiry policy (TTL, jitter) is implementation-defined.
    """

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired.

        Args:
            key: Cache key, see `cache_key`.

        Returns:
            The stored value if still fresh, else None.
        """
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a value, starting its time-to-live.

        Args:
            key: Cache key.
            value: Value to store. None is not a valid value.
        """
        ...
