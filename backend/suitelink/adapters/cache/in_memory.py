"""In-memory read cache with jittered TTL.

Stores values in a dict keyed by cache key, each with its own expiry. The
expiry is the configured TTL scaled by a random factor in [1 - jitter,
1 + jitter], drawn when the value is stored, so entries written together
do not all expire at the same instant.

Suitable for single-process deployments. Thread-safe via asyncio.Lock for
concurrent coroutines within a single event loop.
"""

from __future__ import annotations

import asyncio
import random
import time
from typing import Any, Callable, Optional

from suitelink.core.logging import logger


class InMemoryReadCache:
    """In-memory implementation of the ReadCache protocol.

    Attributes:
        ttl_seconds: Nominal time-to-live of an entry.
        jitter: Fraction of the TTL by which an entry's lifetime may vary.
    """

    DEFAULT_TTL_SECONDS = 300.0
    DEFAULT_JITTER = 0.1

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        jitter: float = DEFAULT_JITTER,
        *,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the in-memory cache.

        Args:
            ttl_seconds: Nominal entry lifetime. Defaults to 5 minutes.
            jitter: Relative lifetime spread, 0.1 means ±10%.
            clock: Monotonic time source, injectable for tests.
            rng: Source of uniform floats in [0, 1), injectable for tests.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if not 0 <= jitter < 1:
            raise ValueError("jitter must be in [0, 1)")
        self.ttl_seconds = ttl_seconds
        self.jitter = jitter
        self._clock = clock
        self._rng = rng
        self._entries: dict[str, tuple[Any, float]] = {}  # key → (value, expires_at)
        self._lock = asyncio.Lock()

    def _lifetime(self) -> float:
        spread = self.ttl_seconds * self.jitter
        return self.ttl_seconds + (self._rng() * 2 * spread - spread)

    async def get(self, key: str) -> Optional[Any]:
        """Return the value for `key` if it has not expired.

        Expired entries are dropped on access.
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug(f"[ReadCache] Entry '{key}' expired")
                return None

            return value

    async def set(self, key: str, value: Any) -> None:
        """Store `value` under `key` with a freshly jittered lifetime."""
        if value is None:
            raise ValueError("Cannot cache None")
        async with self._lock:
            self._entries[key] = (value, self._clock() + self._lifetime())

    # Introspection (useful for monitoring and tests)

    @property
    def keys(self) -> list[str]:
        """Keys currently held, including not-yet-evicted expired ones."""
        return list(self._entries)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
