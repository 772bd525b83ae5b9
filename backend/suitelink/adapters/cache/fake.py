"""Fake read cache for testing.

Stores values without any expiry and records every get/set for assertions.
"""

from typing import Any, Optional


class FakeReadCache:
    """Test implementation of ReadCache.

    Entries never expire on their own; use expire() to simulate TTL expiry.

    Usage:
        fake = FakeReadCache()
        service = ReferenceDataService(client, cache=fake)

        await service.employees()
        assert fake.set_keys == ["employees"]
    """

    def __init__(self) -> None:
        """Initialize with empty state."""
        self._store: dict[str, Any] = {}
        self.get_keys: list[str] = []  # ordered log of get() calls
        self.set_keys: list[str] = []  # ordered log of set() calls

    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value, if any."""
        self.get_keys.append(key)
        return self._store.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Store a value."""
        self._store[key] = value
        self.set_keys.append(key)

    # Test helpers

    def seed(self, key: str, value: Any) -> None:
        """Pre-populate an entry without recording a set."""
        self._store[key] = value

    def expire(self, key: str) -> None:
        """Simulate natural expiry of an entry."""
        self._store.pop(key, None)

    def clear(self) -> None:
        """Reset all state."""
        self._store.clear()
        self.get_keys.clear()
        self.set_keys.clear()
