"""Read cache adapters."""

from suitelink.adapters.cache.fake import FakeReadCache
from suitelink.adapters.cache.in_memory import InMemoryReadCache

__all__ = ["InMemoryReadCache", "FakeReadCache"]
