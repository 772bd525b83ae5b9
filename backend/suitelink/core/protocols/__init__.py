"""Core protocols for dependency injection.

Cross-cutting infrastructure protocols only; domain protocols live in their
respective domains/ directories.
"""

from suitelink.core.protocols.cache import ReadCache

__all__ = ["ReadCache"]
