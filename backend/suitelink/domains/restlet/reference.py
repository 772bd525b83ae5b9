"""Cached reference-list reads (unit types, service items, employees, ...).

Reference lists change rarely and are read often, so results are cached per
action and qualifier set. A write never invalidates the cache; reads may be
stale for up to the TTL unless the caller forces a refresh.
"""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from suitelink.adapters.cache import InMemoryReadCache
from suitelink.core.config import settings
from suitelink.core.logging import ContextualLogger, logger as default_logger
from suitelink.core.protocols import ReadCache
from suitelink.domains.restlet.client import RestletClient
from suitelink.domains.restlet.types import CallResult, ReferenceListResult

# Served when the RESTlet cannot be reached for unit types.
FALLBACK_UNIT_TYPES: List[Dict[str, str]] = [
    {"id": "Hour", "name": "Hour", "abbreviation": "hr"},
    {"id": "Day", "name": "Day", "abbreviation": "day"},
    {"id": "Week", "name": "Week", "abbreviation": "wk"},
    {"id": "Each", "name": "Each", "abbreviation": "ea"},
]


def cache_key(base: str, qualifiers: Optional[Mapping[str, Any]] = None) -> str:
    """Build a cache key from a base name and optional qualifiers.

    None-valued qualifiers are ignored and the rest are sorted, so
    ``cache_key("projects", {"customerId": 7})`` == ``"projects|customerId=7"``
    regardless of insertion order.
    """
    if not qualifiers:
        return base
    parts = sorted(f"{k}={v}" for k, v in qualifiers.items() if v is not None)
    return f"{base}|{'&'.join(parts)}" if parts else base


class ReferenceDataService:
    """Read-through cache in front of the RESTlet's list actions."""

    def __init__(
        self,
        client: RestletClient,
        cache: Optional[ReadCache] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: RESTlet client used on cache misses.
            cache: Read cache; defaults to an in-memory cache configured from settings.
            logger: Logger; defaults to the package logger.
        """
        self._client = client
        self._cache = cache or InMemoryReadCache(
            ttl_seconds=settings.REFERENCE_CACHE_TTL_SECONDS,
            jitter=settings.REFERENCE_CACHE_JITTER,
        )
        self._logger = logger or default_logger.with_context(component="reference_data")

    async def _read(
        self,
        key: str,
        field: str,
        fetch: Callable[[], Awaitable[CallResult]],
        *,
        force_refresh: bool,
        fallback: Optional[List[Dict[str, Any]]] = None,
    ) -> ReferenceListResult:
        """Serve `key` from cache, or fetch and extract `field` from the response body."""
        if not force_refresh:
            cached = await self._cache.get(key)
            if cached is not None:
                return ReferenceListResult(success=True, data=cached, cached=True)

        result = await fetch()
        if result.success and isinstance(result.data, dict):
            items = result.data.get(field) or []
            await self._cache.set(key, items)
            return ReferenceListResult(success=True, data=items)

        error = result.error or f"Failed to fetch {field}"
        if fallback is not None:
            self._logger.warning(f"Serving fallback {field}: {error}")
            return ReferenceListResult(success=True, data=fallback, fallback=True, error=error)
        return ReferenceListResult(success=False, error=error)

    async def unit_types(self, force_refresh: bool = False) -> ReferenceListResult:
        return await self._read(
            cache_key("unit_types"),
            "unitTypes",
            self._client.get_unit_types,
            force_refresh=force_refresh,
            fallback=FALLBACK_UNIT_TYPES,
        )

    async def service_items(self, force_refresh: bool = False) -> ReferenceListResult:
        return await self._read(
            cache_key("service_items"),
            "items",
            self._client.get_service_items,
            force_refresh=force_refresh,
        )

    async def employees(self, force_refresh: bool = False) -> ReferenceListResult:
        return await self._read(
            cache_key("employees"),
            "employees",
            self._client.get_employees,
            force_refresh=force_refresh,
        )

    async def projects(
        self, customer_id: Optional[int] = None, force_refresh: bool = False
    ) -> ReferenceListResult:
        """Projects, cached separately per customer filter."""
        return await self._read(
            cache_key("projects", {"customerId": customer_id}),
            "projects",
            lambda: self._client.get_projects(customer_id),
            force_refresh=force_refresh,
        )

    async def customers(self, force_refresh: bool = False) -> ReferenceListResult:
        return await self._read(
            cache_key("customers"),
            "customers",
            self._client.get_customers,
            force_refresh=force_refresh,
        )
