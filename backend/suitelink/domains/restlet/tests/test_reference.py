"""Unit tests for ReferenceDataService and cache keys."""

import pytest

from suitelink.adapters.cache import FakeReadCache, InMemoryReadCache
from suitelink.domains.restlet.client import RestletClient
from suitelink.domains.restlet.executor import RequestExecutor
from suitelink.domains.restlet.fakes import FakeTransport
from suitelink.domains.restlet.reference import (
    FALLBACK_UNIT_TYPES,
    ReferenceDataService,
    cache_key,
)
from suitelink.domains.restlet.tests._helpers import RecordingSleep, fixed_signer


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# cache_key
# ---------------------------------------------------------------------------


def test_cache_key_without_qualifiers():
    assert cache_key("employees") == "employees"
    assert cache_key("employees", {}) == "employees"


def test_cache_key_sorted_qualifiers():
    assert cache_key("projects", {"status": "open", "customerId": 7}) == cache_key(
        "projects", {"customerId": 7, "status": "open"}
    )
    assert cache_key("projects", {"customerId": 7}) == "projects|customerId=7"


def test_cache_key_ignores_none_qualifiers():
    assert cache_key("projects", {"customerId": None}) == "projects"


# ---------------------------------------------------------------------------
# ReferenceDataService with FakeReadCache
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_cache() -> FakeReadCache:
    return FakeReadCache()


@pytest.fixture
def service(client, fake_cache) -> ReferenceDataService:
    return ReferenceDataService(client, cache=fake_cache)


@pytest.mark.asyncio
async def test_miss_fetches_and_stores(service, fake_transport, fake_cache):
    fake_transport.seed_json({"success": True, "employees": [{"id": "1", "name": "Ada"}]})

    result = await service.employees()

    assert result.success is True
    assert result.cached is False
    assert result.data == [{"id": "1", "name": "Ada"}]
    assert fake_cache.set_keys == ["employees"]


@pytest.mark.asyncio
async def test_hit_serves_cached_and_skips_call(service, fake_transport):
    fake_transport.seed_json({"success": True, "customers": [{"id": "5"}]})

    await service.customers()
    second = await service.customers()

    assert second.cached is True
    assert second.data == [{"id": "5"}]
    assert fake_transport.call_count == 1


@pytest.mark.asyncio
async def test_force_refresh_bypasses_cache(service, fake_transport):
    fake_transport.seed_json({"success": True, "items": [{"id": "1"}]})
    fake_transport.seed_json({"success": True, "items": [{"id": "1"}, {"id": "2"}]})

    await service.service_items()
    refreshed = await service.service_items(force_refresh=True)

    assert refreshed.cached is False
    assert len(refreshed.data) == 2
    assert fake_transport.call_count == 2


@pytest.mark.asyncio
async def test_expired_entry_refetched(service, fake_transport, fake_cache):
    fake_transport.seed_json({"success": True, "employees": []})

    await service.employees()
    fake_cache.expire("employees")
    again = await service.employees()

    assert again.cached is False
    assert fake_transport.call_count == 2


@pytest.mark.asyncio
async def test_projects_cached_per_customer(service, fake_transport, fake_cache):
    fake_transport.seed_json({"success": True, "projects": [{"id": "p"}]})

    await service.projects(customer_id=7)
    await service.projects()
    await service.projects(customer_id=7)

    assert fake_cache.set_keys == ["projects|customerId=7", "projects"]
    assert fake_transport.call_count == 2


@pytest.mark.asyncio
async def test_missing_list_field_yields_empty_list(service, fake_transport):
    fake_transport.seed_json({"success": True})

    result = await service.customers()

    assert result.success is True
    assert result.data == []


@pytest.mark.asyncio
async def test_failure_is_not_cached(service, fake_transport, fake_cache):
    fake_transport.seed_status(404, "gone")

    result = await service.employees()

    assert result.success is False
    assert result.data == []
    assert result.error == "RESTlet API error: 404 - gone"
    assert fake_cache.set_keys == []


@pytest.mark.asyncio
async def test_unit_types_fall_back(service, fake_transport):
    fake_transport.seed_status(400, "bad request")

    result = await service.unit_types()

    assert result.success is True
    assert result.fallback is True
    assert result.data == FALLBACK_UNIT_TYPES
    assert "400" in result.error


# ---------------------------------------------------------------------------
# ReferenceDataService with InMemoryReadCache (TTL + jitter)
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_ttl_with_jitter_end_to_end(credentials):
    transport = FakeTransport().seed_json({"success": True, "employees": [{"id": "1"}]})
    client = RestletClient(
        credentials,
        signer=fixed_signer(),
        executor=RequestExecutor(transport, sleep=RecordingSleep()),
    )
    clock = FakeClock()
    # rng=1.0 pushes the lifetime to the top of the jitter band (330s)
    cache = InMemoryReadCache(ttl_seconds=300, jitter=0.1, clock=clock, rng=lambda: 1.0)
    service = ReferenceDataService(client, cache=cache)

    first = await service.employees()
    clock.now += 299
    within = await service.employees()
    clock.now += 32  # 331s after the write, past TTL even with maximum jitter
    after = await service.employees()

    assert first.cached is False
    assert within.cached is True
    assert within.data == [{"id": "1"}]
    assert after.cached is False
    assert transport.call_count == 2
