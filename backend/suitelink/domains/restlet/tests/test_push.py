"""Unit tests for push_batch — partial failures and id extraction."""

from dataclasses import dataclass
from typing import Dict

import pytest

from suitelink.domains.restlet.push import push_batch
from suitelink.domains.restlet.types import CallResult


@dataclass
class LocalCustomer:
    company_name: str


class ScriptedCreate:
    """Returns a canned CallResult per customer name and records calls."""

    def __init__(self, results: Dict[str, CallResult]) -> None:
        self.results = results
        self.calls: list[str] = []

    async def __call__(self, customer: LocalCustomer) -> CallResult:
        self.calls.append(customer.company_name)
        return self.results[customer.company_name]


CUSTOMERS = [LocalCustomer("Acme"), LocalCustomer("Globex"), LocalCustomer("Initech")]


@pytest.mark.asyncio
async def test_all_succeed():
    create = ScriptedCreate(
        {
            "Acme": CallResult.ok({"data": {"customerId": 1}}),
            "Globex": CallResult.ok({"customerId": 2}),
            "Initech": CallResult.ok({"id": 3}),
        }
    )

    summary = await push_batch(
        "customers",
        CUSTOMERS,
        create=create,
        name_of=lambda c: c.company_name,
        id_fields=["customerId"],
    )

    assert summary.success is True
    assert summary.success_count == 3
    assert summary.created_ids == {"Acme": "1", "Globex": "2", "Initech": "3"}
    assert summary.message == "Pushed 3 customers to NetSuite"
    assert create.calls == ["Acme", "Globex", "Initech"]


@pytest.mark.asyncio
async def test_partial_failure_reports_names():
    create = ScriptedCreate(
        {
            "Acme": CallResult.ok({"data": {"customerId": 1}}),
            "Globex": CallResult.failure("RESTlet API error: 400 - Duplicate"),
            "Initech": CallResult.ok({"success": True}),
        }
    )

    summary = await push_batch(
        "customers",
        CUSTOMERS,
        create=create,
        name_of=lambda c: c.company_name,
        id_fields=["customerId"],
    )

    assert summary.success is False
    assert summary.success_count == 1
    assert summary.error_count == 2
    assert summary.errors == [
        "Globex: RESTlet API error: 400 - Duplicate",
        "Initech: No customer ID returned",
    ]
    assert summary.created_ids == {"Acme": "1"}
    assert summary.message == "Pushed 1 customers to NetSuite, 2 failed"


@pytest.mark.asyncio
async def test_failure_without_message():
    create = ScriptedCreate({"Acme": CallResult(success=False)})

    summary = await push_batch(
        "customers",
        CUSTOMERS[:1],
        create=create,
        name_of=lambda c: c.company_name,
        id_fields=["customerId"],
    )

    assert summary.errors == ["Acme: Unknown error"]


@pytest.mark.asyncio
async def test_on_created_hook_receives_ids():
    create = ScriptedCreate(
        {
            "Acme": CallResult.ok({"data": {"itemId": "A1"}}),
            "Globex": CallResult.failure("boom"),
        }
    )
    stored: list[tuple[str, str]] = []

    async def store(customer: LocalCustomer, entity_id: str) -> None:
        stored.append((customer.company_name, entity_id))

    await push_batch(
        "service_items",
        CUSTOMERS[:2],
        create=create,
        name_of=lambda c: c.company_name,
        id_fields=["itemId"],
        on_created=store,
    )

    assert stored == [("Acme", "A1")]


@pytest.mark.asyncio
async def test_empty_batch():
    summary = await push_batch(
        "projects",
        [],
        create=ScriptedCreate({}),
        name_of=str,
        id_fields=["projectId"],
    )

    assert summary.success is True
    assert summary.message == "Pushed 0 projects to NetSuite"
