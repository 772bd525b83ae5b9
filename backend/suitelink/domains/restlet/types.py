"""Value types for the RESTlet domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Synthetic status for timeouts and connection failures. No real HTTP
# response can carry it, so it is never mistaken for a server status.
NETWORK_FAILURE_STATUS = 0


class DemoTemplate(str, Enum):
    """Demo data templates understood by the RESTlet."""

    PROFESSIONAL_SERVICES = "professional_services"
    ENERGY = "energy"
    IT_SERVICES = "it_services"
    CREATIVE = "creative"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Token-based-auth credentials for one RESTlet deployment."""

    account_id: str
    consumer_key: str
    consumer_secret: str
    token_id: str
    token_secret: str
    endpoint_url: str

    @property
    def realm(self) -> str:
        """Account id as NetSuite expects it in the header realm.

        Sandbox accounts are named like ``123456-sb1``; the realm form is
        ``123456_SB1``.
        """
        return self.account_id.upper().replace("-", "_")

    def __repr__(self) -> str:
        return f"Credentials(account_id={self.account_id!r}, endpoint_url={self.endpoint_url!r})"


@dataclass(frozen=True, slots=True)
class HttpOutcome:
    """Final HTTP-level outcome of one executed request (after retries)."""

    status_code: int
    text: str = ""
    reason: str = ""
    attempts: int = 1

    @property
    def is_network_failure(self) -> bool:
        return self.status_code == NETWORK_FAILURE_STATUS

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_transient(self) -> bool:
        """Whether a retry might change the outcome (429, 5xx, network)."""
        return (
            self.is_network_failure
            or self.status_code == 429
            or 500 <= self.status_code <= 599
        )


@dataclass(slots=True)
class RetryState:
    """Bookkeeping for one logical call's attempts."""

    max_attempts: int
    attempts: int = 0
    backoff_delays: List[float] = field(default_factory=list)

    @property
    def elapsed_backoff(self) -> float:
        return sum(self.backoff_delays)


@dataclass(frozen=True, slots=True)
class CallResult:
    """Uniform result of a RESTlet call: ``{success, data?, error?}``."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "CallResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, data: Any = None) -> "CallResult":
        return cls(success=False, data=data, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Render the caller-facing shape, omitting absent fields."""
        result: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        return result


class _CamelModel(BaseModel):
    """Base for request fragments serialized with the RESTlet's camelCase names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class EstimateLineItem(_CamelModel):
    """One line of an estimate."""

    item_id: int = Field(alias="itemId")
    quantity: float
    rate: Optional[float] = None
    description: Optional[str] = None
    department: Optional[int] = None
    class_id: Optional[int] = Field(default=None, alias="classId")
    location: Optional[int] = None


class ProjectTaskAssignee(_CamelModel):
    """A resource assigned to a project task."""

    resource_id: int = Field(alias="resourceId")
    planned_work: float = Field(alias="plannedWork")
    units: Optional[float] = None
    unit_cost: Optional[float] = Field(default=None, alias="unitCost")
    service_item_id: Optional[int] = Field(default=None, alias="serviceItemId")
    billing_class: Optional[int] = Field(default=None, alias="billingClass")


class ReferenceListResult(BaseModel):
    """Result of a (possibly cached) reference-list read."""

    success: bool
    data: List[Dict[str, Any]] = Field(default_factory=list)
    cached: bool = False
    fallback: bool = False
    error: Optional[str] = None


@dataclass
class PushSummary:
    """Outcome of pushing a batch of local records to NetSuite.

    The batch is not atomic; each record succeeds or fails on its own.
    """

    entity_type: str
    success_count: int = 0
    error_count: int = 0
    errors: List[str] = field(default_factory=list)
    created_ids: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.error_count == 0

    @property
    def message(self) -> str:
        text = f"Pushed {self.success_count} {self.entity_type} to NetSuite"
        if self.error_count:
            text += f", {self.error_count} failed"
        return text

    def record_success(self, name: str, entity_id: str) -> None:
        self.success_count += 1
        self.created_ids[name] = entity_id

    def record_failure(self, name: str, reason: str) -> None:
        self.error_count += 1
        self.errors.append(f"{name}: {reason}")
