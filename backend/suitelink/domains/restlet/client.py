"""RESTlet action client.

One coroutine per remote action. Each builds the action's query or body,
delegates to `RestletClient.call`, and returns the CallResult unchanged.

    async with RestletClient.from_settings() as client:
        result = await client.create_customer("Acme Corp", email="ops@acme.test")
        customer_id = extract_entity_id(result.data, ["customerId"])
"""

import random
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from suitelink.core.config import settings
from suitelink.core.logging import ContextualLogger, logger as default_logger
from suitelink.domains.restlet.executor import RequestExecutor
from suitelink.domains.restlet.exceptions import MissingCredentialsError
from suitelink.domains.restlet.normalizer import normalize_response
from suitelink.domains.restlet.payloads import compact, shape_post_body
from suitelink.domains.restlet.protocols import SignerProtocol, Transport
from suitelink.domains.restlet.signer import OAuth1Signer
from suitelink.domains.restlet.transport import HttpxTransport
from suitelink.domains.restlet.types import (
    CallResult,
    Credentials,
    DemoTemplate,
    EstimateLineItem,
    ProjectTaskAssignee,
)
from suitelink.domains.restlet.urls import with_query

BODY_METHODS = ("POST", "PUT", "DELETE")

# Fixed field values the demo RESTlet expects on every new project.
PROJECT_DEFAULTS: Dict[str, Any] = {
    "projectStatus": "In Progress",
    "projectManager": "Marc Collins",
    "billingType": "Charge-Based",
    "projectExpenseType": "Regular",
}

# Internal ids: S2 - Non Taxable, Parent (Holding Co.), Default One-Time Direct Posting.
SERVICE_ITEM_DEFAULTS: Dict[str, Any] = {
    "taxSchedule": 2,
    "subsidiary": 1,
    "includeChildren": True,
    "revenueRecognitionRule": 109,
    "revRecForecastRule": 109,
    "createRevenuePlansOn": None,
    "directRevenuePosting": True,
}

DEFAULT_SUBSIDIARY = 1

TemplateArg = Union[DemoTemplate, str]


def _require(action: str, **values: Any) -> None:
    """Raise ValueError naming every missing (None, empty or zero) argument."""
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"{' and '.join(missing)} required for {action}")


def _template(value: TemplateArg) -> str:
    return DemoTemplate(value).value


def _action_name(payload: Any, query: Optional[Mapping[str, str]]) -> str:
    if query and query.get("action"):
        return str(query["action"])
    if isinstance(payload, dict) and payload.get("action"):
        return str(payload["action"])
    return "unknown"


class RestletClient:
    """Typed client for the demo RESTlet.

    `call` is the outer error boundary: anything raised while building,
    signing or sending a request (including missing credentials) is logged
    and converted into a failed CallResult, so callers only ever see the
    ``{success, data?, error?}`` shape. Argument validation in the typed
    action methods raises ValueError before any request is built.
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        *,
        transport: Optional[Transport] = None,
        signer: Optional[SignerProtocol] = None,
        executor: Optional[RequestExecutor] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: RESTlet credentials. When omitted they are read from
                settings on first use.
            transport: HTTP transport; defaults to a shared httpx client.
            signer: OAuth signer; defaults to OAuth1Signer.
            executor: Retrying executor; defaults to one built from settings.
            logger: Logger; defaults to the package logger.
        """
        self._credentials = credentials
        self._logger = logger or default_logger.with_context(component="restlet_client")
        self._owned_transport: Optional[HttpxTransport] = None
        if executor is None and transport is None:
            transport = self._owned_transport = HttpxTransport()
        self._signer = signer or OAuth1Signer()
        self._executor = executor or RequestExecutor(
            transport,
            timeout=settings.RESTLET_TIMEOUT_SECONDS,
            max_retries=settings.RESTLET_MAX_RETRIES,
            backoff_initial=settings.RESTLET_BACKOFF_INITIAL_SECONDS,
            backoff_max=settings.RESTLET_BACKOFF_MAX_SECONDS,
            logger=self._logger.with_context(component="restlet_executor"),
        )

    @classmethod
    def from_settings(cls, **kwargs: Any) -> "RestletClient":
        """Build a client, failing fast if credentials are not configured.

        Raises:
            MissingCredentialsError: If any credential is unset.
        """
        return cls(settings.restlet_credentials(), **kwargs)

    async def __aenter__(self) -> "RestletClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP client if this instance created it."""
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    def _resolve_credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = settings.restlet_credentials()
        return self._credentials

    async def call(
        self,
        method: str,
        payload: Any = None,
        query: Optional[Mapping[str, str]] = None,
    ) -> CallResult:
        """Sign and send one request to the RESTlet.

        Args:
            method: HTTP method.
            payload: JSON body for POST/PUT/DELETE, shaped by `shape_post_body`.
                Ignored for GET.
            query: Parameters appended to the deployment URL's query string.

        Returns:
            The normalized CallResult. Never raises.
        """
        method = method.upper()
        log = self._logger.with_context(action=_action_name(payload, query), method=method)

        try:
            credentials = self._resolve_credentials()
            url = with_query(credentials.endpoint_url, query)
            body = shape_post_body(payload) if method in BODY_METHODS and payload else None

            def headers() -> Dict[str, str]:
                return {
                    "Authorization": self._signer.authorization_header(method, url, credentials),
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                }

            log.debug(f"Calling RESTlet {method} {url.split('?')[0]}")
            outcome = await self._executor.execute(method, url, headers=headers, json_body=body)
            result = normalize_response(outcome)
        except MissingCredentialsError as e:
            log.error(str(e))
            return CallResult.failure(str(e))
        except Exception as e:
            log.exception(f"Unexpected error calling RESTlet: {e}")
            return CallResult.failure(str(e) or type(e).__name__)

        if not result.success:
            log.warning(f"RESTlet call failed: {result.error}")
        return result

    async def _get(self, action: str, **params: Any) -> CallResult:
        query = {"action": action}
        query.update({key: str(value) for key, value in compact(**params).items()})
        return await self.call("GET", query=query)

    async def _post(self, action: str, fields: Dict[str, Any]) -> CallResult:
        return await self.call("POST", {"action": action, **fields})

    # ------------------------------------------------------------------
    # GET actions
    # ------------------------------------------------------------------

    async def get_templates(self) -> CallResult:
        return await self._get("templates")

    async def get_job_status(self, task_id: str) -> CallResult:
        _require("jobStatus", task_id=task_id)
        return await self._get("jobStatus", taskId=task_id)

    async def list_demo_customers(self, prefix: str = "Demo") -> CallResult:
        return await self._get("listCustomers", prefix=prefix)

    async def list_demo_projects(self, customer_id: int) -> CallResult:
        _require("listProjects", customer_id=customer_id)
        return await self._get("listProjects", customerId=customer_id)

    async def get_billing_types(self) -> CallResult:
        return await self._get("billingTypes")

    async def get_expense_types(self) -> CallResult:
        return await self._get("expenseTypes")

    async def get_unit_types(self) -> CallResult:
        return await self._get("unitTypes")

    async def get_service_items(self) -> CallResult:
        return await self._get("serviceItems")

    async def get_employees(self) -> CallResult:
        return await self._get("employees")

    async def get_projects(self, customer_id: Optional[int] = None) -> CallResult:
        """List projects, optionally only those of one customer."""
        return await self._get("projects", customerId=customer_id or None)

    async def get_customers(self) -> CallResult:
        return await self._get("customers")

    # ------------------------------------------------------------------
    # POST actions
    # ------------------------------------------------------------------

    async def quick_setup(
        self,
        prospect_name: str,
        template: TemplateArg = DemoTemplate.PROFESSIONAL_SERVICES,
    ) -> CallResult:
        """Create a prospect's demo customers and projects in one call.

        On success ``data`` carries the RESTlet's ``{success, message, data:
        {customers, projects}}`` body.
        """
        _require("quickSetup", prospect_name=prospect_name)
        return await self._post(
            "quickSetup",
            {"prospectName": prospect_name, "template": _template(template), **PROJECT_DEFAULTS},
        )

    async def create_customer(
        self,
        company_name: str,
        *,
        subsidiary: Optional[int] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> CallResult:
        _require("createCustomer", company_name=company_name)
        return await self._post(
            "createCustomer",
            compact(
                companyName=company_name,
                subsidiary=subsidiary or DEFAULT_SUBSIDIARY,
                email=email or None,
                phone=phone or None,
            ),
        )

    async def create_project(self, project_name: str, customer_id: int) -> CallResult:
        _require("createProject", project_name=project_name, customer_id=customer_id)
        return await self._post(
            "createProject",
            {"projectName": project_name, "customerId": customer_id, **PROJECT_DEFAULTS},
        )

    async def create_service_item(self, item_name: str) -> CallResult:
        """Create a service item.

        A random 4-digit suffix is appended to the name because NetSuite
        rejects duplicate item names.
        """
        _require("createServiceItem", item_name=item_name)
        unique_name = f"{item_name} - {random.randint(1000, 9999)}"
        return await self._post(
            "createServiceItem",
            {"itemName": unique_name, "displayName": unique_name, **SERVICE_ITEM_DEFAULTS},
        )

    async def create_time_entry(
        self,
        employee_id: int,
        project_id: int,
        hours: float,
        *,
        entry_date: Optional[Union[date, str]] = None,
        is_billable: bool = True,
        memo: Optional[str] = None,
    ) -> CallResult:
        """Log time against a project. The date defaults to today (UTC)."""
        _require("createTimeEntry", employee_id=employee_id, project_id=project_id, hours=hours)
        if entry_date is None:
            entry_date = datetime.now(timezone.utc).date()
        if isinstance(entry_date, date):
            entry_date = entry_date.isoformat()
        return await self._post(
            "createTimeEntry",
            compact(
                employeeId=employee_id,
                projectId=project_id,
                hours=hours,
                date=entry_date,
                isBillable=is_billable,
                memo=memo,
            ),
        )

    async def batch_create(
        self,
        template: TemplateArg = DemoTemplate.PROFESSIONAL_SERVICES,
        *,
        customer_count: int = 5,
        projects_per_customer: int = 3,
        days_of_time: int = 30,
    ) -> CallResult:
        """Start a server-side batch build; poll `get_job_status` with the returned task id."""
        return await self._post(
            "batchCreate",
            {
                "template": _template(template),
                "customerCount": customer_count,
                "projectsPerCustomer": projects_per_customer,
                "daysOfTime": days_of_time,
            },
        )

    async def create_estimate(
        self,
        customer_id: int,
        items: Sequence[Union[EstimateLineItem, Dict[str, Any]]],
        *,
        project_id: Optional[int] = None,
        title: Optional[str] = None,
        memo: Optional[str] = None,
        sales_rep_id: Optional[int] = None,
        subsidiary: Optional[int] = None,
        trandate: Optional[str] = None,
        duedate: Optional[str] = None,
    ) -> CallResult:
        _require("createEstimate", customer_id=customer_id)
        if not items:
            raise ValueError("At least one line item is required for createEstimate")
        lines = [EstimateLineItem.model_validate(item).to_payload() for item in items]
        return await self._post(
            "createEstimate",
            compact(
                customerId=customer_id,
                projectId=project_id,
                title=title,
                memo=memo,
                salesRepId=sales_rep_id,
                subsidiary=subsidiary,
                trandate=trandate,
                duedate=duedate,
                items=lines,
            ),
        )

    async def create_project_task(
        self,
        project_id: int,
        task_name: str,
        planned_work: float,
        *,
        status: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        finish_by_date: Optional[str] = None,
        parent_task_id: Optional[int] = None,
        default_service_item_id: Optional[int] = None,
        constraint_type: Optional[str] = None,
        non_billable: Optional[bool] = None,
        assignees: Optional[Sequence[Union[ProjectTaskAssignee, Dict[str, Any]]]] = None,
    ) -> CallResult:
        _require(
            "createProjectTask",
            project_id=project_id,
            task_name=task_name,
            planned_work=planned_work,
        )
        resources = (
            [ProjectTaskAssignee.model_validate(a).to_payload() for a in assignees]
            if assignees
            else None
        )
        return await self._post(
            "createProjectTask",
            compact(
                projectId=project_id,
                taskName=task_name,
                plannedWork=planned_work,
                status=status,
                startDate=start_date,
                endDate=end_date,
                finishByDate=finish_by_date,
                parentTaskId=parent_task_id,
                defaultServiceItemId=default_service_item_id,
                constraintType=constraint_type,
                nonBillable=non_billable,
                assignees=resources,
            ),
        )

    async def cleanup_demo_data(self, record_type: str, prefix: str) -> CallResult:
        """Delete demo records of `record_type` whose name starts with `prefix`."""
        _require("cleanupDemoData", record_type=record_type, prefix=prefix)
        return await self._post("cleanupDemoData", {"recordType": record_type, "prefix": prefix})

    async def get_info(self) -> CallResult:
        """Fetch the deployment's self-description (script, version, capabilities)."""
        return await self._post("getInfo", {})
