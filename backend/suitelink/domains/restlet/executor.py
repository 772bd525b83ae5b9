"""Signed-HTTP-call-with-retry primitive.

The executor sends one logical request, bounding each attempt with a timeout
and retrying transient failures (HTTP 429, 5xx, timeouts, connection errors)
with capped exponential backoff. It never raises for those expected failure
modes; it returns the last observed HttpOutcome instead. It has no knowledge
of what the request body means.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

import httpx
from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt, wait_exponential

from suitelink.core.logging import ContextualLogger, logger as default_logger
from suitelink.domains.restlet.protocols import Transport
from suitelink.domains.restlet.types import NETWORK_FAILURE_STATUS, HttpOutcome, RetryState

HeaderSource = Union[Mapping[str, str], Callable[[], Mapping[str, str]]]

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_BACKOFF_INITIAL_SECONDS = 1.0
DEFAULT_BACKOFF_MAX_SECONDS = 4.0


def is_transient(outcome: HttpOutcome) -> bool:
    """Retry predicate: 429, 5xx and synthetic network failures."""
    return outcome.is_transient


def describe_outcome(outcome: HttpOutcome) -> str:
    """Short human description of a failed outcome, for log messages."""
    if outcome.is_network_failure:
        return f"network error ({outcome.reason or 'unknown'})"
    return f"HTTP {outcome.status_code}"


class RequestExecutor:
    """Executes requests with a per-attempt timeout and transient-failure retries.

    Attributes:
        timeout: Seconds allowed per attempt before it is aborted.
        max_retries: Additional attempts after the first.
        backoff_initial: Delay before the first retry; doubles each retry.
        backoff_max: Upper bound on any single delay.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_initial: float = DEFAULT_BACKOFF_INITIAL_SECONDS,
        backoff_max: float = DEFAULT_BACKOFF_MAX_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            transport: Sends individual HTTP requests.
            timeout: Per-attempt timeout in seconds.
            max_retries: Retries after the first attempt (0 disables retrying).
            backoff_initial: First backoff delay in seconds.
            backoff_max: Maximum backoff delay in seconds.
            sleep: Awaitable sleep used between attempts, injectable for tests.
            logger: Logger for retry diagnostics.
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._transport = transport
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max
        self._sleep = sleep
        self._logger = logger or default_logger.with_context(component="restlet_executor")

    async def _attempt(
        self,
        method: str,
        url: str,
        headers: HeaderSource,
        json_body: Optional[Any],
        state: RetryState,
    ) -> HttpOutcome:
        """Run a single attempt, mapping network failures to the synthetic status."""
        state.attempts += 1
        resolved: Dict[str, str] = dict(headers() if callable(headers) else headers)

        try:
            response = await asyncio.wait_for(
                self._transport.send(method, url, headers=resolved, json=json_body),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            return HttpOutcome(
                NETWORK_FAILURE_STATUS,
                reason=f"Request timed out after {self.timeout:g}s",
                attempts=state.attempts,
            )
        except (httpx.TransportError, OSError) as e:
            return HttpOutcome(
                NETWORK_FAILURE_STATUS,
                reason=f"{type(e).__name__}: {e}",
                attempts=state.attempts,
            )

        return HttpOutcome(
            response.status_code,
            text=response.text,
            reason=response.reason_phrase,
            attempts=state.attempts,
        )

    def _before_sleep(self, method: str, state: RetryState) -> Callable[[Any], None]:
        """Create a before_sleep callback that records and logs the upcoming backoff."""

        def before_sleep(retry_state) -> None:
            outcome: HttpOutcome = retry_state.outcome.result()
            wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
            state.backoff_delays.append(wait_time)
            self._logger.warning(
                f"🔄 RESTlet {method} request failed ({describe_outcome(outcome)}), "
                f"retrying in {wait_time:.1f}s "
                f"(attempt {retry_state.attempt_number}/{state.max_attempts})"
            )

        return before_sleep

    async def execute(
        self,
        method: str,
        url: str,
        *,
        headers: HeaderSource,
        json_body: Optional[Any] = None,
    ) -> HttpOutcome:
        """Execute a request, retrying transient failures.

        Args:
            method: HTTP method.
            url: Full request URL.
            headers: Header mapping, or a zero-argument callable returning one.
                A callable is invoked per attempt, so each retry can carry a
                freshly signed Authorization header.
            json_body: Optional JSON-serializable body.

        Returns:
            The HttpOutcome of the first non-transient attempt, or of the last
            attempt when retries are exhausted.
        """
        method = method.upper()
        state = RetryState(max_attempts=self.max_retries + 1)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(state.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_initial, max=self.backoff_max),
            retry=retry_if_result(is_transient),
            sleep=self._sleep,
            before_sleep=self._before_sleep(method, state),
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
        )
        outcome: HttpOutcome = await retrying(
            self._attempt, method, url, headers, json_body, state
        )

        if outcome.is_transient:
            self._logger.error(
                f"RESTlet {method} request gave up after {state.attempts} attempts "
                f"({describe_outcome(outcome)}, {state.elapsed_backoff:.1f}s backoff)"
            )
        elif not outcome.is_success:
            self._logger.warning(
                f"RESTlet {method} request failed with terminal {describe_outcome(outcome)}"
            )
        return outcome
