"""Response normalization.

Reconciles the HTTP-level outcome with the RESTlet's own ``success`` flag into
one CallResult. A 200 response can still be a logical failure.
"""

import json
from typing import Any, Optional

from suitelink.domains.restlet.types import CallResult, HttpOutcome

RAW_FIELD = "raw"


def parse_body(text: str) -> Any:
    """Parse a response body as JSON, falling back to ``{"raw": text}``.

    An empty body parses to an empty dict.
    """
    if not text or not text.strip():
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {RAW_FIELD: text}


def _body_error(body: Any) -> Optional[str]:
    """Pull an error message out of a parsed body, if it carries one."""
    if not isinstance(body, dict):
        return None
    for key in ("error", "message"):
        value = body.get(key)
        if isinstance(value, dict):
            value = value.get("message") or json.dumps(value)
        if value:
            return str(value)
    return None


def normalize_response(outcome: HttpOutcome) -> CallResult:
    """Turn an executed HTTP outcome into a CallResult.

    Args:
        outcome: Final outcome from the executor.

    Returns:
        CallResult whose ``success`` reflects both the HTTP status and, on
        2xx, an explicit boolean ``success`` field in the body.
    """
    if outcome.is_network_failure:
        return CallResult.failure(f"RESTlet network error: {outcome.reason or 'Unknown'}")

    if not outcome.is_success:
        detail = _body_error(parse_body(outcome.text)) or outcome.text or outcome.reason
        return CallResult.failure(
            f"RESTlet API error: {outcome.status_code} - {detail or 'Unknown'}"
        )

    body = parse_body(outcome.text)
    if isinstance(body, dict) and isinstance(body.get("success"), bool) and not body["success"]:
        return CallResult.failure(_body_error(body) or "RESTlet reported failure", data=body)

    return CallResult.ok(body)
