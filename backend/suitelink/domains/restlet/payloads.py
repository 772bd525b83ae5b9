"""Request shaping and response ID extraction.

The RESTlet has accepted both flat bodies (``{"action": ..., "field": ...}``)
and enveloped bodies (``{"action": ..., "data": {...}}``) over its revisions.
`shape_post_body` is the single policy that decides between them.

Created-record responses are equally inconsistent about where the new id
lives; `extract_entity_id` looks in every known place.
"""

from typing import Any, Dict, Optional, Sequence


def compact(**fields: Any) -> Dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in fields.items() if value is not None}


def shape_post_body(payload: Any) -> Any:
    """Envelope a payload under ``{action, data}`` when it names an action.

    A dict with a truthy ``action`` and no ``data`` becomes
    ``{"action": action, "data": {<remaining keys>}}``; ``data`` is omitted
    when nothing remains. Any other payload is returned unchanged.
    """
    if not isinstance(payload, dict):
        return payload
    action = payload.get("action")
    if not action or payload.get("data") is not None:
        return payload

    rest = {key: value for key, value in payload.items() if key not in ("action", "data")}
    if not rest:
        return {"action": action}
    return {"action": action, "data": rest}


def _lookup(container: Any, key: str) -> Any:
    if isinstance(container, dict):
        return container.get(key)
    return None


def extract_entity_id(body: Any, candidates: Sequence[str]) -> Optional[str]:
    """Find a created entity's id in a RESTlet response body.

    Each candidate field is checked at the top level, then under ``data``.
    If none match, a generic ``id`` is checked at the same two levels.

    Args:
        body: Parsed response body.
        candidates: Field names in priority order, e.g. ``["customerId"]``.

    Returns:
        The first non-null match as a string, or None if no id was returned.
    """
    if not isinstance(body, dict):
        return None
    nested = body.get("data")

    for key in [*candidates, "id"]:
        for container in (body, nested):
            value = _lookup(container, key)
            if value is not None:
                return str(value)
    return None
