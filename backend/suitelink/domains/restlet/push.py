"""Batch push of local records to NetSuite.

Pushes are not transactional. Each record is created on its own, and the
summary reports which named records failed so they can be retried
individually. Records are pushed one at a time; callers that want
parallelism should split the batch themselves.
"""

from typing import Awaitable, Callable, Iterable, Optional, Sequence, TypeVar

from suitelink.core.logging import ContextualLogger, logger as default_logger
from suitelink.domains.restlet.payloads import extract_entity_id
from suitelink.domains.restlet.types import CallResult, PushSummary

T = TypeVar("T")


async def push_batch(
    entity_type: str,
    items: Iterable[T],
    *,
    create: Callable[[T], Awaitable[CallResult]],
    name_of: Callable[[T], str],
    id_fields: Sequence[str],
    on_created: Optional[Callable[[T, str], Awaitable[None]]] = None,
    logger: Optional[ContextualLogger] = None,
) -> PushSummary:
    """Create every item remotely and summarize the outcome.

    Args:
        entity_type: Plural label used in the summary message, e.g. "customers".
        items: Local records to push.
        create: Issues the create call for one record.
        name_of: Human-readable name of a record, used in error lines.
        id_fields: Candidate response fields holding the new record's id.
        on_created: Optional hook awaited with each record and its new id,
            e.g. to store the id locally.
        logger: Logger; defaults to the package logger.

    Returns:
        PushSummary with success/error counts, per-record errors and created ids.
    """
    log = (logger or default_logger).with_context(entity_type=entity_type)
    summary = PushSummary(entity_type=entity_type)
    noun = id_fields[0].removesuffix("Id") if id_fields else "entity"

    for item in items:
        name = name_of(item)
        result = await create(item)

        if not result.success:
            summary.record_failure(name, result.error or "Unknown error")
            continue

        entity_id = extract_entity_id(result.data, id_fields)
        if entity_id is None:
            summary.record_failure(name, f"No {noun} ID returned")
            continue

        if on_created is not None:
            await on_created(item, entity_id)
        summary.record_success(name, entity_id)

    if summary.error_count:
        log.warning(f"{summary.message}: {'; '.join(summary.errors[:5])}")
    else:
        log.info(summary.message)
    return summary
