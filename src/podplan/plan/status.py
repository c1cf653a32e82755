"""Status — the lifecycle state shared by every plan element.

Aggregation is "weakest link": a parent reports the least-progressed state of
its parts, so a plan can neither claim completion while any step lags nor
hide an error.

    {COMPLETE, STARTING}  -> STARTING
    {PENDING, COMPLETE}   -> PENDING
    {COMPLETE}            -> COMPLETE
    {ERROR, ...}          -> ERROR
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from podplan.core.logging import get_logger

logger = get_logger(__name__)


class Status(str, Enum):
    """Element status, declared most severe first."""

    ERROR = "ERROR"
    PENDING = "PENDING"
    PREPARED = "PREPARED"
    STARTING = "STARTING"
    COMPLETE = "COMPLETE"

    def __str__(self) -> str:
        return self.value


def aggregate_statuses(statuses: Iterable[Status], previous: Status) -> Status:
    """Combine a non-empty collection of statuses into one.

    Callers handle the empty case themselves. A combination that matches none
    of the explicit rules keeps ``previous``.
    """
    present = set(statuses)

    if Status.ERROR in present:
        return Status.ERROR
    if Status.PENDING in present:
        return Status.PENDING
    if Status.PREPARED in present:
        return Status.PREPARED
    if Status.STARTING in present:
        return Status.STARTING
    if present == {Status.COMPLETE}:
        return Status.COMPLETE

    logger.warning(
        "status_aggregation_unhandled",
        statuses=sorted(str(s) for s in present),
        fallback=str(previous),
    )
    return previous
