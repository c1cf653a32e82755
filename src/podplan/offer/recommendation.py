"""Offer recommendations: the outcome of matching offers against a requirement.

The matching itself is done by the offer-evaluation pipeline. Steps only
look at the results, and only launch recommendations carry a task.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from podplan.offer.task import TaskInfo


class OperationType(str, Enum):
    """Cluster operation a recommendation would perform."""

    LAUNCH = "LAUNCH"
    RESERVE = "RESERVE"
    UNRESERVE = "UNRESERVE"


@dataclass(frozen=True)
class OfferRecommendation(ABC):
    """Base for every recommendation produced by offer evaluation.

    Steps only track launches; every other kind is passed over.
    """

    offer_id: str

    @property
    @abstractmethod
    def operation(self) -> OperationType: ...


@dataclass(frozen=True)
class LaunchRecommendation(OfferRecommendation):
    """Launch a task on the matched offer."""

    task_info: TaskInfo

    @property
    def operation(self) -> OperationType:
        return OperationType.LAUNCH


@dataclass(frozen=True)
class ReserveRecommendation(OfferRecommendation):
    """Reserve a resource on the matched offer."""

    resource: str

    @property
    def operation(self) -> OperationType:
        return OperationType.RESERVE


@dataclass(frozen=True)
class UnreserveRecommendation(OfferRecommendation):
    """Release a previously reserved resource."""

    resource: str

    @property
    def operation(self) -> OperationType:
        return OperationType.UNRESERVE


def launched_tasks(recommendations: Iterable[OfferRecommendation]) -> list[TaskInfo]:
    """Task infos of the launch recommendations that carry a task id."""
    return [
        rec.task_info
        for rec in recommendations
        if isinstance(rec, LaunchRecommendation) and rec.task_info.task_id
    ]
