"""Step — the leaf of a plan tree.

A step is driven from two independent call paths:

- the offer-evaluation pass calls ``start()`` to learn what to satisfy and
  ``update_offer_status()`` with the matching outcome;
- the task-status channel calls ``update()`` for every status report.

Both paths mutate the same state, so every state-touching method of a step
runs under the step's own re-entrant lock. Nothing here blocks or waits on
anything but that lock.
"""

from __future__ import annotations

import threading
import uuid
from abc import abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from podplan.core.logging import get_logger
from podplan.plan.element import Element
from podplan.plan.status import Status
from podplan.plan.strategy import SerialStrategy, Strategy

if TYPE_CHECKING:
    from podplan.offer.pod import PodInstanceRequirement
    from podplan.offer.recommendation import OfferRecommendation
    from podplan.offer.task import TaskStatus

logger = get_logger(__name__)


class AbstractStep(Element):
    """Shared step scaffolding: identity, status, lock, errors, parameters."""

    def __init__(
        self,
        name: str,
        status: Status = Status.PENDING,
        strategy: Strategy | None = None,
        errors: Sequence[str] = (),
    ):
        self._name = name
        self._id = str(uuid.uuid4())
        self._status = status
        self._strategy = strategy or SerialStrategy()
        self._errors = list(errors)
        self._parameters: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> str:
        return self._id

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def status(self) -> Status:
        with self._lock:
            return self._status

    def _set_status(self, status: Status) -> None:
        """Publish a new status. Callers hold the lock."""
        old = self._status
        self._status = status
        if old != status:
            logger.info(
                "step_status_changed",
                step=self._name,
                step_id=self._id,
                old=str(old),
                new=str(status),
            )

    def get_errors(self) -> list[str]:
        return list(self._errors)

    @property
    def parameters(self) -> dict[str, str]:
        with self._lock:
            return dict(self._parameters)

    def update_parameters(self, parameters: Mapping[str, str] | None) -> None:
        """Environment overrides merged into the next ``start()`` result."""
        with self._lock:
            self._parameters = dict(parameters or {})

    def start(self) -> PodInstanceRequirement | None:
        """The work to offer for now, or ``None`` when there is nothing to do."""
        with self._lock:
            if self._status == Status.COMPLETE:
                return None
            return self.get_requirement()

    @abstractmethod
    def get_requirement(self) -> PodInstanceRequirement | None:
        """The declared requirement with current parameter overrides applied."""

    @abstractmethod
    def get_asset(self) -> PodInstanceRequirement | None:
        """The requirement as declared, without parameter overrides."""

    @property
    def asset_name(self) -> str | None:
        asset = self.get_asset()
        return asset.name if asset is not None else None

    @abstractmethod
    def update_offer_status(self, recommendations: Sequence[OfferRecommendation]) -> None:
        """Apply the outcome of one offer-matching attempt."""

    @abstractmethod
    def update(self, task_status: TaskStatus) -> None: ...
