"""Element — the node type of a deployment plan tree.

ARCHITECTURE
────────────
::

    Element                   name, status, children, strategy, errors
      ├── AbstractStep        leaf: status from its own task tracking
      │     └── DeploymentStep
      └── ParentElement       composite: status aggregated from children on read
            ├── Phase         children are steps
            └── Plan          children are phases

Strategies only use the ``Element`` interface, never concrete classes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from podplan.core.errors import ElementNotFoundError, InvalidPlanSpecError
from podplan.plan.status import Status, aggregate_statuses

if TYPE_CHECKING:
    from podplan.offer.task import TaskStatus
    from podplan.plan.strategy import Strategy


class Element(ABC):
    """A node of the plan tree."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def status(self) -> Status: ...

    @property
    @abstractmethod
    def strategy(self) -> Strategy: ...

    @property
    def children(self) -> Sequence[Element]:
        return ()

    @abstractmethod
    def get_errors(self) -> list[str]: ...

    @abstractmethod
    def update(self, task_status: TaskStatus) -> None:
        """Apply a task status report."""

    @abstractmethod
    def restart(self) -> None:
        """Return this element to PENDING so it is offered again."""

    def get_status(self) -> Status:
        return self.status

    def is_pending(self) -> bool:
        return self.status == Status.PENDING

    def is_prepared(self) -> bool:
        return self.status == Status.PREPARED

    def is_starting(self) -> bool:
        return self.status == Status.STARTING

    def is_complete(self) -> bool:
        return self.status == Status.COMPLETE

    def is_in_progress(self) -> bool:
        return self.status in (Status.PREPARED, Status.STARTING)

    def has_errors(self) -> bool:
        return bool(self.get_errors())

    def is_interrupted(self) -> bool:
        return self.strategy.is_interrupted

    def interrupt(self) -> None:
        self.strategy.interrupt()

    def proceed(self) -> None:
        self.strategy.proceed()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, status={self.status})"


class ParentElement(Element):
    """Composite element whose status is derived from its children on every read."""

    def __init__(
        self,
        name: str,
        children: Sequence[Element],
        strategy: Strategy | None = None,
        errors: Sequence[str] = (),
    ):
        from podplan.plan.strategy import SerialStrategy

        names = [child.name for child in children]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise InvalidPlanSpecError(
                f"Duplicate child names in '{name}': {duplicates}", field="children"
            )

        self._name = name
        self._children = list(children)
        self._strategy = strategy or SerialStrategy()
        self._errors = list(errors)

    @property
    def name(self) -> str:
        return self._name

    @property
    def children(self) -> Sequence[Element]:
        return tuple(self._children)

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def status(self) -> Status:
        statuses = [child.status for child in self._children]
        if not statuses:
            return Status.PENDING
        return aggregate_statuses(statuses, previous=Status.PENDING)

    def get_errors(self) -> list[str]:
        errors = list(self._errors)
        for child in self._children:
            errors.extend(child.get_errors())
        return errors

    def get_child(self, name: str) -> Element:
        for child in self._children:
            if child.name == name:
                return child
        raise ElementNotFoundError("element", name, parent=self._name)

    def update(self, task_status: TaskStatus) -> None:
        for child in self._children:
            child.update(task_status)

    def restart(self) -> None:
        for child in self._children:
            child.restart()
