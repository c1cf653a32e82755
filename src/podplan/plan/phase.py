"""Phase and Plan — the composite levels of a deployment plan.

Neither stores a status: both aggregate their children's current statuses on
every read, so the tree never reports a stale snapshot.

Example::

    plan = Plan(
        name="deploy",
        phases=[
            Phase("hello", [step0, step1], strategy=ParallelStrategy()),
            Phase("world", [step2]),
        ],
    )
    plan.status          # weakest link of the phases
    plan.steps           # [step0, step1, step2]
"""

from __future__ import annotations

from collections.abc import Sequence

from podplan.core.errors import ElementNotFoundError
from podplan.plan.element import ParentElement
from podplan.plan.step import AbstractStep
from podplan.plan.strategy import Strategy


class Phase(ParentElement):
    """An ordered group of steps executed under one strategy."""

    def __init__(
        self,
        name: str,
        steps: Sequence[AbstractStep],
        strategy: Strategy | None = None,
        errors: Sequence[str] = (),
    ):
        super().__init__(name, steps, strategy=strategy, errors=errors)

    @property
    def steps(self) -> list[AbstractStep]:
        return list(self._children)

    def get_step(self, name: str) -> AbstractStep:
        for step in self._children:
            if step.name == name:
                return step
        raise ElementNotFoundError("step", name, parent=self.name)


class Plan(ParentElement):
    """The root of the tree: an ordered group of phases."""

    def __init__(
        self,
        name: str,
        phases: Sequence[Phase],
        strategy: Strategy | None = None,
        errors: Sequence[str] = (),
    ):
        super().__init__(name, phases, strategy=strategy, errors=errors)

    @property
    def phases(self) -> list[Phase]:
        return list(self._children)

    def get_phase(self, name: str) -> Phase:
        for phase in self._children:
            if phase.name == name:
                return phase
        raise ElementNotFoundError("phase", name, parent=self.name)

    @property
    def steps(self) -> list[AbstractStep]:
        """Every step in the plan, in declared order."""
        return [step for phase in self._children for step in phase.steps]
