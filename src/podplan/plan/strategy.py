"""Strategies — which pending children of an element may execute now.

A strategy is asked afresh on every scheduling pass; it never caches its
answer and never mutates the dirty set it is given. ``dirty_assets`` names
elements or resources claimed elsewhere in the same pass, and a dirty child is
never returned even when it is otherwise eligible.

    SerialStrategy    ── the first incomplete child, only while it is pending;
                         pending children claimed as dirty are passed over
    ParallelStrategy  ── every pending, non-dirty child in declared order

A serial parent holds at a child that is in progress or in ERROR: nothing
after it is offered until that child completes.

Example::

    strategy = ParallelStrategy()
    for step in strategy.get_candidates(phase, dirty_assets={"hello-0"}):
        requirement = step.start()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection
from typing import TYPE_CHECKING

from podplan.core.errors import InvalidPlanSpecError

if TYPE_CHECKING:
    from podplan.plan.element import Element


class Strategy(ABC):
    """Selects eligible children of a parent element.

    Every strategy can be interrupted; an interrupted strategy offers nothing
    until ``proceed()`` is called.
    """

    name: str = ""

    def __init__(self) -> None:
        self._interrupted = False

    @property
    def is_interrupted(self) -> bool:
        return self._interrupted

    def interrupt(self) -> None:
        self._interrupted = True

    def proceed(self) -> None:
        self._interrupted = False

    def get_candidates(
        self, parent: Element, dirty_assets: Collection[str] = ()
    ) -> list[Element]:
        """Children of ``parent`` eligible to execute now."""
        if self._interrupted:
            return []
        return self._select(list(parent.children), dirty_assets)

    @abstractmethod
    def _select(
        self, children: list[Element], dirty_assets: Collection[str]
    ) -> list[Element]:
        """Pick from ``children``, which arrive in declared order."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(interrupted={self._interrupted})"


class SerialStrategy(Strategy):
    """One child at a time, in declared order."""

    name = "serial"

    def _select(
        self, children: list[Element], dirty_assets: Collection[str]
    ) -> list[Element]:
        for child in children:
            if child.is_complete():
                continue
            if child.is_pending() and child.name in dirty_assets:
                continue
            # In progress or in ERROR: hold here
            return [child] if child.is_pending() else []
        return []


class ParallelStrategy(Strategy):
    """Every eligible child at once."""

    name = "parallel"

    def _select(
        self, children: list[Element], dirty_assets: Collection[str]
    ) -> list[Element]:
        return [child for child in children if is_eligible(child, dirty_assets)]


def is_eligible(element: Element, dirty_assets: Collection[str]) -> bool:
    """Pending and not claimed elsewhere in this pass."""
    return element.is_pending() and element.name not in dirty_assets


_STRATEGIES: dict[str, type[Strategy]] = {
    SerialStrategy.name: SerialStrategy,
    ParallelStrategy.name: ParallelStrategy,
}


def strategy_for(name: str) -> Strategy:
    """Build a fresh strategy from its name (``serial`` or ``parallel``)."""
    try:
        return _STRATEGIES[name.lower()]()
    except KeyError:
        raise InvalidPlanSpecError(
            f"Unknown strategy '{name}'. Available: {', '.join(sorted(_STRATEGIES))}",
            field="strategy",
        ) from None
