"""Plan management — candidate selection across the tree and across plans.

``PlanManager`` walks one plan: the plan's strategy picks phases, each phase's
strategy picks steps. ``PlanCoordinator`` asks several managers in turn
(e.g. a deploy plan and a recovery plan) and grows the dirty set as it goes,
so two plans never pick the same pod instance in one scheduling pass.

ARCHITECTURE
────────────
::

    PlanCoordinator.get_candidates()
      dirty = ∪ manager.get_dirty_assets()        steps already in flight
      for manager in managers:
          steps = manager.get_candidates(dirty)
          dirty |= {step.name, step.asset_name}   claimed this pass

    PlanManager.get_candidates(dirty)
      plan.strategy  → phases
        phase.strategy → steps (steps with validation errors dropped)

Example::

    coordinator = PlanCoordinator([PlanManager(deploy_plan)])
    for step in coordinator.get_candidates():
        requirement = step.start()
        step.update_offer_status(evaluate(requirement, offers))
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from podplan.core.logging import get_logger
from podplan.offer.task import TaskStatus
from podplan.plan.phase import Phase, Plan
from podplan.plan.status import Status
from podplan.plan.step import AbstractStep

logger = get_logger(__name__)


class PlanManager:
    """Selects work from, and routes task statuses into, a single plan."""

    def __init__(self, plan: Plan):
        self.plan = plan

    @property
    def name(self) -> str:
        return self.plan.name

    def get_candidates(self, dirty_assets: Collection[str] = ()) -> list[AbstractStep]:
        """Steps eligible to start in this pass.

        Steps that carry validation errors are never offered.
        """
        candidates: list[AbstractStep] = []
        for phase in self.plan.strategy.get_candidates(self.plan, dirty_assets):
            for step in phase.strategy.get_candidates(phase, dirty_assets):
                if step.has_errors():
                    logger.warning(
                        "step_skipped_with_errors",
                        plan=self.plan.name,
                        phase=phase.name,
                        step=step.name,
                        errors=step.get_errors(),
                    )
                    continue
                candidates.append(step)

        logger.debug(
            "plan_candidates_selected",
            plan=self.plan.name,
            candidates=[step.name for step in candidates],
            dirty=sorted(dirty_assets),
        )
        return candidates

    def get_dirty_assets(self) -> set[str]:
        """Names and asset names of steps that are PREPARED or STARTING."""
        dirty: set[str] = set()
        for step in self.plan.steps:
            if step.is_in_progress():
                dirty.add(step.name)
                if step.asset_name:
                    dirty.add(step.asset_name)
        return dirty

    def update(self, task_status: TaskStatus) -> None:
        self.plan.update(task_status)

    def restart(self, phase: str | None = None, step: str | None = None) -> None:
        """Restart the whole plan, one phase, or one step of a phase."""
        target = self._resolve(phase, step)
        logger.info("plan_restart", plan=self.plan.name, phase=phase, step=step)
        target.restart()

    def interrupt(self, phase: str | None = None) -> None:
        target = self._resolve(phase, None)
        logger.info("plan_interrupted", plan=self.plan.name, phase=phase)
        target.interrupt()

    def proceed(self, phase: str | None = None) -> None:
        target = self._resolve(phase, None)
        logger.info("plan_proceeding", plan=self.plan.name, phase=phase)
        target.proceed()

    def _resolve(self, phase: str | None, step: str | None) -> Plan | Phase | AbstractStep:
        if phase is None:
            return self.plan
        found = self.plan.get_phase(phase)
        if step is None:
            return found
        return found.get_step(step)

    @property
    def status(self) -> Status:
        return self.plan.status


class PlanCoordinator:
    """Selects work across several plans without conflicting pod claims."""

    def __init__(self, managers: Sequence[PlanManager]):
        self.managers = list(managers)

    def get_candidates(self) -> list[AbstractStep]:
        dirty: set[str] = set()
        for manager in self.managers:
            dirty |= manager.get_dirty_assets()

        selected: list[AbstractStep] = []
        for manager in self.managers:
            for step in manager.get_candidates(frozenset(dirty)):
                if step.asset_name and step.asset_name in dirty:
                    continue
                selected.append(step)
                dirty.add(step.name)
                if step.asset_name:
                    dirty.add(step.asset_name)

        logger.info(
            "coordinator_candidates_selected",
            plans=[m.name for m in self.managers],
            candidates=[step.name for step in selected],
        )
        return selected

    def update(self, task_status: TaskStatus) -> None:
        for manager in self.managers:
            manager.update(task_status)
