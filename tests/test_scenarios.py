"""
End-to-end scheduling scenarios.

Drives a plan the way a scheduler does: each pass asks for candidates,
starts them, feeds back an offer outcome, then delivers task statuses.
"""

from __future__ import annotations

import pytest
from factories import launches_for, status

from podplan.offer.task import TaskState
from podplan.plan.builder import PlanDefinition
from podplan.plan.manager import PlanCoordinator, PlanManager
from podplan.plan.status import Status

pytestmark = pytest.mark.integration

PLAN = {
    "name": "deploy",
    "pods": [
        {"type": "init", "tasks": [{"name": "bootstrap", "goal": "FINISHED"}]},
        {"type": "hello", "count": 3, "tasks": [{"name": "server", "readiness_check": True}]},
    ],
    "phases": [
        {"name": "init", "pod": "init"},
        {"name": "hello-deploy", "pod": "hello", "strategy": "parallel"},
    ],
}


def _schedule(coordinator: PlanCoordinator) -> list[str]:
    """One scheduling pass; every candidate gets its offers matched."""
    started = []
    for step in coordinator.get_candidates():
        assert step.start() is not None
        step.update_offer_status(launches_for(step))
        started.append(step.name)
    return started


def _report(plan, state: TaskState, ready: bool = False, only: str | None = None) -> None:
    for step in plan.steps:
        if only is not None and step.name != only:
            continue
        for task_id in step.tasks:
            step.update(status(task_id, state, ready=ready))


def test_full_deployment_with_failure_and_recovery():
    plan = PlanDefinition.from_dict(PLAN).to_plan()
    coordinator = PlanCoordinator([PlanManager(plan)])

    assert _schedule(coordinator) == ["init-0"]
    assert "init-0" in coordinator.managers[0].get_dirty_assets()
    # The serial plan holds at the init phase while it is starting
    assert _schedule(coordinator) == []

    _report(plan, TaskState.FINISHED, only="init-0")
    assert plan.get_phase("init").is_complete()

    assert _schedule(coordinator) == ["hello-0", "hello-1", "hello-2"]
    _report(plan, TaskState.RUNNING, ready=True, only="hello-0")
    _report(plan, TaskState.RUNNING, ready=False, only="hello-1")
    _report(plan, TaskState.LOST, only="hello-2")

    assert plan.get_phase("hello-deploy").steps[2].is_pending()
    assert plan.status == Status.PENDING

    # Only the failed step is offered again
    assert _schedule(coordinator) == ["hello-2"]

    _report(plan, TaskState.RUNNING, ready=True)
    assert plan.is_complete()
    assert _schedule(coordinator) == []


def test_stuck_offer_leaves_step_prepared():
    plan = PlanDefinition.from_dict(PLAN).to_plan()
    manager = PlanManager(plan)
    step = manager.get_candidates()[0]

    step.update_offer_status([])

    assert step.status == Status.PREPARED
    assert step.name in manager.get_dirty_assets()
    assert manager.get_candidates() == []
