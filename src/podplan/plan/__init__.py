"""
Plan tree, strategies, and the deployment step state machine.

MODULE MAP (recommended reading order)
──────────────────────────────────────
1. status.py           ─ Status + weakest-link aggregation
2. element.py          ─ Element / ParentElement tree nodes
3. strategy.py         ─ Serial / Parallel candidate selection
4. step.py             ─ AbstractStep (lock, identity, parameters)
5. deployment_step.py  ─ DeploymentStep task-tracking state machine
6. phase.py            ─ Phase / Plan composites
7. manager.py          ─ PlanManager / PlanCoordinator
8. builder.py          ─ declarative plan layouts (pydantic)
9. visualizer.py       ─ ASCII tree + summary
"""

from podplan.plan.deployment_step import DeploymentStep, TaskStatusPair
from podplan.plan.element import Element, ParentElement
from podplan.plan.manager import PlanCoordinator, PlanManager
from podplan.plan.phase import Phase, Plan
from podplan.plan.status import Status, aggregate_statuses
from podplan.plan.step import AbstractStep
from podplan.plan.strategy import ParallelStrategy, SerialStrategy, Strategy, strategy_for

__all__ = [
    "AbstractStep",
    "DeploymentStep",
    "Element",
    "ParallelStrategy",
    "ParentElement",
    "Phase",
    "Plan",
    "PlanCoordinator",
    "PlanManager",
    "SerialStrategy",
    "Status",
    "Strategy",
    "TaskStatusPair",
    "aggregate_statuses",
    "strategy_for",
]
