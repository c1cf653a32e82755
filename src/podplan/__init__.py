"""
podplan — deployment plan execution for pod schedulers.

WHY
───
A scheduler that runs long-lived services on a shared cluster must decide,
on every resource offer, which piece of pending work to try next, and must
keep an accurate picture of deployment progress while task status reports
arrive asynchronously. podplan models a deployment as a tree and keeps that
picture consistent.

ARCHITECTURE
────────────
::

    Plan                       status = weakest link of phases
      └── Phase                status = weakest link of steps
            └── DeploymentStep status = weakest link of its tracked tasks

    Strategy (Serial / Parallel)   which pending children may run now
    PlanManager / PlanCoordinator  candidate selection across plans

    offer-evaluation pass ──► step.start() ──► step.update_offer_status(recs)
    task-status channel   ──► plan.update(task_status)

Example::

    from podplan import DeploymentStep, ParallelStrategy, Phase, Plan, PlanManager

    plan = Plan("deploy", [Phase("hello", steps, strategy=ParallelStrategy())])
    manager = PlanManager(plan)

    for step in manager.get_candidates(dirty_assets=set()):
        requirement = step.start()
        step.update_offer_status(evaluate(requirement))

    manager.update(task_status)
"""

from podplan.plan import (
    AbstractStep,
    DeploymentStep,
    Element,
    ParallelStrategy,
    ParentElement,
    Phase,
    Plan,
    PlanCoordinator,
    PlanManager,
    SerialStrategy,
    Status,
    Strategy,
    aggregate_statuses,
    strategy_for,
)

__version__ = "0.1.0"

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
    "aggregate_statuses",
    "strategy_for",
]
