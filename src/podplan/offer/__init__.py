"""
Offer-side types consumed by plan steps.

These describe the boundary with the offer-evaluation pipeline and the
cluster's task-status channel: what a step requests (``PodInstanceRequirement``),
what offer evaluation answers (``OfferRecommendation``), and what the cluster
reports afterwards (``TaskStatus``).
"""

from podplan.offer.pod import (
    GoalState,
    PodInstance,
    PodInstanceRequirement,
    PodSpec,
    TaskSpec,
    get_goal_state,
)
from podplan.offer.recommendation import (
    LaunchRecommendation,
    OfferRecommendation,
    OperationType,
    ReserveRecommendation,
    UnreserveRecommendation,
    launched_tasks,
)
from podplan.offer.task import (
    TaskInfo,
    TaskState,
    TaskStatus,
    is_readiness_check_succeeded,
    new_task_id,
    task_name_from_id,
)

__all__ = [
    "GoalState",
    "LaunchRecommendation",
    "OfferRecommendation",
    "OperationType",
    "PodInstance",
    "PodInstanceRequirement",
    "PodSpec",
    "ReserveRecommendation",
    "TaskInfo",
    "TaskSpec",
    "TaskState",
    "TaskStatus",
    "UnreserveRecommendation",
    "get_goal_state",
    "is_readiness_check_succeeded",
    "launched_tasks",
    "new_task_id",
    "task_name_from_id",
]
