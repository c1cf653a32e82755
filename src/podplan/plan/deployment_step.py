"""DeploymentStep — deploys one pod instance and tracks its tasks.

State machine
─────────────
The step keeps a map ``task_id -> TaskStatusPair(task_info, status)`` plus a
``prepared`` flag, and its overall status is always the aggregation of that
map (``PREPARED``/``PENDING`` by flag when the map is empty).

Offer outcome (``update_offer_status``)::

    launches present   map rebuilt from the launches, every task STARTING
    nothing matched    tracked tasks kept, every task PREPARED
    either way         prepared = True, status recomputed

Task status (``update``)::

    ERROR FAILED KILLED KILLING LOST    -> PENDING   (redeploy)
    STAGING STARTING                    -> STARTING
    RUNNING, goal RUNNING, ready        -> COMPLETE
    RUNNING otherwise                   -> STARTING
    FINISHED, goal FINISHED             -> COMPLETE
    FINISHED otherwise                  -> PENDING
    anything else                       -> unchanged, logged

A step that recomputes to PENDING clears ``prepared`` so it is offered again
from scratch; failed tasks take the same path as first-time scheduling.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from podplan.core.errors import TaskError
from podplan.core.logging import get_logger
from podplan.offer.pod import GoalState, PodInstanceRequirement, get_goal_state
from podplan.offer.recommendation import OfferRecommendation, launched_tasks
from podplan.offer.task import (
    TaskInfo,
    TaskState,
    TaskStatus,
    is_readiness_check_succeeded,
    task_name_from_id,
)
from podplan.plan.status import Status, aggregate_statuses
from podplan.plan.step import AbstractStep
from podplan.plan.strategy import Strategy

logger = get_logger(__name__)

_REDEPLOY_STATES = frozenset({
    TaskState.ERROR,
    TaskState.FAILED,
    TaskState.KILLED,
    TaskState.KILLING,
    TaskState.LOST,
})
_LAUNCHING_STATES = frozenset({TaskState.STAGING, TaskState.STARTING})


@dataclass(frozen=True)
class TaskStatusPair:
    """A launched task and the step-level status derived for it."""

    task_info: TaskInfo
    status: Status

    def __str__(self) -> str:
        return f"{self.task_info.name}({self.task_info.task_id}):{self.status}"


class DeploymentStep(AbstractStep):
    """Step that deploys a pod instance.

    Args:
        name: Step name, unique within its phase
        requirement: The pod instance requirement this step satisfies
        status: Initial status (``COMPLETE`` for pods that are already deployed)
        errors: Validation errors to surface to operators
    """

    def __init__(
        self,
        name: str,
        requirement: PodInstanceRequirement,
        status: Status = Status.PENDING,
        errors: Sequence[str] = (),
        strategy: Strategy | None = None,
    ):
        super().__init__(name, status=status, strategy=strategy, errors=errors)
        self._requirement = requirement
        self._tasks: dict[str, TaskStatusPair] = {}
        self._prepared = False

    # ── Requirement ─────────────────────────────────────────────────────

    def get_requirement(self) -> PodInstanceRequirement:
        with self._lock:
            return self._requirement.with_environment(self._parameters)

    def get_asset(self) -> PodInstanceRequirement:
        return self._requirement

    # ── Inspection ──────────────────────────────────────────────────────

    @property
    def prepared(self) -> bool:
        with self._lock:
            return self._prepared

    @property
    def tasks(self) -> dict[str, TaskStatusPair]:
        """Snapshot of the task tracking map."""
        with self._lock:
            return dict(self._tasks)

    def task_statuses(self) -> dict[str, Status]:
        with self._lock:
            return {task_id: pair.status for task_id, pair in self._tasks.items()}

    # ── Offer outcome ───────────────────────────────────────────────────

    def update_offer_status(self, recommendations: Sequence[OfferRecommendation]) -> None:
        recommendations = list(recommendations)
        logger.info(
            "step_offer_status_updated",
            step=self._name,
            step_id=self._id,
            recommendations=len(recommendations),
            operations=[rec.operation.value for rec in recommendations],
        )

        with self._lock:
            if recommendations:
                self._track_tasks(recommendations)
                for task_id in list(self._tasks):
                    self._set_task_status(task_id, Status.STARTING)
            else:
                for task_id in list(self._tasks):
                    self._set_task_status(task_id, Status.PREPARED)

            self._prepared = True
            self._set_status(self._compute_status())

    def _track_tasks(self, recommendations: Sequence[OfferRecommendation]) -> None:
        """Replace the tracking map with the tasks launched by ``recommendations``."""
        self._tasks = {
            info.task_id: TaskStatusPair(info, Status.PREPARED)
            for info in launched_tasks(recommendations)
        }
        logger.info(
            "step_awaiting_task_updates",
            step=self._name,
            step_id=self._id,
            tasks=[str(pair) for pair in self._tasks.values()],
        )

    # ── Task status ─────────────────────────────────────────────────────

    def update(self, task_status: TaskStatus) -> None:
        with self._lock:
            logger.debug("step_task_status_received", step=self._name, status=task_status.short())

            pair = self._tasks.get(task_status.task_id)
            if pair is None:
                logger.debug("step_task_status_irrelevant", step=self._name, status=task_status.short())
                return

            if self._status == Status.COMPLETE:
                logger.debug("step_task_status_ignored_complete", step=self._name, status=task_status.short())
                return

            try:
                goal = get_goal_state(
                    self._requirement.pod_instance,
                    task_name_from_id(task_status.task_id),
                )
            except TaskError as e:
                logger.error("step_goal_state_unresolved", step=self._name, **e.to_dict())
                return

            task_state = self._task_state_to_status(task_status, pair.task_info, goal)
            if task_state is None:
                logger.error(
                    "step_task_state_unexpected",
                    step=self._name,
                    task_id=task_status.task_id,
                    state=task_status.state.value,
                )
            else:
                self._set_task_status(task_status.task_id, task_state)

            status = self._compute_status()
            self._set_status(status)
            if status == Status.PENDING:
                self._prepared = False

    @staticmethod
    def _task_state_to_status(
        task_status: TaskStatus, task_info: TaskInfo, goal: GoalState
    ) -> Status | None:
        state = task_status.state
        if state in _REDEPLOY_STATES:
            return Status.PENDING
        if state in _LAUNCHING_STATES:
            return Status.STARTING
        if state == TaskState.RUNNING:
            if goal == GoalState.RUNNING and is_readiness_check_succeeded(task_info, task_status):
                return Status.COMPLETE
            return Status.STARTING
        if state == TaskState.FINISHED:
            return Status.COMPLETE if goal == GoalState.FINISHED else Status.PENDING
        return None

    def _set_task_status(self, task_id: str, status: Status) -> None:
        pair = self._tasks.get(task_id)
        if pair is None:
            return
        self._tasks[task_id] = TaskStatusPair(pair.task_info, status)
        logger.info("task_status_changed", step=self._name, task_id=task_id, status=str(status))

    def _compute_status(self) -> Status:
        """Overall status from the tracking map alone."""
        if not self._tasks:
            return Status.PREPARED if self._prepared else Status.PENDING
        return aggregate_statuses(
            (pair.status for pair in self._tasks.values()),
            previous=self._status,
        )

    # ── Management ──────────────────────────────────────────────────────

    def restart(self) -> None:
        with self._lock:
            logger.info("step_restarted", step=self._name, step_id=self._id)
            self._tasks = {}
            self._prepared = False
            self._set_status(Status.PENDING)
