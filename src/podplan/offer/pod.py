"""Pod and task specifications as seen by plan steps.

These are the slices of the service specification that a deployment step
needs: which tasks a pod instance runs and the goal state of each. Parsing
full service specifications happens elsewhere; plan steps only read these
records.

ARCHITECTURE
────────────
::

    PodSpec(type, tasks=[TaskSpec(name, goal, readiness_check)])
      └── PodInstance(pod, index)            name: "<type>-<index>"
            └── PodInstanceRequirement       what a step asks offers to satisfy
                  ├── tasks_to_launch
                  └── environment            overrides merged per start()
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from podplan.core.errors import GoalStateResolutionError


class GoalState(str, Enum):
    """Desired terminal mode of a task."""

    RUNNING = "RUNNING"  # Long-lived; complete once running (and ready)
    FINISHED = "FINISHED"  # Run-to-completion; complete once finished


@dataclass(frozen=True)
class TaskSpec:
    """A task within a pod specification."""

    name: str
    goal: GoalState = GoalState.RUNNING
    readiness_check: bool = False


@dataclass(frozen=True)
class PodSpec:
    """A pod type and the tasks every instance of it runs."""

    type: str
    tasks: tuple[TaskSpec, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if isinstance(self.tasks, list):
            object.__setattr__(self, "tasks", tuple(self.tasks))

    def get_task(self, name: str) -> TaskSpec | None:
        for task in self.tasks:
            if task.name == name:
                return task
        return None


@dataclass(frozen=True)
class PodInstance:
    """One concrete instance (by index) of a pod specification."""

    pod: PodSpec
    index: int

    @property
    def name(self) -> str:
        return f"{self.pod.type}-{self.index}"

    def task_name(self, task_spec_name: str) -> str:
        """Full task name as launched on the cluster."""
        return f"{self.name}-{task_spec_name}"


@dataclass(frozen=True)
class PodInstanceRequirement:
    """
    What a step asks the offer-evaluation pipeline to satisfy.

    Attributes:
        pod_instance: The pod instance to deploy
        tasks_to_launch: Task specification names to launch (all tasks when empty)
        environment: Environment overrides applied to the launched tasks

    Immutable: ``with_environment`` returns a new requirement.
    """

    pod_instance: PodInstance
    tasks_to_launch: tuple[str, ...] = field(default_factory=tuple)
    environment: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.tasks_to_launch, list):
            object.__setattr__(self, "tasks_to_launch", tuple(self.tasks_to_launch))
        object.__setattr__(self, "environment", dict(self.environment))

    @classmethod
    def for_pod(cls, pod_instance: PodInstance, *task_names: str) -> PodInstanceRequirement:
        """Requirement launching ``task_names`` (or every task in the pod)."""
        names = task_names or tuple(t.name for t in pod_instance.pod.tasks)
        return cls(pod_instance=pod_instance, tasks_to_launch=tuple(names))

    @property
    def name(self) -> str:
        return self.pod_instance.name

    def with_environment(self, overrides: Mapping[str, str] | None) -> PodInstanceRequirement:
        """Return a copy whose environment has ``overrides`` merged on top."""
        merged = dict(self.environment)
        merged.update(overrides or {})
        return PodInstanceRequirement(
            pod_instance=self.pod_instance,
            tasks_to_launch=self.tasks_to_launch,
            environment=merged,
        )


def get_goal_state(pod_instance: PodInstance, task_name: str) -> GoalState:
    """Resolve the goal state of a launched task from its pod specification.

    Raises:
        GoalStateResolutionError: If no task spec in the pod yields ``task_name``.
    """
    for task_spec in pod_instance.pod.tasks:
        if pod_instance.task_name(task_spec.name) == task_name:
            return task_spec.goal
    raise GoalStateResolutionError(pod_instance.name, task_name)
