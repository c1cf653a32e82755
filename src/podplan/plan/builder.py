"""Pydantic models for declarative plan layouts.

A plan definition names the pods a plan deploys, how its phases are
ordered, and which strategy each level uses. It is only a layout: pod
templating and the rest of the service specification live elsewhere.

Usage::

    from podplan.plan.builder import PlanDefinition

    definition = PlanDefinition.from_yaml_file("plans/deploy.yaml")
    plan = definition.to_plan()

Example YAML::

    name: deploy
    strategy: serial
    pods:
      - type: hello
        count: 2
        tasks:
          - name: server
            goal: RUNNING
            readiness_check: true
      - type: init
        tasks:
          - name: bootstrap
            goal: FINISHED
    phases:
      - name: hello-deploy
        pod: hello
        strategy: parallel
      - name: init
        pod: init
        steps:
          - pod_index: 0
            tasks: [bootstrap]
            status: COMPLETE
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, model_validator

from podplan.core.config import get_settings
from podplan.core.errors import InvalidPlanSpecError
from podplan.offer.pod import GoalState, PodInstance, PodInstanceRequirement, PodSpec, TaskSpec
from podplan.plan.deployment_step import DeploymentStep
from podplan.plan.phase import Phase, Plan
from podplan.plan.status import Status
from podplan.plan.strategy import strategy_for


class TaskDefinition(BaseModel):
    """A task within a pod."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    goal: GoalState = Field(default=GoalState.RUNNING)
    readiness_check: bool = Field(default=False)

    def to_task_spec(self) -> TaskSpec:
        return TaskSpec(name=self.name, goal=self.goal, readiness_check=self.readiness_check)


class PodDefinition(BaseModel):
    """A pod type and how many instances of it the plan deploys."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., min_length=1)
    count: int = Field(default=1, ge=1)
    tasks: list[TaskDefinition] = Field(..., min_length=1)

    def to_pod_spec(self) -> PodSpec:
        return PodSpec(type=self.type, tasks=tuple(t.to_task_spec() for t in self.tasks))


class StepDefinition(BaseModel):
    """One explicitly declared step of a phase."""

    model_config = ConfigDict(extra="forbid")

    pod_index: int = Field(..., ge=0)
    name: str | None = Field(default=None, description="Defaults to the pod instance name")
    tasks: list[str] = Field(default_factory=list, description="Task names to launch (all when empty)")
    status: Status = Field(default=Status.PENDING)
    environment: dict[str, str] = Field(default_factory=dict)


class PhaseDefinition(BaseModel):
    """A phase deploying instances of one pod type."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    pod: str = Field(..., min_length=1)
    strategy: str | None = Field(default=None)
    steps: list[StepDefinition] | None = Field(
        default=None, description="Explicit steps; one step per pod instance when omitted"
    )


class PlanDefinition(BaseModel):
    """Top-level plan layout."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    strategy: str | None = Field(default=None)
    pods: list[PodDefinition] = Field(..., min_length=1)
    phases: list[PhaseDefinition] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _validate_references(self) -> PlanDefinition:
        pod_types = [p.type for p in self.pods]
        if len(pod_types) != len(set(pod_types)):
            raise ValueError(f"Duplicate pod types: {sorted({t for t in pod_types if pod_types.count(t) > 1})}")

        pods = {p.type: p for p in self.pods}
        for phase in self.phases:
            pod = pods.get(phase.pod)
            if pod is None:
                raise ValueError(f"Phase '{phase.name}' references unknown pod: '{phase.pod}'")
            task_names = {t.name for t in pod.tasks}
            for step in phase.steps or []:
                if step.pod_index >= pod.count:
                    raise ValueError(
                        f"Phase '{phase.name}' step index {step.pod_index} exceeds pod count {pod.count}"
                    )
                unknown = sorted(set(step.tasks) - task_names)
                if unknown:
                    raise ValueError(f"Phase '{phase.name}' launches unknown tasks: {unknown}")
        return self

    # ── Loading ─────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlanDefinition:
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidPlanSpecError(f"Invalid plan definition: {e}", cause=e) from e

    @classmethod
    def from_yaml(cls, yaml_content: str) -> PlanDefinition:
        import yaml

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise InvalidPlanSpecError(f"Plan definition is not valid YAML: {e}", cause=e) from e
        if not isinstance(data, dict):
            raise InvalidPlanSpecError("Plan definition must be a YAML mapping")
        return cls.from_dict(data)

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> PlanDefinition:
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"))

    # ── Building ────────────────────────────────────────────────────────

    def to_plan(self) -> Plan:
        """Build a fresh plan tree (all steps start in their declared status)."""
        settings = get_settings()
        pods = {p.type: p for p in self.pods}
        phases = []
        for phase_def in self.phases:
            pod_def = pods[phase_def.pod]
            pod_spec = pod_def.to_pod_spec()
            step_defs = phase_def.steps
            if step_defs is None:
                step_defs = [StepDefinition(pod_index=i) for i in range(pod_def.count)]
            steps = [_build_step(pod_spec, step_def) for step_def in step_defs]
            phases.append(
                Phase(
                    phase_def.name,
                    steps,
                    strategy=strategy_for(phase_def.strategy or settings.default_phase_strategy),
                )
            )
        return Plan(
            self.name,
            phases,
            strategy=strategy_for(self.strategy or settings.default_plan_strategy),
        )


def _build_step(pod_spec: PodSpec, step_def: StepDefinition) -> DeploymentStep:
    pod_instance = PodInstance(pod=pod_spec, index=step_def.pod_index)
    requirement = PodInstanceRequirement(
        pod_instance=pod_instance,
        tasks_to_launch=tuple(step_def.tasks) or tuple(t.name for t in pod_spec.tasks),
        environment=step_def.environment,
    )
    return DeploymentStep(
        name=step_def.name or pod_instance.name,
        requirement=requirement,
        status=step_def.status,
    )
