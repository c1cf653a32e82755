"""
Structured error types for podplan.

Errors carry a category and a small structured context so the scheduler can
log them with the plan, phase, step, and task they belong to.

Hierarchy::

    PodPlanError  (category, context, cause)
      ├── ValidationError           (VALIDATION)
      │     └── InvalidPlanSpecError
      ├── ConfigError               (CONFIG)
      ├── PlanError                 (ORCHESTRATION)
      │     └── ElementNotFoundError
      └── TaskError                 (RESOLUTION)
            ├── TaskIdError
            └── GoalStateResolutionError

Guardrails:
    ❌ DON'T: Raise from ``Step.update()`` on a bad task status
    ✅ DO: Log it and keep the previous step status

    ❌ DON'T: Raise for step validation problems
    ✅ DO: Attach them to the step and surface them via ``get_errors()``

Usage:
    from podplan.core.errors import GoalStateResolutionError

    try:
        goal = get_goal_state(pod_instance, task_name)
    except TaskError as e:
        logger.error("goal_state_unresolved", error=e.to_dict())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"  # Malformed plan definitions, duplicate names
    CONFIG = "CONFIG"  # Missing or invalid settings
    ORCHESTRATION = "ORCHESTRATION"  # Plan tree lookups and management
    RESOLUTION = "RESOLUTION"  # Task id / goal state resolution
    INTERNAL = "INTERNAL"  # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        plan: Plan name
        phase: Phase name
        step: Step name
        task_id: Task identifier the error concerns
        metadata: Additional key-value pairs
    """

    plan: str | None = None
    phase: str | None = None
    step: str | None = None
    task_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["plan", "phase", "step", "task_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class PodPlanError(Exception):
    """
    Base exception for all podplan errors.

    Subclasses set ``default_category`` so callers rarely pass one explicitly.

    Examples:
        >>> error = PodPlanError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(step="hello-0").context.step
        'hello-0'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PodPlanError:
        """Add context fields, returning ``self`` for chaining.

        Known fields are set directly; anything else lands in ``metadata``.
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# Validation / configuration
# =============================================================================


class ValidationError(PodPlanError):
    """Invalid input that will never succeed on retry."""

    default_category = ErrorCategory.VALIDATION


class InvalidPlanSpecError(ValidationError):
    """Raised when a plan definition or element layout is invalid."""

    def __init__(self, message: str, field: str | None = None, **kwargs: Any):
        self.field = field
        super().__init__(message, **kwargs)


class ConfigError(PodPlanError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# Plan management
# =============================================================================


class PlanError(PodPlanError):
    """Base for plan tree management errors."""

    default_category = ErrorCategory.ORCHESTRATION


class ElementNotFoundError(PlanError):
    """Raised when a phase or step name does not exist in a plan."""

    def __init__(self, kind: str, name: str, parent: str | None = None):
        self.kind = kind
        self.name = name
        self.parent = parent
        where = f" in '{parent}'" if parent else ""
        super().__init__(f"{kind.capitalize()} not found{where}: {name}")


# =============================================================================
# Task resolution
# =============================================================================


class TaskError(PodPlanError):
    """Base for failures resolving task identity or specification."""

    default_category = ErrorCategory.RESOLUTION


class TaskIdError(TaskError):
    """Raised when a task identifier cannot be parsed."""

    def __init__(self, task_id: str, reason: str):
        self.task_id = task_id
        super().__init__(
            f"Invalid task id '{task_id}': {reason}",
            context=ErrorContext(task_id=task_id),
        )


class GoalStateResolutionError(TaskError):
    """Raised when a task's goal state cannot be found in its pod specification."""

    def __init__(self, pod_instance: str, task_name: str):
        self.pod_instance = pod_instance
        self.task_name = task_name
        super().__init__(
            f"No task specification in pod '{pod_instance}' matches task '{task_name}'",
            context=ErrorContext(metadata={"pod_instance": pod_instance, "task_name": task_name}),
        )


def categorize_error(error: Exception) -> ErrorCategory:
    """Return the category of an error, ``UNKNOWN`` for foreign exceptions."""
    if isinstance(error, PodPlanError):
        return error.category
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN
