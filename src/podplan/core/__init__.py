"""Core primitives shared by every podplan module: errors, logging, settings."""

from podplan.core.errors import (
    ConfigError,
    ElementNotFoundError,
    ErrorCategory,
    ErrorContext,
    GoalStateResolutionError,
    InvalidPlanSpecError,
    PlanError,
    PodPlanError,
    TaskError,
    TaskIdError,
    ValidationError,
    categorize_error,
)

__all__ = [
    "ConfigError",
    "ElementNotFoundError",
    "ErrorCategory",
    "ErrorContext",
    "GoalStateResolutionError",
    "InvalidPlanSpecError",
    "PlanError",
    "PodPlanError",
    "TaskError",
    "TaskIdError",
    "ValidationError",
    "categorize_error",
]
