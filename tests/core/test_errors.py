"""Tests for podplan.core.errors."""

from __future__ import annotations

import pytest

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


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error, category",
        [
            (InvalidPlanSpecError("bad"), ErrorCategory.VALIDATION),
            (ConfigError("missing"), ErrorCategory.CONFIG),
            (ElementNotFoundError("step", "x"), ErrorCategory.ORCHESTRATION),
            (TaskIdError("x", "no separator"), ErrorCategory.RESOLUTION),
            (GoalStateResolutionError("hello-0", "hello-0-db"), ErrorCategory.RESOLUTION),
            (PodPlanError("boom"), ErrorCategory.INTERNAL),
        ],
    )
    def test_default_categories(self, error, category):
        assert error.category == category
        assert isinstance(error, PodPlanError)

    def test_subclass_relationships(self):
        assert issubclass(InvalidPlanSpecError, ValidationError)
        assert issubclass(ElementNotFoundError, PlanError)
        assert issubclass(TaskIdError, TaskError)
        assert issubclass(GoalStateResolutionError, TaskError)

    def test_explicit_category_wins(self):
        assert PodPlanError("x", category=ErrorCategory.CONFIG).category == ErrorCategory.CONFIG

    def test_invalid_plan_spec_field(self):
        error = InvalidPlanSpecError("bad name", field="name")
        assert error.field == "name"
        assert str(error) == "bad name"


class TestErrorContext:
    def test_with_context_known_and_extra_fields(self):
        error = PodPlanError("boom").with_context(step="hello-0", attempt=2)
        assert error.context.step == "hello-0"
        assert error.context.metadata == {"attempt": 2}

    def test_context_to_dict_skips_unset(self):
        assert ErrorContext(plan="deploy", metadata={"k": "v"}).to_dict() == {"plan": "deploy", "k": "v"}


class TestSerialization:
    def test_to_dict(self):
        cause = KeyError("server")
        error = GoalStateResolutionError("hello-0", "hello-0-db")
        error.cause = cause
        data = error.to_dict()

        assert data["error_type"] == "GoalStateResolutionError"
        assert data["category"] == "RESOLUTION"
        assert data["context"] == {"pod_instance": "hello-0", "task_name": "hello-0-db"}
        assert data["cause"] == "KeyError: 'server'"

    def test_cause_chained(self):
        cause = ValueError("inner")
        error = PodPlanError("outer", cause=cause)
        assert error.__cause__ is cause

    def test_repr(self):
        assert repr(ConfigError("missing")) == "ConfigError('missing', category=CONFIG)"

    def test_element_not_found_message(self):
        assert str(ElementNotFoundError("phase", "world", parent="deploy")) == "Phase not found in 'deploy': world"
        assert str(ElementNotFoundError("step", "x")) == "Step not found: x"


class TestCategorize:
    def test_categorize(self):
        assert categorize_error(TaskIdError("x", "bad")) == ErrorCategory.RESOLUTION
        assert categorize_error(ValueError("v")) == ErrorCategory.VALIDATION
        assert categorize_error(RuntimeError("r")) == ErrorCategory.UNKNOWN
