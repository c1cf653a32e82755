"""
Shared pytest fixtures and configuration for podplan tests.

This module provides:
- Settings cache cleanup for test isolation
- Sample pod specifications and deployment steps
- Structured log capture

Plan-building helpers live in ``factories.py`` next to this file.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

# Ensure podplan and the test helpers are importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from podplan.core.config import clear_settings_cache
from podplan.offer.pod import GoalState, PodInstance, PodSpec, TaskSpec


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; reset around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def captured_logs() -> Generator[list[dict], None, None]:
    """Structured log records emitted during the test."""
    with structlog.testing.capture_logs() as logs:
        yield logs


# =============================================================================
# Pod Fixtures
# =============================================================================


@pytest.fixture
def hello_pod() -> PodSpec:
    """Long-running pod with two tasks, one of them readiness-checked."""
    return PodSpec(
        type="hello",
        tasks=(
            TaskSpec(name="server", goal=GoalState.RUNNING, readiness_check=True),
            TaskSpec(name="sidecar", goal=GoalState.RUNNING),
        ),
    )


@pytest.fixture
def init_pod() -> PodSpec:
    """Run-to-completion pod."""
    return PodSpec(type="init", tasks=(TaskSpec(name="bootstrap", goal=GoalState.FINISHED),))


@pytest.fixture
def hello_instance(hello_pod: PodSpec) -> PodInstance:
    return PodInstance(pod=hello_pod, index=0)
