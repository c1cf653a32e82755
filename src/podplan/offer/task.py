"""Launched tasks and the status reports the cluster sends about them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum

from podplan.core.errors import TaskIdError

TASK_ID_SEPARATOR = "__"


class TaskState(str, Enum):
    """Task states reported by the cluster resource manager."""

    STAGING = "TASK_STAGING"
    STARTING = "TASK_STARTING"
    RUNNING = "TASK_RUNNING"
    KILLING = "TASK_KILLING"
    FINISHED = "TASK_FINISHED"
    FAILED = "TASK_FAILED"
    KILLED = "TASK_KILLED"
    ERROR = "TASK_ERROR"
    LOST = "TASK_LOST"
    # Partition-aware states; plan steps treat these as anomalies
    DROPPED = "TASK_DROPPED"
    UNREACHABLE = "TASK_UNREACHABLE"
    GONE = "TASK_GONE"
    GONE_BY_OPERATOR = "TASK_GONE_BY_OPERATOR"
    UNKNOWN = "TASK_UNKNOWN"


@dataclass(frozen=True)
class TaskInfo:
    """
    A task as it was launched.

    Attributes:
        name: Full task name (``<pod>-<index>-<task>``)
        task_id: Identifier assigned at launch time; empty when not yet assigned
        readiness_check: Whether the task carries a readiness check
    """

    name: str
    task_id: str = ""
    readiness_check: bool = False


@dataclass(frozen=True)
class TaskStatus:
    """A status report for one task."""

    task_id: str
    state: TaskState
    message: str = ""
    readiness_check_passed: bool = False

    def short(self) -> str:
        """Compact form for log records."""
        return f"{self.task_id}:{self.state.value}"


def new_task_id(task_name: str) -> str:
    """Generate a fresh task id for ``task_name``."""
    return f"{task_name}{TASK_ID_SEPARATOR}{uuid.uuid4()}"


def task_name_from_id(task_id: str) -> str:
    """Extract the task name from a task id.

    Raises:
        TaskIdError: If the id does not have the ``<name>__<uuid>`` shape.
    """
    name, sep, suffix = task_id.rpartition(TASK_ID_SEPARATOR)
    if not sep or not name or not suffix:
        raise TaskIdError(task_id, f"expected '<name>{TASK_ID_SEPARATOR}<uuid>'")
    return name


def is_readiness_check_succeeded(task_info: TaskInfo, status: TaskStatus) -> bool:
    """A task without a readiness check is ready as soon as it runs."""
    if not task_info.readiness_check:
        return True
    return status.readiness_check_passed
