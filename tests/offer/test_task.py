"""Tests for podplan.offer.task — task ids and readiness."""

from __future__ import annotations

import pytest

from podplan.core.errors import TaskIdError
from podplan.offer.task import (
    TaskInfo,
    TaskState,
    TaskStatus,
    is_readiness_check_succeeded,
    new_task_id,
    task_name_from_id,
)


class TestTaskIds:
    def test_new_ids_are_unique(self):
        assert new_task_id("hello-0-server") != new_task_id("hello-0-server")

    def test_name_round_trips(self):
        assert task_name_from_id(new_task_id("hello-0-server")) == "hello-0-server"

    def test_name_with_separator_inside(self):
        assert task_name_from_id("odd__name__abc") == "odd__name"

    @pytest.mark.parametrize("task_id", ["", "plain", "__abc", "name__"])
    def test_malformed_ids(self, task_id):
        with pytest.raises(TaskIdError) as exc_info:
            task_name_from_id(task_id)
        assert exc_info.value.context.task_id == task_id


class TestReadiness:
    def test_no_check_is_always_ready(self):
        info = TaskInfo(name="t", task_id="t__1")
        assert is_readiness_check_succeeded(info, TaskStatus("t__1", TaskState.RUNNING))

    def test_check_requires_pass(self):
        info = TaskInfo(name="t", task_id="t__1", readiness_check=True)
        assert not is_readiness_check_succeeded(info, TaskStatus("t__1", TaskState.RUNNING))
        assert is_readiness_check_succeeded(
            info, TaskStatus("t__1", TaskState.RUNNING, readiness_check_passed=True)
        )


def test_status_short_form():
    assert TaskStatus("t__1", TaskState.LOST).short() == "t__1:TASK_LOST"
