"""Tests for podplan.offer.pod."""

from __future__ import annotations

import pytest

from podplan.core.errors import GoalStateResolutionError
from podplan.offer.pod import GoalState, PodInstance, PodInstanceRequirement, PodSpec, TaskSpec, get_goal_state


class TestPodSpec:
    def test_list_tasks_become_tuple(self):
        pod = PodSpec(type="hello", tasks=[TaskSpec(name="server")])
        assert isinstance(pod.tasks, tuple)

    def test_get_task(self, hello_pod):
        assert hello_pod.get_task("server").readiness_check
        assert hello_pod.get_task("missing") is None


class TestPodInstance:
    def test_names(self, hello_instance):
        assert hello_instance.name == "hello-0"
        assert hello_instance.task_name("server") == "hello-0-server"


class TestPodInstanceRequirement:
    def test_for_pod_subset(self, hello_instance):
        requirement = PodInstanceRequirement.for_pod(hello_instance, "sidecar")
        assert requirement.tasks_to_launch == ("sidecar",)
        assert requirement.name == "hello-0"

    def test_with_environment_returns_new_requirement(self, hello_instance):
        base = PodInstanceRequirement(hello_instance, ("server",), {"A": "1"})
        merged = base.with_environment({"A": "2", "B": "3"})

        assert merged.environment == {"A": "2", "B": "3"}
        assert base.environment == {"A": "1"}
        assert merged.pod_instance is base.pod_instance
        assert merged.tasks_to_launch == base.tasks_to_launch

    def test_environment_is_copied(self, hello_instance):
        env = {"A": "1"}
        requirement = PodInstanceRequirement(hello_instance, environment=env)
        env["A"] = "changed"
        assert requirement.environment == {"A": "1"}


class TestGetGoalState:
    def test_resolves_by_full_task_name(self, hello_instance, init_pod):
        assert get_goal_state(hello_instance, "hello-0-server") == GoalState.RUNNING
        assert get_goal_state(PodInstance(init_pod, 0), "init-0-bootstrap") == GoalState.FINISHED

    def test_other_instance_does_not_match(self, hello_instance):
        with pytest.raises(GoalStateResolutionError) as exc_info:
            get_goal_state(hello_instance, "hello-1-server")
        assert exc_info.value.pod_instance == "hello-0"
        assert exc_info.value.task_name == "hello-1-server"
