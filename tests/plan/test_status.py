"""Tests for podplan.plan.status — weakest-link aggregation."""

from __future__ import annotations

import pytest

from podplan.plan.status import Status, aggregate_statuses


class TestStatus:
    def test_declared_most_severe_first(self):
        assert [s.value for s in Status] == ["ERROR", "PENDING", "PREPARED", "STARTING", "COMPLETE"]

    def test_str_is_value(self):
        assert str(Status.STARTING) == "STARTING"


class TestAggregate:
    @pytest.mark.parametrize(
        "statuses, expected",
        [
            ([Status.ERROR, Status.COMPLETE], Status.ERROR),
            ([Status.ERROR, Status.PENDING], Status.ERROR),
            ([Status.PENDING, Status.STARTING, Status.STARTING], Status.PENDING),
            ([Status.PENDING, Status.COMPLETE], Status.PENDING),
            ([Status.PREPARED, Status.STARTING], Status.PREPARED),
            ([Status.STARTING, Status.STARTING, Status.COMPLETE], Status.STARTING),
            ([Status.COMPLETE, Status.COMPLETE, Status.COMPLETE], Status.COMPLETE),
            ([Status.COMPLETE], Status.COMPLETE),
        ],
    )
    def test_weakest_link(self, statuses, expected):
        assert aggregate_statuses(statuses, previous=Status.PENDING) == expected

    def test_previous_ignored_when_rule_matches(self):
        assert aggregate_statuses([Status.STARTING], previous=Status.ERROR) == Status.STARTING

    def test_accepts_generators(self):
        assert aggregate_statuses((s for s in [Status.COMPLETE, Status.PREPARED]), Status.PENDING) == Status.PREPARED

    def test_unrecognized_mixture_keeps_previous(self, captured_logs):
        # A status value outside the known set (e.g. from a newer peer)
        result = aggregate_statuses(["WAITING", Status.COMPLETE], previous=Status.STARTING)
        assert result == Status.STARTING
        warnings = [log for log in captured_logs if log["event"] == "status_aggregation_unhandled"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["fallback"] == "STARTING"
