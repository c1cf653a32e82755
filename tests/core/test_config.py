"""Tests for podplan.core.config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from podplan.core.config import PodPlanSettings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run without a stray .env file and without inherited PODPLAN_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "PODPLAN_LOG_LEVEL",
        "PODPLAN_LOG_FORMAT",
        "PODPLAN_SERVICE_NAME",
        "PODPLAN_DEFAULT_PLAN_STRATEGY",
        "PODPLAN_DEFAULT_PHASE_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self):
        settings = PodPlanSettings()
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.service_name == "podplan"
        assert settings.default_plan_strategy == "serial"
        assert settings.default_phase_strategy == "serial"
        assert not settings.json_logs


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PODPLAN_LOG_LEVEL", "debug")
        monkeypatch.setenv("PODPLAN_LOG_FORMAT", "JSON")
        monkeypatch.setenv("PODPLAN_DEFAULT_PHASE_STRATEGY", "Parallel")

        settings = PodPlanSettings()
        assert settings.log_level == "DEBUG"
        assert settings.json_logs
        assert settings.default_phase_strategy == "parallel"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("PODPLAN_SERVICE_NAME=scheduler-a\n", encoding="utf-8")
        assert PodPlanSettings().service_name == "scheduler-a"

    @pytest.mark.parametrize(
        "var, value",
        [
            ("PODPLAN_LOG_LEVEL", "TRACE"),
            ("PODPLAN_LOG_FORMAT", "xml"),
            ("PODPLAN_DEFAULT_PLAN_STRATEGY", "canary"),
        ],
    )
    def test_invalid_values_rejected(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        with pytest.raises(ValidationError):
            PodPlanSettings()


class TestCaching:
    def test_cached_instance(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("PODPLAN_SERVICE_NAME", "other")
        assert get_settings() is first
        assert get_settings(_force_reload=True).service_name == "other"

    def test_clear_cache(self, monkeypatch):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
