"""
Centralized settings for podplan.

All fields can be set via ``PODPLAN_*`` environment variables (e.g.
``PODPLAN_LOG_FORMAT=json``) or a ``.env`` file in the working directory.

Quick start::

    from podplan.core.config import get_settings

    settings = get_settings()
    print(settings.default_phase_strategy)   # "serial"
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STRATEGY_NAMES = ("serial", "parallel")
LOG_FORMATS = ("console", "json")


class PodPlanSettings(BaseSettings):
    """podplan configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PODPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="console or json")
    service_name: str = Field(default="podplan")

    # ── Plan defaults ────────────────────────────────────────────
    default_plan_strategy: str = Field(
        default="serial",
        description="Strategy used between phases when a plan definition names none",
    )
    default_phase_strategy: str = Field(
        default="serial",
        description="Strategy used between steps when a phase definition names none",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unsupported log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {value!r}")
        return value

    @field_validator("default_plan_strategy", "default_phase_strategy")
    @classmethod
    def _known_strategy(cls, value: str) -> str:
        value = value.lower()
        if value not in STRATEGY_NAMES:
            raise ValueError(f"strategy must be one of {STRATEGY_NAMES}, got {value!r}")
        return value

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, PodPlanSettings] = {}


def get_settings(*, _force_reload: bool = False) -> PodPlanSettings:
    """Load, validate, and cache a :class:`PodPlanSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = PodPlanSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
