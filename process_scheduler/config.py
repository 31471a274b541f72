"""
Runtime configuration using pydantic-settings.

Values come from environment variables prefixed with ``PROCESS_SCHEDULER_``
(e.g. ``PROCESS_SCHEDULER_LOG_LEVEL=DEBUG``), falling back to the defaults
below. The Round Robin quantum is deliberately not configurable.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── Logging ─────────────────────────────────────────────────
    LOG_LEVEL: str = "WARNING"

    # ── Rendering ───────────────────────────────────────────────
    GANTT_CELL_WIDTH: int = 8  # characters per pid cell in the plain Gantt bar

    model_config = SettingsConfigDict(env_prefix="PROCESS_SCHEDULER_")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("GANTT_CELL_WIDTH")
    @classmethod
    def _positive_width(cls, value: int) -> int:
        if value < 1:
            raise ValueError("GANTT_CELL_WIDTH must be at least 1")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
