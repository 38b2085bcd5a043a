"""Configuration models for Focus TUI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from focus_tui.utils.constants import (
    DEFAULT_BREAK_DURATION_MINUTES,
    DEFAULT_WORK_DURATION_MINUTES,
    MAX_DURATION_MINUTES,
)

ThemeName = Literal["mocha", "latte"]


class TimerConfig(BaseModel):
    """Initial durations offered on the welcome screen."""

    work_minutes: int = Field(
        default=DEFAULT_WORK_DURATION_MINUTES, ge=1, le=MAX_DURATION_MINUTES
    )
    break_minutes: int = Field(
        default=DEFAULT_BREAK_DURATION_MINUTES, ge=1, le=MAX_DURATION_MINUTES
    )


class StorageConfig(BaseModel):
    """Task storage configuration."""

    tasks_file: str | None = Field(
        default=None, description="Task file path; None uses the data dir"
    )


class UIConfig(BaseModel):
    """UI configuration."""

    theme: ThemeName = Field(default="mocha")
    tick_ms: int = Field(default=50, ge=10, le=1000)
    notifications: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Focus TUI configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
