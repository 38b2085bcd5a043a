"""Data models for Focus TUI."""

from .countdown import CountdownEngine, Phase
from .exceptions import (
    FocusTuiError,
    TaskLoadError,
    TaskLoadIOError,
    TaskLoadParseError,
    TaskSaveError,
    TaskSerializationError,
    TaskWriteError,
)
from .task import Task, TaskStatus

__all__ = [
    "CountdownEngine",
    "Phase",
    "FocusTuiError",
    "TaskLoadError",
    "TaskLoadIOError",
    "TaskLoadParseError",
    "TaskSaveError",
    "TaskSerializationError",
    "TaskWriteError",
    "Task",
    "TaskStatus",
]
