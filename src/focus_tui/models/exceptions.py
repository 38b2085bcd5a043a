"""Custom exceptions for Focus TUI."""

from __future__ import annotations

import errno
from pathlib import Path
from typing import Literal

WriteErrorReason = Literal["permission_denied", "missing_directory", "io"]


class FocusTuiError(Exception):
    """Base exception for all Focus TUI errors."""


class TaskLoadError(FocusTuiError):
    """Raised when the task file exists but cannot be turned into tasks."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"Failed to load tasks from '{self.path}': {self.cause}"


class TaskLoadIOError(TaskLoadError):
    """Raised when the task file cannot be read."""

    def _describe(self) -> str:
        return (
            f"An I/O error occurred while reading the file at {self.path}: "
            f"{self.cause}"
        )


class TaskLoadParseError(TaskLoadError):
    """Raised when the task file holds malformed JSON or invalid tasks."""

    def _describe(self) -> str:
        return f"JSON parsing error in task file at {self.path}: {self.cause}"


class TaskSaveError(FocusTuiError):
    """Raised when the task list cannot be persisted."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"Failed to save tasks to '{self.path}': {self.cause}"


class TaskSerializationError(TaskSaveError):
    """Raised when tasks cannot be converted to JSON."""

    def _describe(self) -> str:
        return (
            f"Failed to serialize tasks to JSON for file '{self.path}': "
            f"{self.cause}"
        )


class TaskWriteError(TaskSaveError):
    """Raised when the serialized task list cannot be written to disk."""

    def __init__(self, path: Path, cause: OSError):
        self.reason: WriteErrorReason = classify_write_error(cause)
        super().__init__(path, cause)

    def _describe(self) -> str:
        if self.reason == "permission_denied":
            return (
                f"Permission denied when writing to '{self.path}'. "
                "Check file permissions."
            )
        if self.reason == "missing_directory":
            return f"Cannot write to '{self.path}': parent directory does not exist"
        return f"Failed to write tasks to file '{self.path}': {self.cause}"


def classify_write_error(error: OSError) -> WriteErrorReason:
    """Map an OSError raised by a file write to a user-actionable reason."""
    if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
        return "permission_denied"
    if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
        return "missing_directory"
    return "io"
