"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real filesystem, the wall
clock and the desktop notification backend.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from focus_tui.services.task_store import TaskStore


# ---------------------------------------------------------------------------
# Time and notification doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNotifier:
    """Notification sink that remembers what it was asked to show."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.sent.append((title, message))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def tasks_path(tmp_path):
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(tasks_path) -> TaskStore:
    """Empty TaskStore writing into a temporary directory."""
    return TaskStore(tasks_path)


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log into tmp_path and reset it afterwards."""
    import focus_tui.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("focus_tui").handlers.clear()
    with patch(
        "focus_tui.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield
    for handler in logging.getLogger("focus_tui").handlers:
        handler.close()
    logging.getLogger("focus_tui").handlers.clear()
    logger_mod._logger = None
