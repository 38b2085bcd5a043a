"""Shared constants for Focus TUI."""

from datetime import timedelta

DEFAULT_WORK_DURATION_MINUTES = 45
DEFAULT_BREAK_DURATION_MINUTES = 10

# Largest whole-minute duration a timedelta can hold.
MAX_DURATION_MINUTES = timedelta.max // timedelta(minutes=1)

APP_NAME = "focus_tui"
TASKS_FILE_NAME = "tasks.json"
CONFIG_FILE_NAME = "config.json"
