"""Focus TUI - a terminal focus timer with a small task list."""

__version__ = "0.1.0"
