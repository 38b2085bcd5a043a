"""Modal popups drawn over the active screen.

The controller has a single popup slot. Opening a popup from inside another
one (for instance the add-task form from the task list) replaces the current
popup instead of stacking on top of it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from focus_tui.models.task import Task, TaskStatus

from .intents import AddTask, ClosePopup, DeleteTask, Intent, OpenPopup
from .keyboard import Key, is_char
from .theme import Theme

if TYPE_CHECKING:
    from focus_tui.services.task_store import TaskStore

POPUP_WIDTH = 60

STATUS_MARKERS = {
    TaskStatus.TODO: "○",
    TaskStatus.ONGOING: "◐",
    TaskStatus.DONE: "●",
}

TOGGLE_TASKS_KEY = "t"


class Popup(ABC):
    """A modal overlay that owns input while it is open."""

    @property
    def captures_text(self) -> bool:
        """True while a text field inside the popup has focus."""
        return False

    @abstractmethod
    def render(self, theme: Theme) -> RenderableType:
        """Build the overlay."""

    @abstractmethod
    def handle_input(self, key: str) -> Intent | None:
        """React to one key and optionally return an intent."""


class PopupFactory:
    """Builds popups from a read-only view of the task store."""

    def __init__(self, store: TaskStore):
        self._store = store

    def task_list(self, selected_idx: int | None = 0) -> TaskListPopup:
        return TaskListPopup(self, self._store.tasks, selected_idx)

    def add_task(self, return_idx: int | None = None) -> AddTaskPopup:
        return AddTaskPopup(self, return_idx)

    def error(self, message: str) -> ErrorPopup:
        return ErrorPopup(message)


def clamp_selection(selected_idx: int | None, length: int) -> int | None:
    """Keep a list selection valid: None when empty, else in ``[0, length-1]``."""
    if length == 0:
        return None
    if selected_idx is None:
        return 0
    return max(0, min(selected_idx, length - 1))


class TaskListPopup(Popup):
    """Browse and delete tasks."""

    def __init__(
        self,
        factory: PopupFactory,
        tasks: Sequence[Task],
        selected_idx: int | None = 0,
    ):
        self.factory = factory
        self.tasks = tuple(tasks)
        self.selected_idx = clamp_selection(selected_idx, len(self.tasks))

    @property
    def selected_task(self) -> Task | None:
        if self.selected_idx is None:
            return None
        return self.tasks[self.selected_idx]

    def select_previous(self) -> None:
        if self.selected_idx is not None:
            self.selected_idx = max(0, self.selected_idx - 1)

    def select_next(self) -> None:
        if self.selected_idx is not None:
            self.selected_idx = min(self.selected_idx + 1, len(self.tasks) - 1)

    def handle_input(self, key: str) -> Intent | None:
        if key == Key.UP:
            self.select_previous()
        elif key == Key.DOWN:
            self.select_next()
        elif key == "d":
            task = self.selected_task
            if task is not None:
                return DeleteTask(task.uuid, self.selected_idx)
        elif key == "a":
            return OpenPopup(self.factory.add_task(self.selected_idx))
        elif key in (Key.ESCAPE, TOGGLE_TASKS_KEY):
            return ClosePopup()
        return None

    def render(self, theme: Theme) -> RenderableType:
        if not self.tasks:
            content: RenderableType = Text(
                "No tasks yet. Press 'a' to add one.",
                style=f"dim {theme.text}",
                justify="center",
            )
        else:
            table = Table.grid(padding=(0, 1), expand=True)
            table.add_column(width=2)
            table.add_column(ratio=1)
            table.add_column(justify="right")
            for idx, task in enumerate(self.tasks):
                selected = idx == self.selected_idx
                style = f"bold {theme.work_accent}" if selected else theme.text
                table.add_row(
                    Text(">>" if selected else "", style=style),
                    Text(task.title or "(untitled)", style=style),
                    Text(f"{STATUS_MARKERS[task.status]} {task.status}", style=style),
                )
            content = table

        hints = Text(
            "Up/Down select, A add, D delete, Esc/T close",
            style=f"dim {theme.text}",
            justify="center",
        )
        return Panel(
            Group(content, Text(""), hints),
            title="Tasks",
            border_style=theme.border,
            style=theme.background_style,
            width=POPUP_WIDTH,
        )


class AddTaskField(str, Enum):
    TITLE = "title"
    STATUS = "status"


class AddTaskPopup(Popup):
    """Form for creating a task: a title field and a status field."""

    def __init__(self, factory: PopupFactory, return_idx: int | None = None):
        self.factory = factory
        self.return_idx = return_idx
        self.title = ""
        self.status = TaskStatus.TODO
        self.focused = AddTaskField.TITLE

    @property
    def captures_text(self) -> bool:
        return self.focused is AddTaskField.TITLE

    def _switch_field(self) -> None:
        self.focused = (
            AddTaskField.STATUS
            if self.focused is AddTaskField.TITLE
            else AddTaskField.TITLE
        )

    def handle_input(self, key: str) -> Intent | None:
        if key == Key.ENTER:
            return AddTask(Task.create(self.title, self.status))
        if key == Key.ESCAPE:
            return OpenPopup(self.factory.task_list(self.return_idx))
        if key in (Key.TAB, Key.BACKTAB, Key.LEFT, Key.RIGHT):
            self._switch_field()
            return None

        if self.focused is AddTaskField.TITLE:
            if key == Key.BACKSPACE:
                self.title = self.title[:-1]
            elif is_char(key):
                self.title += key
        else:
            if key == Key.UP:
                self.status = self.status.previous()
            elif key == Key.DOWN:
                self.status = self.status.next()
        return None

    def render(self, theme: Theme) -> RenderableType:
        def label(name: str, field: AddTaskField) -> Text:
            focused = self.focused is field
            style = f"bold {theme.work_accent}" if focused else theme.text
            return Text(f"{'>' if focused else ' '} {name}: ", style=style)

        title_line = label("Title", AddTaskField.TITLE)
        title_line.append(self.title, style=theme.text)
        if self.focused is AddTaskField.TITLE:
            title_line.append("_", style=f"blink {theme.text}")

        status_line = label("Status", AddTaskField.STATUS)
        status_line.append(
            f"{STATUS_MARKERS[self.status]} {self.status}", style=theme.text
        )

        hints = Text(
            "Tab switch field, Up/Down change status, Enter save, Esc back",
            style=f"dim {theme.text}",
            justify="center",
        )
        return Panel(
            Group(title_line, status_line, Text(""), hints),
            title="New task",
            border_style=theme.border,
            style=theme.background_style,
            width=POPUP_WIDTH,
        )


class ErrorPopup(Popup):
    """Shows a user-facing error until dismissed with Escape."""

    def __init__(self, message: str):
        self.message = message

    def handle_input(self, key: str) -> Intent | None:
        if key == Key.ESCAPE:
            return ClosePopup()
        return None

    def render(self, theme: Theme) -> RenderableType:
        return Panel(
            Group(
                Text(self.message, style=theme.error_text_style, justify="center"),
                Text(""),
                Text("Esc to dismiss", style=f"dim {theme.text}", justify="center"),
            ),
            title="Error",
            border_style=theme.error,
            style=theme.background_style,
            width=POPUP_WIDTH,
        )
