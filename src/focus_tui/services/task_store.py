"""JSON-file backed task store.

Every mutation serializes and writes the *new* list first and only then
updates the in-memory list, so a failed save leaves memory exactly as it was
and the on-screen tasks never drift from what is on disk.
"""

from __future__ import annotations

from pathlib import Path
from uuid import UUID

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from focus_tui.models.exceptions import (
    TaskLoadIOError,
    TaskLoadParseError,
    TaskSerializationError,
    TaskWriteError,
)
from focus_tui.models.task import Task, TaskStatus
from focus_tui.utils.logger import get_logger

_TASK_LIST = TypeAdapter(list[Task])


class TaskStore:
    """Persisted, insertion-ordered list of tasks."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Read-only snapshot of the in-memory list."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def index_of(self, task_uuid: UUID) -> int | None:
        for idx, task in enumerate(self._tasks):
            if task.uuid == task_uuid:
                return idx
        return None

    def load(self) -> list[Task]:
        """Load tasks from disk, replacing the in-memory list.

        A missing file is not an error and yields an empty list.

        Raises:
            TaskLoadIOError: The file exists but cannot be read.
            TaskLoadParseError: The file is not a valid JSON task array, or two
                tasks share a uuid.
        """
        try:
            content = self.path.read_bytes()
        except FileNotFoundError:
            get_logger("task_store").debug("No task file at %s", self.path)
            self._tasks = []
            return []
        except OSError as e:
            raise TaskLoadIOError(self.path, e) from e

        try:
            tasks = _TASK_LIST.validate_json(content)
        except ValidationError as e:
            raise TaskLoadParseError(self.path, e) from e

        seen: set[UUID] = set()
        for task in tasks:
            if task.uuid in seen:
                raise TaskLoadParseError(
                    self.path, ValueError(f"duplicate task uuid {task.uuid}")
                )
            seen.add(task.uuid)

        self._tasks = tasks
        get_logger("task_store").info("Loaded %d tasks from %s", len(tasks), self.path)
        return list(tasks)

    def save(self, tasks: list[Task]) -> None:
        """Overwrite the task file with *tasks*.

        Raises:
            TaskSerializationError: The tasks cannot be dumped to JSON.
            TaskWriteError: The file cannot be written.
        """
        try:
            payload = _TASK_LIST.dump_json(tasks, indent=2)
        except PydanticSerializationError as e:
            raise TaskSerializationError(self.path, e) from e

        try:
            self.path.write_bytes(payload)
        except OSError as e:
            raise TaskWriteError(self.path, e) from e

    def add(self, task: Task) -> int:
        """Persist *task* at the end of the list and return its index."""
        if self.index_of(task.uuid) is not None:
            raise ValueError(f"Task {task.uuid} already exists")

        new_tasks = [*self._tasks, task]
        self.save(new_tasks)

        self._tasks = new_tasks
        return len(self._tasks) - 1

    def delete(self, task_uuid: UUID) -> None:
        """Remove the task with *task_uuid*; unknown ids leave the list unchanged."""
        new_tasks = [task for task in self._tasks if task.uuid != task_uuid]
        self.save(new_tasks)

        self._tasks = new_tasks

    def edit(self, task_uuid: UUID, title: str, status: TaskStatus) -> None:
        """Replace the title and status of the task with *task_uuid*."""
        idx = self.index_of(task_uuid)
        if idx is None:
            return

        new_tasks = list(self._tasks)
        new_tasks[idx] = self._tasks[idx].model_copy(
            update={"title": title, "status": status}
        )
        self.save(new_tasks)

        self._tasks = new_tasks
