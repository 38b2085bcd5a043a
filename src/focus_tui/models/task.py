"""Task data models."""

from __future__ import annotations

from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict


class TaskStatus(str, Enum):
    """Cyclic task status: Todo -> Ongoing -> Done -> Todo."""

    TODO = "Todo"
    ONGOING = "Ongoing"
    DONE = "Done"

    def next(self) -> "TaskStatus":
        members = list(TaskStatus)
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> "TaskStatus":
        members = list(TaskStatus)
        return members[(members.index(self) - 1) % len(members)]

    def __str__(self) -> str:
        return self.value


class Task(BaseModel):
    """Task model.

    Serialized as ``{"uuid": ..., "title": ..., "status": ...}``.
    """

    model_config = ConfigDict(frozen=True)

    uuid: UUID
    title: str
    status: TaskStatus

    @classmethod
    def create(cls, title: str, status: TaskStatus = TaskStatus.TODO) -> "Task":
        """Create a task with a fresh UUID v4."""
        return cls(uuid=uuid4(), title=title, status=status)
