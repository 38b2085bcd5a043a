"""Intents: what the controller must do in response to one input event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union
from uuid import UUID

from focus_tui.models.task import Task

if TYPE_CHECKING:
    from .popups import Popup


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class SetDurations:
    work_minutes: int
    break_minutes: int


@dataclass(frozen=True)
class AddTask:
    task: Task


@dataclass(frozen=True)
class DeleteTask:
    task_uuid: UUID
    selected_idx: int | None = None


@dataclass(frozen=True)
class OpenPopup:
    popup: "Popup"


@dataclass(frozen=True)
class ClosePopup:
    pass


Intent = Union[Quit, SetDurations, AddTask, DeleteTask, OpenPopup, ClosePopup]
