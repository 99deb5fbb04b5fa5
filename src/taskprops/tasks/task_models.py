# src/taskprops/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class ProjectNotFoundError(LookupError):
    def __init__(self, project_id: int) -> None:
        super().__init__(f"project {project_id} not found")
        self.project_id = project_id


class SubtaskStatus(IntEnum):
    TODO = 0
    IN_PROGRESS = 1
    DONE = 2


@dataclass(slots=True)
class Project:
    id: int
    name: str
    priority_start: int
    priority_end: int
    priority_default: int


@dataclass(slots=True)
class Task:
    """
    Mutable task record.

    Commands found at the end of `description` write into the optional
    fields below; timestamps are POSIX seconds, like the store keeps them.
    """

    id: int
    project_id: int
    title: str
    description: str

    date_due: float | None = None
    date_started: float | None = None
    priority: int | None = None
    color_id: str | None = None

    creator_id: int | None = None
    created_at: float = 0.0
    updated_at: float = 0.0


@dataclass(slots=True, frozen=True)
class PendingSubtask:
    """A subtask creation request buffered until the scan has finished."""

    title: str
    task_id: int
    user_id: int | None


@dataclass(slots=True)
class Subtask:
    id: int
    task_id: int
    title: str
    user_id: int | None
    position: int
    status: SubtaskStatus
    created_at: float
