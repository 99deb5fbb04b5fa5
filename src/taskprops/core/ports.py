# src/taskprops/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The parser and the extractor depend on Protocols instead of concrete
implementations. TaskStore satisfies the storage ports, ColorCatalog the color
port; tests pass in-memory fakes.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import PendingSubtask, Project, Task


class TaskRepo(Protocol):
    def get_task_by_id(self, task_id: int) -> Task: ...
    def update_task(self, task: Task) -> None: ...


class TagRepo(Protocol):
    def get_task_tags(self, task_id: int) -> list[str]: ...
    def save_task_tags(self, project_id: int, task_id: int, tags: Iterable[str]) -> None: ...


class SubtaskRepo(Protocol):
    def create_subtask(self, subtask: PendingSubtask) -> int: ...


class ProjectRepo(Protocol):
    def get_project(self, project_id: int) -> Project: ...


class ColorResolver(Protocol):
    """Returns a color id, or "" when the name/id is unknown."""
    def find(self, value: str) -> str: ...


class SessionIdentity(Protocol):
    def current_user_id(self) -> int | None: ...


class FallbackDateResolver(Protocol):
    """General-purpose free text date parser used when no shortcut matches."""
    def resolve(self, text: str, now: datetime) -> datetime | None: ...
    def start_of_day(self, dt: datetime) -> datetime: ...
