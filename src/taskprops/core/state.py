# src/taskprops/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.colors import ColorCatalog
from ..tasks.task_store import TaskStore


@dataclass(slots=True, frozen=True)
class StaticSession:
    """Session identity fixed for the lifetime of the process."""

    user_id: int | None

    def current_user_id(self) -> int | None:
        return self.user_id


@dataclass
class AppState:
    # Settings (or a SimpleNamespace in tests) kept here for easy access.
    settings: Any

    task_store: TaskStore
    colors: ColorCatalog
    session: StaticSession
