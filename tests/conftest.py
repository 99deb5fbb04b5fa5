# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskprops.core.state import AppState, StaticSession
from taskprops.tasks.colors import ColorCatalog
from taskprops.tasks.task_models import Project, Task
from taskprops.tasks.task_store import TaskStore

from .fakes import (
    FakeProjectRepo,
    FakeSession,
    FakeSubtaskRepo,
    FakeTagRepo,
    FixedClock,
)

# A Monday.
NOW = datetime(2026, 10, 19, 14, 30, 15, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskprops",
        log_level="WARNING",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        user_id=7,
        command_prefix="\\",
        timezone="UTC",
        tzinfo=UTC,
        default_priority_start=0,
        default_priority_end=3,
        default_priority=0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with a real SQLite store in tmp_path."""
    return AppState(
        settings=settings,
        task_store=store,
        colors=ColorCatalog(),
        session=StaticSession(settings.user_id),
    )


@pytest.fixture()
def project() -> Project:
    return Project(id=3, name="Inbox", priority_start=1, priority_end=5, priority_default=1)


@pytest.fixture()
def make_task():
    def _make(description: str, **kwargs) -> Task:
        fields = {"id": 10, "project_id": 3, "title": "Task", "description": description}
        fields.update(kwargs)
        return Task(**fields)

    return _make


@pytest.fixture()
def tag_repo() -> FakeTagRepo:
    return FakeTagRepo()


@pytest.fixture()
def subtask_repo() -> FakeSubtaskRepo:
    return FakeSubtaskRepo()


@pytest.fixture()
def project_repo(project: Project) -> FakeProjectRepo:
    return FakeProjectRepo([project])


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession(user_id=42)
