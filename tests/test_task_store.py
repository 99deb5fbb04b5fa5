# tests/test_task_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskprops.tasks.task_models import (
    PendingSubtask,
    ProjectNotFoundError,
    SubtaskStatus,
    TaskNotFoundError,
)
from taskprops.tasks.task_store import TaskStore


def test_project_add_and_get(store: TaskStore) -> None:
    pid = store.add_project("Inbox", priority_start=1, priority_end=5, priority_default=2)
    project = store.get_project(pid)
    assert project.name == "Inbox"
    assert (project.priority_start, project.priority_end, project.priority_default) == (1, 5, 2)

    with pytest.raises(ProjectNotFoundError):
        store.get_project(pid + 100)


def test_project_bounds_validated(store: TaskStore) -> None:
    with pytest.raises(ValueError):
        store.add_project("Bad", priority_start=3, priority_end=1)
    with pytest.raises(ValueError):
        store.add_project("Bad", priority_start=0, priority_end=3, priority_default=4)
    with pytest.raises(ValueError):
        store.add_project("   ")


def test_task_roundtrip_and_update(store: TaskStore) -> None:
    pid = store.add_project("Inbox", priority_start=0, priority_end=3, priority_default=1)
    task_id = store.add_task(project_id=pid, title="  Write report ", description="Body", creator_id=7)

    task = store.get_task_by_id(task_id)
    assert task.title == "Write report"
    assert task.priority == 1
    assert task.creator_id == 7
    assert task.date_due is None
    assert store.count_tasks() == 1

    task.description = "Shorter"
    task.date_due = 1_800_000_000.0
    task.date_started = 1_700_000_000.5
    task.priority = 3
    task.color_id = "red"
    store.update_task(task)

    again = store.get_task_by_id(task_id)
    assert again.description == "Shorter"
    assert again.date_due == 1_800_000_000.0
    assert again.date_started == 1_700_000_000.5
    assert again.priority == 3
    assert again.color_id == "red"


def test_task_errors(store: TaskStore) -> None:
    with pytest.raises(TaskNotFoundError):
        store.get_task_by_id(1)
    with pytest.raises(ProjectNotFoundError):
        store.add_task(project_id=99, title="x")
    pid = store.add_project("Inbox")
    with pytest.raises(ValueError):
        store.add_task(project_id=pid, title=" ")


def test_update_missing_task_raises(store: TaskStore) -> None:
    pid = store.add_project("Inbox")
    task = store.get_task_by_id(store.add_task(project_id=pid, title="x"))
    task.id = 999
    with pytest.raises(TaskNotFoundError):
        store.update_task(task)


def test_save_tags_replaces_and_dedupes(store: TaskStore) -> None:
    pid = store.add_project("Inbox")
    task_id = store.add_task(project_id=pid, title="x")

    store.save_task_tags(pid, task_id, ["urgent", "", "Home", "URGENT", " home "])
    assert store.get_task_tags(task_id) == ["Home", "urgent"]

    store.save_task_tags(pid, task_id, ["work"])
    assert store.get_task_tags(task_id) == ["work"]

    store.save_task_tags(pid, task_id, ["Work", *store.get_task_tags(task_id), "later"])
    assert store.get_task_tags(task_id) == ["later", "work"]


def test_tags_are_scoped_per_project(store: TaskStore) -> None:
    p1 = store.add_project("One")
    p2 = store.add_project("Two")
    t1 = store.add_task(project_id=p1, title="a")
    t2 = store.add_task(project_id=p2, title="b")

    store.save_task_tags(p1, t1, ["shared"])
    store.save_task_tags(p2, t2, ["shared", "own"])

    assert store.get_task_tags(t1) == ["shared"]
    assert store.get_task_tags(t2) == ["own", "shared"]


def test_subtasks_appended_in_order(store: TaskStore) -> None:
    pid = store.add_project("Inbox")
    task_id = store.add_task(project_id=pid, title="x")

    store.create_subtask(PendingSubtask(title="first", task_id=task_id, user_id=7))
    store.create_subtask(PendingSubtask(title="second", task_id=task_id, user_id=None))

    subs = store.list_subtasks(task_id)
    assert [(s.position, s.title, s.user_id) for s in subs] == [(1, "first", 7), (2, "second", None)]
    assert all(s.status is SubtaskStatus.TODO for s in subs)

    with pytest.raises(ValueError):
        store.create_subtask(PendingSubtask(title="  ", task_id=task_id, user_id=7))


def test_schema_is_reopenable(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "tasks.sqlite3"
    first = TaskStore(db)
    pid = first.add_project("Inbox")
    first.add_task(project_id=pid, title="x")

    second = TaskStore(db)
    assert second.count_tasks() == 1
