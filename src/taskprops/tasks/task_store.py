# src/taskprops/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterable
from pathlib import Path

from .task_models import (
    PendingSubtask,
    Project,
    ProjectNotFoundError,
    Subtask,
    SubtaskStatus,
    Task,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite store for projects, tasks, tags and subtasks.

    The schema is intentionally simple and migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS projects (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    priority_start INTEGER NOT NULL DEFAULT 0,
                    priority_end INTEGER NOT NULL DEFAULT 3,
                    priority_default INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    project_id INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    date_due REAL,
                    date_started REAL,
                    priority INTEGER,
                    color_id TEXT,
                    creator_id INTEGER,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tags (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    project_id INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
                    name TEXT NOT NULL COLLATE NOCASE,
                    UNIQUE(project_id, name)
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS task_has_tags (
                    task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
                    tag_id INTEGER NOT NULL REFERENCES tags(id) ON DELETE CASCADE,
                    PRIMARY KEY(task_id, tag_id)
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS subtasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
                    title TEXT NOT NULL,
                    user_id INTEGER,
                    position INTEGER NOT NULL DEFAULT 1,
                    status INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing task columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("date_due", "REAL")
            add_col("date_started", "REAL")
            add_col("priority", "INTEGER")
            add_col("color_id", "TEXT")
            add_col("creator_id", "INTEGER")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_subtasks_task ON subtasks(task_id, position)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_project(row: sqlite3.Row) -> Project:
        return Project(
            id=int(row["id"]),
            name=str(row["name"]),
            priority_start=int(row["priority_start"]),
            priority_end=int(row["priority_end"]),
            priority_default=int(row["priority_default"]),
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            project_id=int(row["project_id"]),
            title=str(row["title"]),
            description=str(row["description"] or ""),
            date_due=float(row["date_due"]) if row["date_due"] is not None else None,
            date_started=float(row["date_started"]) if row["date_started"] is not None else None,
            priority=int(row["priority"]) if row["priority"] is not None else None,
            color_id=row["color_id"],
            creator_id=int(row["creator_id"]) if row["creator_id"] is not None else None,
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    @staticmethod
    def _row_to_subtask(row: sqlite3.Row) -> Subtask:
        return Subtask(
            id=int(row["id"]),
            task_id=int(row["task_id"]),
            title=str(row["title"]),
            user_id=int(row["user_id"]) if row["user_id"] is not None else None,
            position=int(row["position"]),
            status=SubtaskStatus(int(row["status"])),
            created_at=float(row["created_at"]),
        )

    # ---- projects ----

    def add_project(
        self,
        name: str,
        *,
        priority_start: int = 0,
        priority_end: int = 3,
        priority_default: int | None = None,
    ) -> int:
        if not name or not name.strip():
            raise ValueError("name is required")
        if priority_start > priority_end:
            raise ValueError("priority_start must not exceed priority_end")
        if priority_default is None:
            priority_default = priority_start
        if not priority_start <= priority_default <= priority_end:
            raise ValueError("priority_default must lie within the priority bounds")

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO projects(name, priority_start, priority_end, priority_default)
                VALUES (?, ?, ?, ?)
                """,
                (name.strip(), int(priority_start), int(priority_end), int(priority_default)),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for projects insert")
            logger.debug("Project added id=%s name=%s", rowid, name)
            return int(rowid)
        finally:
            conn.close()

    def get_project(self, project_id: int) -> Project:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM projects WHERE id = ?", (int(project_id),))
            row = cur.fetchone()
        finally:
            conn.close()
        if row is None:
            raise ProjectNotFoundError(project_id)
        return self._row_to_project(row)

    # ---- tasks ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        project_id: int,
        title: str,
        description: str = "",
        creator_id: int | None = None,
        priority: int | None = None,
        color_id: str | None = None,
    ) -> int:
        if not title or not title.strip():
            raise ValueError("title is required")

        project = self.get_project(project_id)
        if priority is None:
            priority = project.priority_default

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(
                    project_id, title, description, priority, color_id,
                    creator_id, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    int(project_id),
                    title.strip(),
                    description,
                    int(priority),
                    color_id,
                    creator_id,
                    now,
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s project_id=%s", task_id, project_id)
            return task_id
        finally:
            conn.close()

    def get_task_by_id(self, task_id: int) -> Task:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
        finally:
            conn.close()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    def update_task(self, task: Task) -> None:
        """Write every mutable field of `task` back in a single UPDATE."""
        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                UPDATE tasks
                SET title = ?,
                    description = ?,
                    date_due = ?,
                    date_started = ?,
                    priority = ?,
                    color_id = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    task.title,
                    task.description,
                    task.date_due,
                    task.date_started,
                    task.priority,
                    task.color_id,
                    now,
                    int(task.id),
                ),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise TaskNotFoundError(task.id)
        finally:
            conn.close()
        task.updated_at = now

    # ---- tags ----

    def get_task_tags(self, task_id: int) -> list[str]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT tags.name
                FROM tags
                JOIN task_has_tags ON task_has_tags.tag_id = tags.id
                WHERE task_has_tags.task_id = ?
                ORDER BY tags.name COLLATE NOCASE ASC
                """,
                (int(task_id),),
            )
            return [str(r["name"]) for r in cur.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _clean_tag_names(names: Iterable[str]) -> list[str]:
        out: list[str] = []
        seen: set[str] = set()
        for raw in names:
            name = raw.strip()
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            out.append(name)
        return out

    def save_task_tags(self, project_id: int, task_id: int, tags: Iterable[str]) -> None:
        """
        Make the task's tag set exactly `tags`.

        Blank names are skipped and duplicates collapse case-insensitively
        (first spelling wins). Missing project tags are created on demand.
        """
        names = self._clean_tag_names(tags)

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            tag_ids: list[int] = []
            for name in names:
                cur.execute(
                    "INSERT OR IGNORE INTO tags(project_id, name) VALUES (?, ?)",
                    (int(project_id), name),
                )
                cur.execute(
                    "SELECT id FROM tags WHERE project_id = ? AND name = ?",
                    (int(project_id), name),
                )
                (tag_id,) = cur.fetchone()
                tag_ids.append(int(tag_id))

            cur.execute("DELETE FROM task_has_tags WHERE task_id = ?", (int(task_id),))
            cur.executemany(
                "INSERT OR IGNORE INTO task_has_tags(task_id, tag_id) VALUES (?, ?)",
                [(int(task_id), tag_id) for tag_id in tag_ids],
            )
            conn.commit()
            logger.debug("Tags saved task_id=%s tags=%s", task_id, names)
        finally:
            conn.close()

    # ---- subtasks ----

    def create_subtask(self, subtask: PendingSubtask) -> int:
        """Append a subtask after the task's existing ones."""
        title = subtask.title.strip()
        if not title:
            raise ValueError("title is required")
        task_id = int(subtask.task_id)
        user_id = subtask.user_id

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT COALESCE(MAX(position), 0) FROM subtasks WHERE task_id = ?",
                (task_id,),
            )
            (last_position,) = cur.fetchone()
            cur.execute(
                """
                INSERT INTO subtasks(task_id, title, user_id, position, status, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    task_id,
                    title,
                    user_id,
                    int(last_position) + 1,
                    int(SubtaskStatus.TODO),
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for subtasks insert")
            logger.debug("Subtask added id=%s task_id=%s", rowid, task_id)
            return int(rowid)
        finally:
            conn.close()

    def list_subtasks(self, task_id: int) -> list[Subtask]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM subtasks WHERE task_id = ? ORDER BY position ASC, id ASC",
                (int(task_id),),
            )
            return [self._row_to_subtask(r) for r in cur.fetchall()]
        finally:
            conn.close()
