# src/taskprops/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
- Collaborators receive settings by injection, tests pass a SimpleNamespace.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

from dateutil import tz
from dotenv import load_dotenv

ENV_PREFIX = "TASKPROPS"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def resolve_timezone(name: str | None) -> tzinfo:
    """
    Map a zone name to a tzinfo.

    Empty or unknown names fall back to the host's local zone.
    """
    if name:
        zone = tz.gettz(name)
        if zone is not None:
            return zone
    return tz.tzlocal()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- Session ----
    user_id: int

    # ---- Parsing ----
    command_prefix: str
    timezone: str

    # ---- Project defaults ----
    default_priority_start: int
    default_priority_end: int
    default_priority: int

    @property
    def tzinfo(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default="taskprops") or "taskprops"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskprops"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        user_id = _env_int(_k("USER_ID"), 1)

        # A single character; anything longer would never match line[0].
        command_prefix = (_env(_k("COMMAND_PREFIX"), "\\") or "\\")[:1]
        timezone = _env(_k("TIMEZONE"), "").strip()

        default_priority_start = _env_int(_k("PRIORITY_START"), 0)
        default_priority_end = _env_int(_k("PRIORITY_END"), 3)
        default_priority = _env_int(_k("PRIORITY_DEFAULT"), default_priority_start)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            user_id=user_id,
            command_prefix=command_prefix,
            timezone=timezone,
            default_priority_start=default_priority_start,
            default_priority_end=default_priority_end,
            default_priority=default_priority,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
