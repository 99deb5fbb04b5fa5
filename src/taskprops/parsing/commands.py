# src/taskprops/parsing/commands.py

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

from ..core.ports import ColorResolver, ProjectRepo, TagRepo
from ..tasks.task_models import PendingSubtask, Task
from .dates import DateResolver

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "\\"

INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(slots=True, frozen=True)
class AddTags:
    tags: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class AddSubtask:
    title: str


@dataclass(slots=True, frozen=True)
class SetDueDate:
    when: str


@dataclass(slots=True, frozen=True)
class SetStartDate:
    when: str


@dataclass(slots=True, frozen=True)
class SetPriority:
    value: str


@dataclass(slots=True, frozen=True)
class SetColor:
    color: str


Command = AddTags | AddSubtask | SetDueDate | SetStartDate | SetPriority | SetColor


def _tags(parameter: str) -> Command | None:
    return AddTags(tuple(parameter.split(" "))) if parameter else None


def _subtask(parameter: str) -> Command | None:
    return AddSubtask(parameter) if parameter.strip() else None


def _due(parameter: str) -> Command | None:
    return SetDueDate(parameter) if parameter else None


def _start(parameter: str) -> Command | None:
    return SetStartDate(parameter or "now")


def _priority(parameter: str) -> Command | None:
    return SetPriority(parameter) if parameter else None


def _color(parameter: str) -> Command | None:
    return SetColor(parameter) if parameter else None


# Keywords are case-sensitive.
KEYWORDS = {
    "t": _tags,
    "tag": _tags,
    "tags": _tags,
    "s": _subtask,
    "st": _subtask,
    "sub": _subtask,
    "d": _due,
    "due": _due,
    "start": _start,
    "p": _priority,
    "prio": _priority,
    "c": _color,
    "col": _color,
    "color": _color,
}


def split_command(line: str, prefix: str = DEFAULT_PREFIX) -> tuple[str, str] | None:
    """
    Split `<prefix><keyword>[ <parameter>]` into (keyword, parameter).

    Returns None when the line is not shaped like a command. The parameter is
    everything after the first space and may be empty.
    """
    if len(line) < 2 or line[0] != prefix:
        return None
    space = line.find(" ", 1)
    if space == -1:
        return line[1:], ""
    return line[1:space], line[space + 1 :]


def parse_command(line: str, prefix: str = DEFAULT_PREFIX) -> Command | None:
    """
    Turn a single line into a Command.

    Returns None for non-command lines, unknown keywords and missing
    mandatory parameters. `\\start` alone means "start now".
    """
    parts = split_command(line, prefix)
    if parts is None:
        return None
    keyword, parameter = parts
    build = KEYWORDS.get(keyword)
    if build is None:
        return None
    return build(parameter)


@dataclass(slots=True)
class ExtractionContext:
    """
    State shared by all lines of one extraction run.

    `now` is captured once so every date command of the run sees the same instant.
    """

    task: Task
    now: datetime
    user_id: int | None
    pending_subtasks: list[PendingSubtask] = field(default_factory=list)


class CommandDispatcher:
    """Applies parsed commands to the task held by an ExtractionContext."""

    def __init__(
        self,
        *,
        tags: TagRepo,
        projects: ProjectRepo,
        colors: ColorResolver,
        dates: DateResolver,
        prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._tags = tags
        self._projects = projects
        self._colors = colors
        self._dates = dates
        self._prefix = prefix

    def dispatch(self, line: str, ctx: ExtractionContext) -> bool:
        command = parse_command(line, self._prefix)
        if command is None:
            logger.debug("Not a command: %r", line)
            return False
        ok = self.apply(command, ctx)
        logger.debug("Command %r %s", command, "applied" if ok else "rejected")
        return ok

    def apply(self, command: Command, ctx: ExtractionContext) -> bool:
        task = ctx.task
        match command:
            case AddTags(tags=tags):
                existing = self._tags.get_task_tags(task.id)
                self._tags.save_task_tags(task.project_id, task.id, [*tags, *existing])
                return True

            case AddSubtask(title=title):
                # Created after the scan; lines are visited bottom-up.
                ctx.pending_subtasks.append(
                    PendingSubtask(title=title, task_id=task.id, user_id=ctx.user_id)
                )
                return True

            case SetDueDate(when=when):
                ts = self._resolve_timestamp(when, ctx.now)
                if ts is None:
                    return False
                task.date_due = ts
                return True

            case SetStartDate(when=when):
                ts = self._resolve_timestamp(when, ctx.now)
                if ts is None:
                    return False
                task.date_started = ts
                return True

            case SetPriority(value=value):
                if not INTEGER_RE.fullmatch(value):
                    return False
                try:
                    priority = int(value)
                except ValueError:
                    # Longer than the interpreter's int conversion limit.
                    return False
                project = self._projects.get_project(task.project_id)
                if priority < project.priority_start or priority > project.priority_end:
                    return False
                task.priority = priority
                return True

            case SetColor(color=color):
                color_id = self._colors.find(color)
                if not color_id:
                    return False
                task.color_id = color_id
                return True

        return False

    def _resolve_timestamp(self, when: str, now: datetime) -> float | None:
        resolved = self._dates.resolve(when, now)
        if resolved is None:
            return None
        try:
            return resolved.timestamp()
        except (OverflowError, OSError, ValueError):
            logger.debug("Date %r is outside the storable range", when)
            return None
