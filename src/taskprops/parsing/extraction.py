# src/taskprops/parsing/extraction.py

from __future__ import annotations

"""
Property extraction.

Reads a task, strips the block of command lines at the end of its description,
applies each command and saves the task once. Lines that are not valid commands
simply end the block; only storage errors (including an unknown task id)
propagate to the caller.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo

from dateutil import tz

from ..core.ports import SessionIdentity, SubtaskRepo, TaskRepo
from ..tasks.task_models import PendingSubtask, Task
from .commands import CommandDispatcher, ExtractionContext
from .scanner import scan_trailing_commands

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def system_clock(zone: tzinfo | None = None) -> Clock:
    zone = zone or tz.tzlocal()

    def now() -> datetime:
        return datetime.now(zone)

    return now


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    task: Task
    # Accepted command lines, top to bottom as written.
    commands: tuple[str, ...]
    subtasks: tuple[PendingSubtask, ...]

    @property
    def changed(self) -> bool:
        return bool(self.commands)


class PropertyExtractor:
    def __init__(
        self,
        *,
        tasks: TaskRepo,
        subtasks: SubtaskRepo,
        session: SessionIdentity,
        dispatcher: CommandDispatcher,
        clock: Clock | None = None,
    ) -> None:
        self._tasks = tasks
        self._subtasks = subtasks
        self._session = session
        self._dispatcher = dispatcher
        self._clock = clock or system_clock()

    def extract(self, task_id: int) -> ExtractionResult:
        """
        Apply the trailing commands of task `task_id`'s description.

        Raises TaskNotFoundError if the task does not exist. When no line is
        accepted the task is left untouched and nothing is written.
        """
        task = self._tasks.get_task_by_id(task_id)

        ctx = ExtractionContext(
            task=task,
            now=self._clock(),
            user_id=self._session.current_user_id(),
        )
        text = task.description.rstrip()
        scan = scan_trailing_commands(text, lambda line: self._dispatcher.dispatch(line, ctx))

        if not scan.consumed:
            logger.debug("No trailing commands in task_id=%s", task_id)
            return ExtractionResult(task=task, commands=(), subtasks=())

        # Buffered bottom-up; create them in the order they were written.
        pending = tuple(reversed(ctx.pending_subtasks))
        for subtask in pending:
            self._subtasks.create_subtask(subtask)

        task.description = scan.remaining
        self._tasks.update_task(task)

        commands = tuple(reversed(scan.consumed))
        logger.info(
            "Extracted %d command(s) from task_id=%s (subtasks=%d)",
            len(commands),
            task_id,
            len(pending),
        )
        return ExtractionResult(task=task, commands=commands, subtasks=pending)
