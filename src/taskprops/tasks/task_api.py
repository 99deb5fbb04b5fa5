# src/taskprops/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from ..parsing.commands import CommandDispatcher
from ..parsing.dates import DateResolver, DateutilFallbackResolver
from ..parsing.extraction import Clock, ExtractionResult, PropertyExtractor, system_clock

logger = logging.getLogger(__name__)


def build_extractor(state: AppState, *, clock: Clock | None = None) -> PropertyExtractor:
    """Wire a PropertyExtractor against the stores held by `state`."""
    zone = state.settings.tzinfo
    store = state.task_store
    dispatcher = CommandDispatcher(
        tags=store,
        projects=store,
        colors=state.colors,
        dates=DateResolver(DateutilFallbackResolver(zone)),
        prefix=state.settings.command_prefix,
    )
    return PropertyExtractor(
        tasks=store,
        subtasks=store,
        session=state.session,
        dispatcher=dispatcher,
        clock=clock or system_clock(zone),
    )


def create_task(
    state: AppState,
    *,
    project_id: int,
    title: str,
    description: str = "",
    clock: Clock | None = None,
) -> ExtractionResult:
    """
    Create a task and immediately pull properties out of its description.

    The task row is committed before extraction runs, so a task is never lost
    because its commands could not be applied.
    """
    task_id = state.task_store.add_task(
        project_id=project_id,
        title=title,
        description=description,
        creator_id=state.session.current_user_id(),
    )
    logger.debug("Created task_id=%s, extracting properties", task_id)
    return build_extractor(state, clock=clock).extract(task_id)
