# src/taskprops/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs one subcommand:
- project-add: create a project with its priority bounds,
- add: create a task and extract properties from its description,
- extract: re-run extraction on an existing task,
- show: print a task with its tags and subtasks.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..parsing.scanner import LINE_BREAK
from ..tasks.task_api import build_extractor, create_task
from ..tasks.task_models import ProjectNotFoundError, TaskNotFoundError

logger = logging.getLogger(__name__)


def normalize_line_breaks(text: str) -> str:
    """Terminal input uses LF; the command grammar only splits on CRLF."""
    return text.replace("\r\n", "\n").replace("\n", LINE_BREAK)


def _fmt_ts(ts: float | None, state: AppState) -> str:
    if ts is None:
        return "-"
    return datetime.fromtimestamp(ts, state.settings.tzinfo).strftime("%Y-%m-%d %H:%M")


def _fmt_color(color_id: str | None, state: AppState) -> str:
    if not color_id:
        return "-"
    name = state.colors.name(color_id)
    return f"{color_id} ({name})" if name else color_id


def _print_task(state: AppState, task_id: int) -> None:
    store = state.task_store
    task = store.get_task_by_id(task_id)
    tags = store.get_task_tags(task_id)
    print(f"Task #{task.id} (project {task.project_id}): {task.title}")
    print(f"  Due:      {_fmt_ts(task.date_due, state)}")
    print(f"  Started:  {_fmt_ts(task.date_started, state)}")
    print(f"  Priority: {'-' if task.priority is None else task.priority}")
    print(f"  Color:    {_fmt_color(task.color_id, state)}")
    print(f"  Tags:     {', '.join(tags) if tags else '-'}")
    subtasks = store.list_subtasks(task_id)
    if subtasks:
        print("  Subtasks:")
        for sub in subtasks:
            print(f"    {sub.position}. {sub.title}")
    if task.description:
        print("  Description:")
        for line in task.description.split(LINE_BREAK):
            print(f"    {line}")


def cmd_project_add(state: AppState, args: argparse.Namespace) -> int:
    settings = state.settings
    start = settings.default_priority_start if args.priority_start is None else args.priority_start
    end = settings.default_priority_end if args.priority_end is None else args.priority_end
    default = args.priority_default
    if default is None:
        default = settings.default_priority if start <= settings.default_priority <= end else start
    project_id = state.task_store.add_project(
        args.name,
        priority_start=start,
        priority_end=end,
        priority_default=default,
    )
    print(project_id)
    return 0


def cmd_add(state: AppState, args: argparse.Namespace) -> int:
    description = args.description
    if description is None:
        description = "" if sys.stdin.isatty() else sys.stdin.read()
    result = create_task(
        state,
        project_id=args.project,
        title=args.title,
        description=normalize_line_breaks(description),
    )
    logger.debug("Applied commands: %s", result.commands)
    _print_task(state, result.task.id)
    return 0


def cmd_extract(state: AppState, args: argparse.Namespace) -> int:
    result = build_extractor(state).extract(args.task_id)
    if not result.changed:
        print(f"No trailing commands in task #{args.task_id}.")
    _print_task(state, args.task_id)
    return 0


def cmd_show(state: AppState, args: argparse.Namespace) -> int:
    _print_task(state, args.task_id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskprops",
        description="Create tasks whose trailing description lines set their properties.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    project_parser = subparsers.add_parser("project-add", help="Create a project")
    project_parser.add_argument("name")
    project_parser.add_argument("--priority-start", type=int)
    project_parser.add_argument("--priority-end", type=int)
    project_parser.add_argument("--priority-default", type=int)
    project_parser.set_defaults(func=cmd_project_add)

    add_parser = subparsers.add_parser("add", help="Create a task and extract its properties")
    add_parser.add_argument("--project", type=int, required=True, help="Project id")
    add_parser.add_argument("--title", required=True)
    add_parser.add_argument("--description", help="Description text; read from stdin if omitted")
    add_parser.set_defaults(func=cmd_add)

    extract_parser = subparsers.add_parser("extract", help="Re-run extraction on a task")
    extract_parser.add_argument("task_id", type=int)
    extract_parser.set_defaults(func=cmd_extract)

    show_parser = subparsers.add_parser("show", help="Show a task")
    show_parser.add_argument("task_id", type=int)
    show_parser.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    state = create_initial_state(settings=settings)
    try:
        return args.func(state, args)
    except (TaskNotFoundError, ProjectNotFoundError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
