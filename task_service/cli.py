"""Task record service CLI."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Iterable

import uvicorn

from task_service.config import ConfigError, load_settings
from task_service.errors import TaskServiceError
from task_service.logging_setup import setup_logging
from task_service.task_store import (
    Task,
    TaskPriority,
    create_task,
    delete_task,
    get_task,
    init_store,
    list_tasks,
    list_tasks_by_priority,
)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-service",
        description="Manage task records stored in a JSON document.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve_parser.add_argument("--host", help="Bind address (default: TASKS_HOST).")
    serve_parser.add_argument("--port", type=int, help="Port (default: TASKS_PORT).")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes.")

    init_parser = subparsers.add_parser("init", help="Create an empty task store.")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing store with an empty one.",
    )

    list_parser = subparsers.add_parser("list", help="List tasks.")
    list_parser.add_argument(
        "--completed",
        type=_parse_bool,
        help="Only show tasks with this completion state (true/false).",
    )
    list_parser.add_argument(
        "--sort",
        choices=("date",),
        help="Order by creation date.",
    )
    list_parser.add_argument(
        "--priority",
        help="Only show tasks at this priority level.",
    )

    show_parser = subparsers.add_parser("show", help="Print one task as JSON.")
    show_parser.add_argument("task_id")

    add_parser = subparsers.add_parser("add", help="Create a task.")
    add_parser.add_argument("--title", required=True)
    add_parser.add_argument("--description", required=True)
    add_parser.add_argument("--priority", choices=TaskPriority.values())
    add_parser.add_argument("--completed", type=_parse_bool)

    delete_parser = subparsers.add_parser("delete", help="Delete a task.")
    delete_parser.add_argument("task_id")

    return parser


def format_task_rows(tasks: Iterable[Task]) -> str:
    """Return a human-friendly summary table string."""

    lines = ["ID | Title | Priority | Done | Created"]
    for task in tasks:
        lines.append(
            f"{task.id} | {task.title} | {task.priority} | "
            f"{'yes' if task.completed else 'no'} | {task.created_at:%Y-%m-%d %H:%M}"
        )
    return "\n".join(lines)


def _cmd_serve(host: str | None, port: int | None, reload: bool) -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level)
    uvicorn.run(
        "api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )
    return 0


def _cmd_init(force: bool) -> int:
    path = init_store(overwrite=force)
    print(f"Task store ready at {path}")
    return 0


def _cmd_list(completed: bool | None, sort: str | None, priority: str | None) -> int:
    if priority is not None:
        tasks = list_tasks_by_priority(priority)
        if completed is not None:
            tasks = [t for t in tasks if t.completed is completed]
        if sort == "date":
            tasks.sort(key=lambda t: t.id)
    else:
        tasks = list_tasks(completed=completed, sort=sort)

    if not tasks:
        print("No tasks.")
        return 0
    print(format_task_rows(tasks))
    return 0


def _cmd_show(task_id: str) -> int:
    print(json.dumps(get_task(task_id).to_dict(), indent=2))
    return 0


def _cmd_add(title: str, description: str, priority: str | None, completed: bool | None) -> int:
    data: Dict[str, Any] = {"title": title, "description": description}
    if priority is not None:
        data["priority"] = priority
    if completed is not None:
        data["completed"] = completed
    task = create_task(data)
    print(f"Created task {task.id}: {task.title}")
    return 0


def _cmd_delete(task_id: str) -> int:
    task = delete_task(task_id)
    print(f"Deleted task {task.id}: {task.title}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "serve":
            return _cmd_serve(host=args.host, port=args.port, reload=args.reload)
        if args.command == "init":
            return _cmd_init(force=args.force)
        if args.command == "list":
            return _cmd_list(completed=args.completed, sort=args.sort, priority=args.priority)
        if args.command == "show":
            return _cmd_show(args.task_id)
        if args.command == "add":
            return _cmd_add(
                title=args.title,
                description=args.description,
                priority=args.priority,
                completed=args.completed,
            )
        if args.command == "delete":
            return _cmd_delete(args.task_id)
    except TaskServiceError as exc:
        print(f"Error ({exc.status}): {exc.message}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
