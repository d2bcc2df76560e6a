"""Query and mutation operations over the task store.

Every operation loads the collection fresh. Mutations then save the whole
updated collection before returning, holding ``_MUTATION_LOCK`` across
load-modify-save so two writers in this process cannot lose each other's
update. Separate processes sharing one file get no such guarantee.
"""
from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import InvalidInput, NotFound
from .store import (
    Task,
    TaskPriority,
    load_tasks,
    next_id,
    save_tasks,
    utc_now,
)

logger = logging.getLogger(__name__)

_MUTATION_LOCK = threading.Lock()

SORT_BY_DATE = "date"
MUTABLE_FIELDS = ("title", "description", "completed", "priority")

MSG_REQUIRED = "Title and description are required"
MSG_COMPLETED = "Completed must be a boolean value"
MSG_PRIORITY = "Priority must be low, medium, or high"
MSG_INVALID_LEVEL = "Invalid priority level"
MSG_NOT_FOUND = "Task not found"


@dataclass(slots=True)
class ValidationResult:
    """Outcome of ``validate_task_input``; ``message`` is set when not ok."""

    ok: bool
    message: Optional[str] = None
    status: int = 200

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(ok=False, message=message, status=InvalidInput.status)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _supplied_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Mutable fields present in ``data``. A null or empty priority counts as absent."""
    fields = {name: data[name] for name in MUTABLE_FIELDS if name in data}
    if fields.get("priority", TaskPriority.MEDIUM.value) in (None, ""):
        del fields["priority"]
    return fields


def validate_task_input(data: Dict[str, Any]) -> ValidationResult:
    """Check a create/replace body. The first failing rule wins.

    ``title`` and ``description`` are always required, including on
    replace. ``completed`` and ``priority`` are only checked when present; a
    null or empty ``priority`` is treated as not supplied.
    """
    if not isinstance(data, dict):
        return ValidationResult.failure(MSG_REQUIRED)

    if not _is_text(data.get("title")) or not _is_text(data.get("description")):
        return ValidationResult.failure(MSG_REQUIRED)

    if "completed" in data and not isinstance(data["completed"], bool):
        return ValidationResult.failure(MSG_COMPLETED)

    priority = _supplied_fields(data).get("priority")
    if priority is not None and priority not in TaskPriority.values():
        return ValidationResult.failure(MSG_PRIORITY)

    return ValidationResult.success()


def ensure_valid(data: Dict[str, Any]) -> None:
    """Raise ``InvalidInput`` unless ``data`` passes validation."""
    result = validate_task_input(data)
    if not result.ok:
        raise InvalidInput(result.message or MSG_REQUIRED)


def parse_task_id(raw: Any) -> int:
    """Convert a path id to an int.

    Only plain ASCII digits are accepted; anything else cannot match a task.
    """
    if isinstance(raw, bool):
        raise NotFound(MSG_NOT_FOUND)
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not re.fullmatch(r"[0-9]+", text):
        raise NotFound(MSG_NOT_FOUND)
    return int(text)


def _index_of(tasks: List[Task], task_id: int) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise NotFound(MSG_NOT_FOUND)


# =============================================================================
# Queries
# =============================================================================

def list_tasks(
    completed: Optional[bool] = None,
    sort: Optional[str] = None,
) -> List[Task]:
    """List tasks, optionally filtered by completion and sorted by creation.

    Args:
        completed: Keep only tasks whose ``completed`` equals this value.
        sort: ``"date"`` orders by ascending id; other values are ignored.

    Returns:
        Tasks in persisted order unless sorted.
    """
    tasks = load_tasks()

    if completed is not None:
        tasks = [t for t in tasks if t.completed is completed]

    if sort == SORT_BY_DATE:
        tasks = sorted(tasks, key=lambda t: t.id)

    return tasks


def list_tasks_by_priority(level: str) -> List[Task]:
    """Return tasks at ``level`` in persisted order.

    Raises:
        InvalidInput: ``level`` is not low, medium or high.
    """
    if level not in TaskPriority.values():
        raise InvalidInput(MSG_INVALID_LEVEL)
    return [t for t in load_tasks() if t.priority == level]


def get_task(task_id: Any) -> Task:
    """Return the task with ``task_id``.

    Raises:
        NotFound: no task has that id.
    """
    wanted = parse_task_id(task_id)
    tasks = load_tasks()
    return tasks[_index_of(tasks, wanted)]


# =============================================================================
# Mutations
# =============================================================================

def create_task(data: Dict[str, Any]) -> Task:
    """Validate ``data``, append a new task and persist the collection."""
    ensure_valid(data)
    fields = _supplied_fields(data)

    with _MUTATION_LOCK:
        tasks = load_tasks()
        task = Task(
            id=next_id(tasks),
            title=data["title"],
            description=data["description"],
            completed=fields.get("completed", False),
            priority=fields.get("priority", TaskPriority.MEDIUM.value),
            created_at=utc_now(),
        )
        tasks.append(task)
        save_tasks(tasks)

    logger.info(f"[TaskEngine] created task {task.id} ({task.priority})")
    return task


def replace_task(task_id: Any, data: Dict[str, Any]) -> Task:
    """Merge the supplied fields of ``data`` over an existing task.

    Unsupplied fields keep their previous values. ``id`` always stays the
    path id and ``createdAt`` is never touched, whatever the body holds.

    Raises:
        InvalidInput: ``data`` fails validation (checked before any I/O).
        NotFound: no task has that id.
    """
    ensure_valid(data)
    wanted = parse_task_id(task_id)

    with _MUTATION_LOCK:
        tasks = load_tasks()
        index = _index_of(tasks, wanted)
        task = tasks[index]
        for field_name, value in _supplied_fields(data).items():
            setattr(task, field_name, value)
        task.id = wanted
        save_tasks(tasks)

    ignored = sorted(set(data) - set(MUTABLE_FIELDS))
    if ignored:
        logger.debug(f"[TaskEngine] task {wanted}: ignored fields {ignored}")
    logger.info(f"[TaskEngine] replaced task {wanted}")
    return task


def delete_task(task_id: Any) -> Task:
    """Remove a task, persist the reduced collection and return the removed task.

    Raises:
        NotFound: no task has that id.
    """
    wanted = parse_task_id(task_id)

    with _MUTATION_LOCK:
        tasks = load_tasks()
        removed = tasks.pop(_index_of(tasks, wanted))
        save_tasks(tasks)

    logger.info(f"[TaskEngine] deleted task {wanted}")
    return removed
