"""Task store package - task model, JSON persistence and query engine."""
from __future__ import annotations

from .engine import (
    ValidationResult,
    create_task,
    delete_task,
    get_task,
    list_tasks,
    list_tasks_by_priority,
    replace_task,
    validate_task_input,
)
from .store import (
    Task,
    TaskPriority,
    init_store,
    load_tasks,
    next_id,
    save_tasks,
)

__all__ = [
    "Task",
    "TaskPriority",
    "ValidationResult",
    "init_store",
    "load_tasks",
    "save_tasks",
    "next_id",
    "validate_task_input",
    "list_tasks",
    "list_tasks_by_priority",
    "get_task",
    "create_task",
    "replace_task",
    "delete_task",
]
