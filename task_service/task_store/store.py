"""JSON document store for tasks.

The whole collection lives in one pretty-printed document::

    {"tasks": [{"id": 1, "title": ..., "createdAt": ...}, ...]}

Architecture:
- Path: ``TASKS_STORE_PATH`` (default ``task.json`` next to the package)
- Every load reads the file fresh; there is no in-memory cache
- Every save rewrites the full document via temp file + ``os.replace``

A load/save cycle is not byte-preserving for hand-edited documents: task
keys outside the six known fields are dropped, and ``createdAt`` is
rewritten as UTC with millisecond precision and a ``Z`` suffix.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import get_store_path
from ..errors import CorruptData, StorageUnavailable

logger = logging.getLogger(__name__)

DOCUMENT_KEY = "tasks"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Task:
    """A single persisted task.

    ``id`` and ``created_at`` are fixed at creation; the remaining fields
    are mutable through a replace.
    """

    id: int
    title: str
    description: str
    created_at: datetime
    completed: bool = False
    priority: str = TaskPriority.MEDIUM.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted (and API) representation."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from a persisted dictionary.

        Raises:
            ValueError: if the entry is missing fields or has the wrong types.
        """
        if not isinstance(data, dict):
            raise ValueError(f"task entry must be an object, got {type(data).__name__}")

        task_id = data.get("id")
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid task id {task_id!r}")

        for key in ("title", "description", "createdAt"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"task {task_id}: {key} must be a string")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task {task_id}: completed must be a boolean")

        priority = data.get("priority", TaskPriority.MEDIUM.value)
        if priority not in TaskPriority.values():
            raise ValueError(f"task {task_id}: unknown priority {priority!r}")

        return cls(
            id=task_id,
            title=data["title"],
            description=data["description"],
            created_at=parse_timestamp(data["createdAt"]),
            completed=completed,
            priority=priority,
        )


def load_tasks(path: Optional[Path] = None) -> List[Task]:
    """Read the full collection from disk.

    A missing document is an empty collection.

    Raises:
        StorageUnavailable: the file exists but cannot be read.
        CorruptData: the contents are not a valid task document.
    """
    file_path = path or get_store_path()

    try:
        raw = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"[TaskStore] {file_path} missing, treating as empty")
        return []
    except OSError as exc:
        raise StorageUnavailable(f"Cannot read task store {file_path}: {exc}") from exc

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptData(f"Task store {file_path} is not valid JSON: {exc}") from exc

    if not isinstance(document, dict) or not isinstance(document.get(DOCUMENT_KEY), list):
        raise CorruptData(f"Task store {file_path} has no '{DOCUMENT_KEY}' array")

    tasks: List[Task] = []
    seen_ids = set()
    for entry in document[DOCUMENT_KEY]:
        try:
            task = Task.from_dict(entry)
        except ValueError as exc:
            raise CorruptData(f"Task store {file_path}: {exc}") from exc
        if task.id in seen_ids:
            raise CorruptData(f"Task store {file_path}: duplicate task id {task.id}")
        seen_ids.add(task.id)
        tasks.append(task)

    logger.debug(f"[TaskStore] loaded {len(tasks)} tasks from {file_path}")
    return tasks


def save_tasks(tasks: List[Task], path: Optional[Path] = None) -> None:
    """Overwrite the document with ``tasks``.

    The new content is written next to the target and swapped in with
    ``os.replace`` so readers never observe a half-written file.

    Raises:
        StorageUnavailable: the document could not be written.
    """
    file_path = path or get_store_path()
    payload = json.dumps({DOCUMENT_KEY: [task.to_dict() for task in tasks]}, indent=2)
    tmp_path = file_path.with_name(file_path.name + ".tmp")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(payload + "\n", encoding="utf-8")
        os.replace(tmp_path, file_path)
    except OSError as exc:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.warning(f"[TaskStore] could not remove temp file {tmp_path}")
        raise StorageUnavailable(f"Cannot write task store {file_path}: {exc}") from exc

    logger.debug(f"[TaskStore] saved {len(tasks)} tasks to {file_path}")


def next_id(tasks: List[Task]) -> int:
    """Return the id for a new task: 1 for an empty collection, else max + 1.

    Computed from the current collection only, so deleting the highest task
    frees its id for the next create.
    """
    if not tasks:
        return 1
    return max(task.id for task in tasks) + 1


def init_store(path: Optional[Path] = None, *, overwrite: bool = False) -> Path:
    """Create an empty task document if none exists (or if ``overwrite``)."""
    file_path = path or get_store_path()
    if overwrite or not file_path.exists():
        save_tasks([], file_path)
        logger.info(f"[TaskStore] initialized empty store at {file_path}")
    return file_path
