"""Tasks Router - task CRUD, filtering and priority listing.

Handles:
- Task listing with ``completed`` filter and ``sort=date``
- Listing by priority level
- Get / create / replace / delete by id

Errors raised by the engine propagate to the handlers registered in
``api.main``, which render the ``{"error": {...}}`` envelope.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query

from api.dependencies import serialize_task
from api.models import DeleteTaskResponse, ErrorResponse, TaskModel
from task_service.task_store import (
    create_task,
    delete_task,
    get_task,
    list_tasks,
    list_tasks_by_priority,
    replace_task,
)

# Mounted at /tasks
router = APIRouter()

BAD_REQUEST = {400: {"model": ErrorResponse}}
NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=List[TaskModel])
def list_all_tasks(
    completed: Optional[str] = Query(None, description="'true' keeps completed tasks; any other value keeps open ones"),
    sort: Optional[str] = Query(None, description="'date' orders by creation (ascending id)"),
) -> List[Dict[str, Any]]:
    """List tasks, optionally filtered by completion and sorted by date."""
    completed_filter = None if completed is None else completed == "true"
    tasks = list_tasks(completed=completed_filter, sort=sort)
    return [serialize_task(task) for task in tasks]


@router.get("/priority/{level}", response_model=List[TaskModel], responses=BAD_REQUEST)
def list_tasks_for_priority(level: str) -> List[Dict[str, Any]]:
    """List tasks with the given priority level."""
    return [serialize_task(task) for task in list_tasks_by_priority(level)]


@router.get("/{task_id}", response_model=TaskModel, responses=NOT_FOUND)
def get_task_by_id(task_id: str) -> Dict[str, Any]:
    """Get a single task."""
    return serialize_task(get_task(task_id))


@router.post("", response_model=TaskModel, status_code=201, responses=BAD_REQUEST)
def create_new_task(data: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Create a task. ``id`` and ``createdAt`` are assigned by the server."""
    return serialize_task(create_task(data))


@router.put("/{task_id}", response_model=TaskModel, responses={**BAD_REQUEST, **NOT_FOUND})
def replace_existing_task(task_id: str, data: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Replace a task, keeping unsupplied fields and the path id."""
    return serialize_task(replace_task(task_id, data))


@router.delete("/{task_id}", response_model=DeleteTaskResponse, responses=NOT_FOUND)
def delete_existing_task(task_id: str) -> Dict[str, Any]:
    """Delete a task and echo it back."""
    deleted = delete_task(task_id)
    return {
        "message": "Task deleted successfully",
        "deletedTask": serialize_task(deleted),
    }
