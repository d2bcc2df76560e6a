"""Shared dependencies and helper functions for API routers.

Usage in routers:
    from api.dependencies import get_settings, serialize_task
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from task_service.config import Settings, load_settings
from task_service.task_store import Task


@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return load_settings()


def serialize_task(task: Task) -> Dict[str, Any]:
    """Serialize a Task to API response format."""
    return task.to_dict()
