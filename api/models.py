"""Shared Pydantic models for API routers.

Request bodies for create/replace are taken as raw JSON objects and checked
by ``validate_task_input``, so only response shapes are modelled here.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Task Models
# =============================================================================

class TaskModel(BaseModel):
    """A task as returned by every task endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str
    completed: bool = False
    priority: Literal["low", "medium", "high"] = "medium"
    created_at: str = Field(..., alias="createdAt")


class DeleteTaskResponse(BaseModel):
    """Confirmation returned after a delete."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_task: TaskModel = Field(..., alias="deletedTask")


# =============================================================================
# Error Models
# =============================================================================

class ErrorDetail(BaseModel):
    message: str
    status: int


class ErrorResponse(BaseModel):
    """Envelope carried by every error response."""
    error: ErrorDetail
