"""Error taxonomy shared by the task store, the engine and the API."""
from __future__ import annotations


class TaskServiceError(RuntimeError):
    """Base error carrying a caller-facing message and HTTP-style status."""

    status: int = 500

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status}}


class InvalidInput(TaskServiceError):
    """Caller-supplied data failed a validation rule."""

    status = 400


class NotFound(TaskServiceError):
    """The referenced task id does not exist."""

    status = 404


class StorageError(TaskServiceError):
    """The persisted document could not be used. Not recoverable locally."""

    status = 500


class StorageUnavailable(StorageError):
    """The document could not be read from or written to disk."""


class CorruptData(StorageError):
    """The document does not parse into a ``{"tasks": [...]}`` collection."""
