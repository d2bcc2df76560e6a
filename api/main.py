"""FastAPI service for the task record store."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.dependencies import get_settings
from api.routers import tasks_router
from task_service.config import get_store_path
from task_service.errors import StorageError, TaskServiceError
from task_service.task_store import init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_store()
    yield


app = FastAPI(
    title="Task Record Service API",
    version="0.1.0",
    description="CRUD, filtering and sorting for task records kept in a JSON document.",
    lifespan=lifespan,
)

app.include_router(tasks_router, prefix="/tasks", tags=["tasks"])


def _error_response(message: str, status: int) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"message": message, "status": status}},
    )


@app.exception_handler(TaskServiceError)
async def handle_task_service_error(request: Request, exc: TaskServiceError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(
            f"[API] {request.method} {request.url.path} failed: {exc.message}",
            exc_info=exc,
        )
        return _error_response("Internal server error", 500)
    return _error_response(exc.message, exc.status)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"[API] rejected request to {request.url.path}: {exc.errors()}")
    return _error_response("Invalid request body", 400)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(str(exc.detail), exc.status_code)


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint with store configuration."""
    settings = get_settings()
    store_path = get_store_path()
    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "store": {"path": str(store_path), "exists": store_path.exists()},
    }
