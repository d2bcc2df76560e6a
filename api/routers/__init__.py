"""API Routers Package.

Routers:
- tasks.py: task CRUD, completion filter, date sort, priority listing

Usage in main.py:
    from api.routers import tasks_router

    app.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
"""

from .tasks import router as tasks_router

__all__ = [
    "tasks_router",
]
