"""Routers package for the task scheduler."""

from .nextdate import router as nextdate_router
from .tasks import router as tasks_router

__all__ = ["nextdate_router", "tasks_router"]
