"""Shared router dependencies."""
from datetime import date

from fastapi import Depends
from sqlmodel import Session

from todo_scheduler.db.config import get_session
from todo_scheduler.services.task_service import TaskService


def get_today() -> date:
    """Dependency for the current calendar date."""
    return date.today()


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)
