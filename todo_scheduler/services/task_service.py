"""Task service for the scheduler."""
from sqlmodel import Session, select
from typing import List, Optional
from datetime import date, datetime
import re

from todo_scheduler.models.task import Task
from todo_scheduler.schemas.task import TaskPayload
from todo_scheduler.services.errors import (
    RepeatRuleError,
    TaskNotFoundError,
    TaskServiceError,
    TaskValidationError,
)
from todo_scheduler.services.recurrence_engine import format_date, next_date, parse_date
from todo_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 50

# Largest value SQLite can bind as an INTEGER
MAX_SQLITE_INTEGER = 2**63 - 1

SEARCH_DATE_FORMAT = "%d.%m.%Y"
_SEARCH_DATE = re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4}")
_TASK_ID = re.compile(r"[0-9]+")


class TaskService:
    """Service class for task CRUD operations, search and completion of repeating tasks."""

    def __init__(self, session: Session):
        self.session = session

    def prepare(self, payload: TaskPayload, today: date) -> TaskPayload:
        """
        Validate a task and settle its date.

        A missing date becomes today. A past date is moved to the next
        occurrence of the repeat rule, or to today for one-off tasks.

        Args:
            payload: Incoming task data
            today: Current date

        Returns:
            A copy of the payload with the resolved date

        Raises:
            TaskValidationError: If the title, date or repeat rule is invalid
        """
        if not payload.title.strip():
            raise TaskValidationError("title is required")

        task_date = payload.date or format_date(today)
        try:
            parsed = parse_date(task_date)
        except RepeatRuleError:
            raise TaskValidationError("invalid date format")

        if parsed < today:
            if payload.repeat:
                task_date = self._next_date(today, task_date, payload.repeat)
            else:
                task_date = format_date(today)

        if payload.repeat:
            # A date already in the future still needs a usable rule
            self._next_date(today, task_date, payload.repeat)

        return payload.model_copy(update={"date": task_date})

    def add(self, payload: TaskPayload, today: date) -> Task:
        """Create a new task."""
        prepared = self.prepare(payload, today)
        task = Task(
            date=prepared.date,
            title=prepared.title,
            comment=prepared.comment,
            repeat=prepared.repeat,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)

        logger.info("Task created", task_id=task.id, date=task.date, repeat=task.repeat)
        return task

    def get(self, task_id: str) -> Task:
        """Get a task by ID."""
        task = self.session.get(Task, self._parse_id(task_id))
        if not task:
            raise TaskNotFoundError(task_id)
        return task

    def update(self, payload: TaskPayload, today: date) -> Task:
        """Overwrite every field of an existing task."""
        if not payload.id:
            raise TaskValidationError("task ID is required")

        task = self.get(payload.id)
        prepared = self.prepare(payload, today)

        task.date = prepared.date
        task.title = prepared.title
        task.comment = prepared.comment
        task.repeat = prepared.repeat
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)

        logger.info("Task updated", task_id=task.id, date=task.date, repeat=task.repeat)
        return task

    def delete(self, task_id: str) -> None:
        """Delete a task."""
        task = self.get(task_id)
        self.session.delete(task)
        self.session.commit()
        logger.info("Task deleted", task_id=task_id)

    def update_date(self, task_id: str, new_date: str) -> Task:
        """Move a task to a new date, leaving other fields untouched."""
        task = self.get(task_id)
        task.date = new_date
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def complete(self, task_id: str, today: date) -> Optional[Task]:
        """
        Mark a task as done.

        One-off tasks are deleted. Repeating tasks move to their next
        occurrence after today and are returned.
        """
        task = self.get(task_id)
        if not task.repeat:
            self.delete(task_id)
            return None

        try:
            upcoming = next_date(today, task.date, task.repeat)
        except RepeatRuleError as e:
            logger.error("Failed to calculate next date", task_id=task_id, repeat=task.repeat, error=str(e))
            raise TaskServiceError(f"failed to calculate next date: {e}")

        logger.info("Repeating task completed", task_id=task_id, previous=task.date, next=upcoming)
        return self.update_date(task_id, upcoming)

    def list_tasks(self, limit: int = DEFAULT_LIMIT) -> List[Task]:
        """Get tasks ordered by date, earliest first."""
        statement = select(Task).order_by(Task.date.asc(), Task.id.asc()).limit(limit)
        return list(self.session.exec(statement).all())

    def search(self, search: str, limit: int = DEFAULT_LIMIT) -> List[Task]:
        """
        Search tasks.

        A DD.MM.YYYY string matches tasks due on that day; anything else
        matches title or comment, case-insensitively.
        """
        search_date = _parse_search_date(search)
        if search_date:
            statement = select(Task).where(Task.date == format_date(search_date))
        else:
            search_pattern = f"%{search}%"
            statement = select(Task).where(
                Task.title.ilike(search_pattern) | Task.comment.ilike(search_pattern)
            )

        statement = statement.order_by(Task.date.asc(), Task.id.asc()).limit(limit)
        return list(self.session.exec(statement).all())

    def _next_date(self, today: date, task_date: str, repeat: str) -> str:
        try:
            return next_date(today, task_date, repeat)
        except RepeatRuleError as e:
            raise TaskValidationError(f"invalid repeat rule: {e}")

    @staticmethod
    def _parse_id(task_id: str) -> int:
        if not task_id or not _TASK_ID.fullmatch(str(task_id)):
            raise TaskValidationError("invalid task ID")
        value = int(task_id)
        if value > MAX_SQLITE_INTEGER:
            raise TaskNotFoundError(task_id)
        return value


def _parse_search_date(search: str) -> Optional[date]:
    if not _SEARCH_DATE.fullmatch(search):
        return None
    try:
        return datetime.strptime(search, SEARCH_DATE_FORMAT).date()
    except ValueError:
        return None
