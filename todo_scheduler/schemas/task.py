"""Task schemas for the scheduler API."""
from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional

from todo_scheduler.models.task import Task


class TaskPayload(BaseModel):
    """Schema for creating or updating a task."""
    id: Optional[str] = None  # required for updates only
    date: str = ""  # YYYYMMDD, empty means today
    title: str = ""
    comment: str = ""
    repeat: str = ""  # repeat rule, empty for one-off tasks

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, value: Any) -> Any:
        """Clients may send the id as a JSON number."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", "title", "comment", "repeat", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TaskResponse(BaseModel):
    """Schema for task API responses; ids are serialized as strings."""
    id: str
    date: str
    title: str
    comment: str
    repeat: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=str(task.id),
            date=task.date,
            title=task.title,
            comment=task.comment,
            repeat=task.repeat,
        )


class TasksResponse(BaseModel):
    """Schema for task list responses."""
    tasks: List[TaskResponse] = Field(default_factory=list)


class TaskCreated(BaseModel):
    """Schema for the id of a newly created task."""
    id: str
