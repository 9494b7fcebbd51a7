"""Task router for the scheduler API."""
from fastapi import APIRouter, Depends, Query
from typing import Any, Dict
from datetime import date

from todo_scheduler.schemas.task import TaskCreated, TaskPayload, TaskResponse, TasksResponse
from todo_scheduler.services.errors import TaskValidationError
from todo_scheduler.services.task_service import DEFAULT_LIMIT, MAX_SQLITE_INTEGER, TaskService
from todo_scheduler.routers.dependencies import get_task_service, get_today

router = APIRouter(tags=["Tasks"])  # No prefix since main.py adds /api prefix


def _require_id(task_id: str) -> str:
    if not task_id:
        raise TaskValidationError("ID parameter is required")
    return task_id


def _parse_limit(limit: str) -> int:
    try:
        value = int(limit)
    except ValueError:
        return DEFAULT_LIMIT
    return value if 0 < value <= MAX_SQLITE_INTEGER else DEFAULT_LIMIT


@router.post("/task", response_model=TaskCreated)
async def create_task(
    task_data: TaskPayload,
    service: TaskService = Depends(get_task_service),
    today: date = Depends(get_today),
):
    """Create a task; past dates of repeating tasks move to the next occurrence."""
    task = service.add(task_data, today)
    return TaskCreated(id=str(task.id))


@router.get("/task", response_model=TaskResponse)
async def get_task(
    task_id: str = Query("", alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    return TaskResponse.from_task(service.get(_require_id(task_id)))


@router.put("/task", response_model=Dict[str, Any])
async def update_task(
    task_data: TaskPayload,
    service: TaskService = Depends(get_task_service),
    today: date = Depends(get_today),
):
    """Update every field of a task."""
    service.update(task_data, today)
    return {}


@router.delete("/task", response_model=Dict[str, Any])
async def delete_task(
    task_id: str = Query("", alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    service.delete(_require_id(task_id))
    return {}


@router.post("/task/done", response_model=Dict[str, Any])
async def complete_task(
    task_id: str = Query("", alias="id"),
    service: TaskService = Depends(get_task_service),
    today: date = Depends(get_today),
):
    """Mark a task as done: delete it, or move a repeating task to its next date."""
    service.complete(_require_id(task_id), today)
    return {}


@router.get("/tasks", response_model=TasksResponse)
async def list_tasks(
    search: str = Query("", description="Text to find in title/comment, or a DD.MM.YYYY date"),
    limit: str = Query(str(DEFAULT_LIMIT), description="Maximum number of tasks"),
    service: TaskService = Depends(get_task_service),
):
    """List upcoming tasks, optionally filtered by a search string."""
    max_tasks = _parse_limit(limit)
    if search:
        tasks = service.search(search, max_tasks)
    else:
        tasks = service.list_tasks(max_tasks)

    return TasksResponse(tasks=[TaskResponse.from_task(task) for task in tasks])
