"""Main FastAPI application for the task scheduler."""
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from todo_scheduler import __version__
from todo_scheduler.db.config import PORT, WEB_DIR
from todo_scheduler.db.init import init_db
from todo_scheduler.routers import nextdate_router, tasks_router
from todo_scheduler.services.errors import TaskServiceError
from todo_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Task Scheduler API",
    description="REST API for a task scheduler with repeating tasks",
    version=__version__,
)


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    try:
        init_db()
    except Exception as e:
        logger.exception("Database initialization failed", error=str(e))
        raise
    logger.info("Application startup complete", port=PORT)


@app.exception_handler(TaskServiceError)
async def task_error_handler(request: Request, exc: TaskServiceError):
    """Render task errors as {"error": message}."""
    if exc.status_code >= 500:
        logger.error("Task request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors, reported like the other task errors."""
    logger.debug("Rejected request body", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "invalid JSON format"})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


app.include_router(nextdate_router, prefix="/api")  # /api/nextdate
app.include_router(tasks_router, prefix="/api")  # /api/task, /api/tasks, /api/task/done

# Frontend files are served last so they never shadow the API
if os.path.isdir(WEB_DIR):
    app.mount("/", StaticFiles(directory=WEB_DIR, html=True), name="web")
    logger.info("Serving frontend", directory=os.path.abspath(WEB_DIR))
else:
    logger.warning("Frontend directory not found, serving API only", directory=WEB_DIR)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "todo_scheduler.main:app",
        host="0.0.0.0",
        port=PORT,
    )
