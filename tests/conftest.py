"""
Shared pytest fixtures for the scheduler tests.

Provides:
- An in-memory SQLite database shared by a single session
- A TaskService bound to that session
- A FastAPI TestClient with the database dependency overridden and
  "today" frozen to 2024-01-10
"""

import os
import tempfile
from datetime import date

import pytest
from freezegun import freeze_time
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

# Keep the application's own engine and static files away from the working tree
os.environ.setdefault("TODO_DBFILE", os.path.join(tempfile.gettempdir(), "todo_scheduler_test.db"))
os.environ.setdefault("TODO_WEBDIR", os.path.join(tempfile.gettempdir(), "todo_scheduler_no_web"))

from todo_scheduler.db.config import get_session  # noqa: E402
from todo_scheduler.db.init import init_db  # noqa: E402
from todo_scheduler.main import app  # noqa: E402
from todo_scheduler.services.task_service import TaskService  # noqa: E402

FROZEN_TODAY = "2024-01-10"


@pytest.fixture
def today():
    """The date every service test treats as today."""
    return date(2024, 1, 10)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with the scheduler table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def service(session):
    return TaskService(session)


@pytest.fixture
def client(session):
    """
    TestClient for the API.

    Startup events are not run; the database dependency points at the
    in-memory session and time is frozen at FROZEN_TODAY.
    """
    from fastapi.testclient import TestClient

    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    with freeze_time(FROZEN_TODAY):
        yield TestClient(app)
    app.dependency_overrides.clear()
