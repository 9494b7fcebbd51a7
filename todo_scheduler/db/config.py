"""Database configuration for the task scheduler."""
from typing import Generator
from sqlmodel import create_engine, Session
import os
from dotenv import load_dotenv
from sqlalchemy import event

from todo_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

# Load environment variables from .env when present
load_dotenv()

DB_FILE = os.environ.get("TODO_DBFILE", "scheduler.db")
PORT = int(os.environ.get("TODO_PORT", "7450"))
WEB_DIR = os.environ.get("TODO_WEBDIR", "web")

# DATABASE_URL takes precedence over the SQLite file
DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{DB_FILE}")
IS_SQLITE = DATABASE_URL.startswith("sqlite")

logger.info("Database configured", url=DATABASE_URL)

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if IS_SQLITE else {}

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
