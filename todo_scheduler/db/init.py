"""Initialize database tables."""
from sqlmodel import SQLModel
from todo_scheduler.models.task import Task  # noqa: F401  registers the table
from todo_scheduler.db.config import engine
from todo_scheduler.utils.logger import get_logger

logger = get_logger(__name__)


def init_db(bind=None):
    """Create the scheduler table and its date index if they do not exist."""
    SQLModel.metadata.create_all(bind or engine)
    logger.info("Database tables ready")


if __name__ == "__main__":
    init_db()
