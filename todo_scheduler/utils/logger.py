"""
Logging Utility for the Scheduler.

Provides structured JSON logging on top of the standard logging module.
"""

import logging
import os
import sys
from datetime import datetime
import json


def _level_from_name(name: str) -> int:
    """Map a level name to its number, falling back to INFO for unknown names."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


LOG_LEVEL = _level_from_name(os.environ.get("TODO_LOG_LEVEL", "INFO"))


class StructuredLogger:
    """Structured logger for scheduler components."""

    def __init__(self, name: str, level: int = None):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level (defaults to TODO_LOG_LEVEL)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level if level is not None else LOG_LEVEL)

        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self):
        """Set up the console handler."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        self.logger.addHandler(console_handler)

    def _payload(self, level: int, message: str, **kwargs) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": logging.getLevelName(level),
            "message": message,
            "service": self.logger.name,
        }
        log_data.update(kwargs)
        return json.dumps(log_data, default=str)

    def _log_structured(self, level: int, message: str, **kwargs):
        """
        Log a structured message.

        Args:
            level: Logging level
            message: Log message
            **kwargs: Additional structured data
        """
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._payload(level, message, **kwargs))

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._log_structured(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._log_structured(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._log_structured(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self._log_structured(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with traceback."""
        if self.logger.isEnabledFor(logging.ERROR):
            self.logger.exception(self._payload(logging.ERROR, message, exception=True, **kwargs))


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger for the given component.

    Args:
        name: Component name, usually the module's __name__

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
