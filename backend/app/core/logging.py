"""
Logging configuration for the storefront backend.
Provides consistent logging setup across routers and services.
"""

import logging
import sys

_configured = False


class ConsoleFormatter(logging.Formatter):
    """Compact formatter with timestamp, level and source."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"[{self.formatTime(record)}] {record.levelname} {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        if sys.stderr.isatty() and record.levelno >= logging.WARNING:
            return f"\033[0;33m{line}\033[0m"
        return line


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration.

    Args:
        level: Root log level name (DEBUG, INFO, ...)
    """
    global _configured
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not _configured:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ConsoleFormatter())
        root_logger.addHandler(console_handler)
        _configured = True

    # Always keep SQLAlchemy logging at WARNING level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (typically __name__)."""
    return logging.getLogger(name)
