"""Centralized logging configuration for subscription email parsing.

This module provides structured logging with context fields for parse runs.
Logs always go to the console; rotating files are added when a log
directory is configured (SUBTRACK_LOG_DIR).

Usage:
    from subtrack.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Parsed email", extra={'message_id': msg_id, 'merchant': 'Netflix'})
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from subtrack.config import load_env_file

DEFAULT_LOG_LEVEL = "INFO"


class StructuredFormatter(logging.Formatter):
    """Custom formatter that adds context fields to log records.

    Supports the following context fields via extra={} parameter:
    - message_id: Mail provider message ID
    - merchant: Resolved merchant name or sender
    - parse_method: Parse method used (pattern, ai, failed)
    """

    def format(self, record):
        """Format log record with context fields."""
        record.message_id = getattr(record, "message_id", None)
        record.merchant = getattr(record, "merchant", None)
        record.parse_method = getattr(record, "parse_method", None)

        return super().format(record)


def get_log_dir() -> Optional[str]:
    """Return the configured log directory, or None for console-only logging."""
    return os.getenv("SUBTRACK_LOG_DIR") or None


def get_logger(name: str) -> logging.Logger:
    """Get configured logger for parsing operations.

    Creates a logger with:
    - Console handler (SUBTRACK_LOG_LEVEL, INFO by default)
    - Rotating file handler for all logs (DEBUG level), if a log dir is set
    - Separate error file handler (ERROR level), if a log dir is set

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)

    # Skip if already configured (prevents duplicate handlers)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Pick up SUBTRACK_LOG_* from a .env file before reading them
    load_env_file()

    level_name = os.getenv("SUBTRACK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    # ========================================
    # Console Handler
    # ========================================
    console = logging.StreamHandler()
    console.setLevel(getattr(logging, level_name, logging.INFO))
    console.setFormatter(
        StructuredFormatter("[%(levelname)s] [msg:%(message_id)s] %(message)s")
    )
    logger.addHandler(console)

    log_dir = get_log_dir()
    if not log_dir:
        return logger

    os.makedirs(log_dir, exist_ok=True)
    file_format = StructuredFormatter(
        "[%(asctime)s] [%(levelname)s] [%(name)s] "
        "[msg:%(message_id)s merchant:%(merchant)s method:%(parse_method)s] %(message)s"
    )

    # ========================================
    # File Handler (rotating, all levels)
    # ========================================
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "subtrack.log"),
        maxBytes=10 * 1024 * 1024,  # 10MB per file
        backupCount=30,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    # ========================================
    # Error File Handler (errors only)
    # ========================================
    error_handler = RotatingFileHandler(
        os.path.join(log_dir, "subtrack_errors.log"),
        maxBytes=10 * 1024 * 1024,
        backupCount=30,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(file_format)
    logger.addHandler(error_handler)

    return logger


def get_log_file_path(filename: str) -> Optional[str]:
    """Get full path to a log file, or None when file logging is disabled.

    Args:
        filename: Name of log file (e.g., 'subtrack.log')
    """
    log_dir = get_log_dir()
    if not log_dir:
        return None
    return os.path.join(log_dir, filename)
