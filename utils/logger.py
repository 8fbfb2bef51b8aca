# utils/logger.py
"""
Centralized logging configuration for GeoSmart Mapper.
Provides consistent logging across all modules with file and console output.
"""

import logging
import logging.handlers
from pathlib import Path
from constants import (
    APP_NAME,
    APP_DATA_DIR_NAME,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILE_NAME,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT
)


_loggers = {}  # Cache for loggers


def default_log_dir() -> Path:
    """Logs live in the user's home directory under .geosmart/logs."""
    return Path.home() / APP_DATA_DIR_NAME / "logs"


def setup_logging(log_dir: str = None, level: int = logging.INFO) -> Path:
    """
    Set up the root logger with file and console handlers.

    Args:
        log_dir: Directory to store log files. If None, uses ~/.geosmart/logs.
        level: Logging level (default: INFO)

    Returns:
        Path of the active log file
    """
    log_dir = default_log_dir() if log_dir is None else Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / LOG_FILE_NAME

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors in console
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.info("=" * 60)
    root_logger.info(f"{APP_NAME} logging initialized")
    root_logger.info(f"Log file: {log_file}")
    root_logger.info("=" * 60)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance configured with the application's settings
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]

