"""
Logging service for PixelPaint.

This module provides centralized logging configuration with console and file output.
Log files are stored in ~/.local/share/pixelpaint/logs/ by default.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


# Default log directory following XDG Base Directory Specification
DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "pixelpaint" / "logs"

# Module-level flag to track if logging has been set up
_logging_initialized = False


def parse_log_level(level: Union[int, str]) -> int:
    """
    Convert a level name such as "DEBUG" (or a numeric level) to an int.

    Unknown names fall back to logging.INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_to_file: bool = True,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure the logging system for PixelPaint.

    Args:
        log_level: The logging level (e.g., logging.DEBUG or "DEBUG").
        log_to_file: Whether to also log to a file.
        log_dir: Directory for log files. Defaults to ~/.local/share/pixelpaint/logs/

    This function should be called once at application startup.
    """
    global _logging_initialized

    if _logging_initialized:
        return

    level = parse_log_level(log_level)

    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console handler - always enabled
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    if log_to_file:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)

            log_filename = f"pixelpaint_{datetime.now().strftime('%Y%m%d')}.log"
            log_path = log_dir / log_filename

            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(log_format, date_format))
            root_logger.addHandler(file_handler)

        except (OSError, PermissionError) as e:
            # If we can't create the log file, just log to console
            console_handler.setLevel(logging.WARNING)
            root_logger.warning(f"Could not create log file: {e}. Logging to console only.")

    _logging_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name for the logger, typically __name__ of the calling module.

    Returns:
        A configured Logger instance.

    Usage:
        from pixelpaint.services.logging_service import get_logger
        self._logger = get_logger(__name__)
        self._logger.info(f"Editor initialized with a {width}x{height} surface")
    """
    return logging.getLogger(name)


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of the root logger and all of its handlers."""
    value = parse_log_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(value)
    for handler in root_logger.handlers:
        handler.setLevel(value)
