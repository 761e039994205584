"""
Centralized logging configuration for the SMAPI instance manager.

This module provides a configured logger that can be easily imported
and used throughout the application.

Usage:
    from utils.monitoring import get_logger

    logger = get_logger(__name__)
    logger.info("Registry loaded")
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional


# ============================================================================
# Configuration
# ============================================================================

DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "SMAPI_MANAGER_LOG_LEVEL"


def resolve_log_level(default: int = DEFAULT_LOG_LEVEL) -> int:
    """
    Read the log level from SMAPI_MANAGER_LOG_LEVEL.

    Accepts level names ("DEBUG", "warning") or numeric values. Unknown
    values fall back to the default.
    """
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


# ============================================================================
# Logger Setup
# ============================================================================

def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_file: Optional[Path] = None,
    console: bool = True
) -> None:
    """
    Configure the root logger with console and/or file handlers.

    The curses interface owns stdout while it runs, so the entry point calls
    this with console=False and a log file before the screen is taken over.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)
        log_file: Optional path to log file. If None, only console logging is used.
        console: Whether to enable console logging (default: True)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if not console and not log_file:
        # Nothing should reach the terminal, not even logging's lastResort handler
        root_logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
