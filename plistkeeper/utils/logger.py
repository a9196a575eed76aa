"""
Logging configuration for plistkeeper.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime

from ..config.defaults import APP_NAME, LOG_DIR_NAME
from ..config.roots import get_cache_root


def setup_logging(
    log_level: str = "INFO",
    log_file: bool = False,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure application logging.

    Only the command line entry point calls this; library code just logs
    through module loggers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: If True, also log to a timestamped file
        log_dir: Directory for the log file, defaults to get_log_dir()

    Returns:
        Root logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    # Console handler on stderr, stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = log_dir or get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = log_dir / f"{APP_NAME}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file_path}")

    return logger


def get_log_dir() -> Path:
    """
    Get the log directory.

    Returns:
        <cache-root>/logs
    """
    return get_cache_root() / LOG_DIR_NAME
