"""
Logging configuration for UPV CLI.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from upv.core.config import settings


# Log records go to stderr so command output stays pipeable
console = Console(stderr=True)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    rich_output: bool = True,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        rich_output: Use rich formatting for console output
    """
    # Use provided level or from settings
    level = log_level or settings.log_level
    log_file = log_file or settings.log_file

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove handlers installed by a previous call
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_upv_handler", False):
            root_logger.removeHandler(handler)

    # Console handler with rich formatting
    if rich_output:
        console_handler = RichHandler(
            console=console,
            show_time=settings.debug,
            show_path=settings.debug,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=settings.debug,
        )
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_handler.setFormatter(formatter)

    console_handler.setLevel(level)
    console_handler._upv_handler = True
    root_logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        file_handler._upv_handler = True
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
