"""Unified logging for appstrap with console and file output."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER_NAME = "appstrap"

# Log file configuration
LOG_DIR = Path.home() / ".local" / "state" / "appstrap"
LOG_FILE = LOG_DIR / "appstrap.log"


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Set up file logging for an installation run.

    Args:
        log_file: Path to log file (defaults to ~/.local/state/appstrap/appstrap.log)
        verbose: Enable debug-level logging

    Returns:
        Path of the log file actually in use

    Note:
        Calling this twice with the same target reuses the existing handler.
        Falls back to the temp directory if the target is not writable.
    """
    target_log_file = Path(log_file) if log_file else LOG_FILE

    try:
        target_log_file.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target_log_file = Path(tempfile.gettempdir()) / "appstrap.log"

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    # Module loggers inherit this level, so --verbose reaches all of them
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(target_log_file):
            handler.setLevel(level)
            return target_log_file

    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    root_logger.info(f"appstrap logging initialized: {target_log_file}")
    return target_log_file


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with console output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger with Rich console handler

    Note:
        File logging must be enabled separately via setup_file_logging()
    """
    logger = logging.getLogger(name)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    # appstrap.* loggers stay NOTSET and take their level from "appstrap"
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if root_logger.level == logging.NOTSET:
        root_logger.setLevel(logging.INFO)

    in_package = name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")
    if not in_package and logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    return logger
