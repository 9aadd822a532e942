"""Unified logging for create-xeiculy-app with console and optional file output."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

ROOT_LOGGER = "create_xeiculy_app"

# Track if file logging has been set up
_file_logging_configured = False


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Optional[Path]:
    """Set up file logging for a scaffold run.

    Args:
        log_file: Path to log file. Nothing is written to disk when omitted.
        verbose: Enable debug-level logging

    Returns:
        Path of the log file, or None when file logging is disabled
    """
    global _file_logging_configured

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if _file_logging_configured or not log_file:
        return None

    target_log_file = Path(log_file).expanduser()
    target_log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    _file_logging_configured = True
    root_logger.info(f"Logging initialized: {target_log_file}")
    return target_log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package root with a Rich console handler.

    The console handler only shows warnings unless verbose logging is enabled
    through setup_file_logging(); operator-facing output goes through the
    print helpers in cli_support instead.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)

    # Only add console handler if not already present
    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.setLevel(logging.WARNING)
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)

    return logging.getLogger(name)
