"""Logging configuration with Rich formatting.

This module provides colored, structured logging using the Rich library
for the installer and CLI output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: int = logging.INFO,
    show_path: bool = False,
    show_time: bool = True,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Configure the root logger with Rich formatting.

    Args:
        level: Logging level (default: INFO).
        show_path: Show file path in log messages (default: False).
        show_time: Show timestamp in log messages (default: True).
        rich_tracebacks: Use Rich for traceback formatting (default: True).
        console: Optional Rich Console instance (default: creates new one).
    """
    if console is None:
        console = Console(stderr=True)

    handler = RichHandler(
        console=console,
        show_path=show_path,
        show_time=show_time,
        rich_tracebacks=rich_tracebacks,
        markup=True,
        show_level=True,
        level=level,
        omit_repeated_times=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


def configure_module_logger(
    module_name: str,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Configure a module-specific logger with its own Rich handler.

    Args:
        module_name: Module name (typically __name__).
        level: Logging level.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(level)
    logger.handlers.clear()

    console = Console(stderr=True, legacy_windows=False)
    handler = RichHandler(
        console=console,
        show_path=False,
        show_time=True,
        rich_tracebacks=True,
        markup=True,
        show_level=True,
        level=logging.NOTSET,  # Allow logger to control filtering
        omit_repeated_times=False,
        keywords=["cmake", "ninja", "bldr-saucer", "bundle"],
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def set_package_level(level: int) -> None:
    """Apply *level* to every logger under the ``bldr_saucer`` namespace."""
    logging.getLogger("bldr_saucer").setLevel(level)
    for name, existing in logging.root.manager.loggerDict.items():
        if name.startswith("bldr_saucer.") and isinstance(existing, logging.Logger):
            existing.setLevel(level)
