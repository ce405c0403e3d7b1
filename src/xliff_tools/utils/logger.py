"""
Logging setup for xliff-tools.

Provides:
- Console output through rich's RichHandler
- Optional UTF-8 log file (always at DEBUG)
- Timing helper for long operations

Library modules log through ``logging.getLogger(__name__)``; only the
command line entry point calls ``setup_logger``.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "xliff_tools"

_FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ToolLogger:
    """Logger wrapper with convenience methods."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def debug(self, msg: str, *args, **kwargs):
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self.logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(msg, *args, **kwargs)

    @contextmanager
    def timer(self, operation: str, level: int = logging.DEBUG):
        """
        Context manager for timing operations.

        Usage:
            with logger.timer("Updating strings.xlf"):
                doc.update(nodes, "strings.resx")
        """
        start = time.perf_counter()
        self.logger.log(level, "Starting: %s", operation)
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.logger.log(level, "Completed: %s (took %.2fs)", operation, elapsed)


def parse_level(level: str | int) -> int:
    """Translate ``"DEBUG"``/``"info"``/``10`` into a logging level number."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logger(
    level: str | int = logging.INFO,
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
) -> ToolLogger:
    """
    Configure the ``xliff_tools`` logger hierarchy.

    Args:
        level: Console logging level (name or number)
        log_file: Optional file path for log output
        console: rich console override (stderr by default)

    Returns:
        Configured ToolLogger instance
    """
    level = parse_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
        file_handler.setLevel(logging.DEBUG)  # Log everything to file
        logger.addHandler(file_handler)

    return ToolLogger(logger)
