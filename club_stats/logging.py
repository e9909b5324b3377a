"""Loguru setup for club statistics.

Logs go to stderr and, when a directory is given, to a daily JSON file.
SQLAlchemy and the database layer log through the standard library, so
those records are forwarded into loguru as well.

Example:
    >>> from club_stats.logging import setup_logging, get_logger, SUCCESS
    >>> setup_logging(level="DEBUG")
    >>> log = get_logger(__name__)
    >>> log.info(f"{SUCCESS} Ranked {len(players)} players for club {club_id}")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

# Status tags prefixed to messages that close out a fetch
SUCCESS = "\033[92m[SUCCESS]\033[0m"
FAIL = "\033[91m[FAIL]\033[0m"
WARN = "\033[93m[WARN]\033[0m"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_NAME = "club_stats_{time:YYYY-MM-DD}.log"


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    level: str = "INFO",
    log_dir: str | Path | None = "logs",
    rotation: str = "1 day",
    retention: str = "30 days",
    serialize: bool = True,
) -> None:
    """Replace any configured sinks with the club statistics ones.

    Args:
        level: Minimum level for every sink.
        log_dir: Directory for the daily log file. ``None`` logs to the
            console only.
        rotation: Loguru rotation rule for the file sink.
        retention: Loguru retention rule for the file sink.
        serialize: Write the file sink as JSON lines.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        logger.add(
            path / FILE_NAME,
            level=level,
            rotation=rotation,
            retention=retention,
            serialize=serialize,
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str) -> Any:
    """Return the loguru logger bound to ``name``."""
    return logger.bind(name=name)


__all__ = ["get_logger", "logger", "setup_logging", "SUCCESS", "FAIL", "WARN"]
