"""
Logging utilities for the Neverstale SDK.

The SDK logs through loguru and is silent until an application opts in with
``configure_logging`` (or ``logger.enable("neverstale")``).

Author: Neverstale
Date: 2026-10-19
"""

import sys
from contextlib import suppress
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Sinks added by configure_logging; handlers added by the host are left alone
_handler_ids: list[int] = []


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    format: Optional[str] = None,
) -> None:
    """
    Enable and configure SDK logging.

    Calling it again replaces the sinks from the previous call. Sinks the
    application registered on the loguru logger itself are not touched.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file
        rotation: Log rotation size/time
        retention: Log retention period
        format: Log format string
    """
    for handler_id in _handler_ids:
        # Already gone if the application called logger.remove() itself
        with suppress(ValueError):
            logger.remove(handler_id)
    _handler_ids.clear()
    logger.enable("neverstale")

    format = format or DEFAULT_FORMAT

    _handler_ids.append(logger.add(sys.stderr, format=format, level=level, colorize=True))

    if log_file:
        _handler_ids.append(logger.add(
            log_file,
            format=format,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        ))
