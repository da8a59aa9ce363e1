"""
Logging configuration using loguru.

The engine logs through loguru but stays silent by default: ``fincore``
disables its own logger on import so embedding applications are not flooded
with per-year projection traces. Call setup_logging() at app startup to turn
it on, or use ``logger.enable("fincore")`` directly.
"""

import sys

from loguru import logger

from ..config import Config, get_config

LIBRARY_NAME = "fincore"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> <cyan>{name}</cyan> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru sinks and enable fincore's log output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string for the console sink.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}",
            rotation=rotation,
            retention=retention,
        )

    logger.enable(LIBRARY_NAME)


def silence_library() -> None:
    """Disable fincore's log records without touching the caller's sinks."""
    logger.disable(LIBRARY_NAME)


def setup_logging_from_config(config: Config | None = None) -> None:
    """Configure logging from the ``logging`` section of a Config (the global one by default)."""
    settings = (config or get_config()).validated().logging
    setup_logging(
        level=settings.level,
        log_file=settings.file,
        rotation=settings.rotation,
        retention=settings.retention,
    )
