"""Logging configuration using structlog.

Provides structured logging with support for both development
(colored console) and machine-readable (JSON) formats. Logs never go to
stdout, which carries the feed report.
"""

import atexit
import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog

# File opened for log_file; replaced on every reconfigure
_log_file: TextIO | None = None


def close_log_file() -> None:
    """Close the log file opened by configure_logging, if any."""
    global _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None


atexit.register(close_log_file)


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        json_format: If True, output JSON format.
        log_file: Optional file to append logs to instead of stderr. The
            interactive browser sets this so log lines do not tear the screen.
    """
    # Convert string level to logging constant
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    global _log_file
    close_log_file()

    stream: TextIO = sys.stderr
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _log_file = log_file.open("a", encoding="utf-8")
        stream = _log_file

    # Configure standard library logging (httpx logs through it)
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=max(numeric_level, logging.WARNING),
        force=True,
    )

    # Shared processors
    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=log_file is None and stream.isatty())

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name for context.

    Returns:
        Configured structlog logger.
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger
