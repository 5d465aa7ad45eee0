"""Structured logging setup."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with a level filter and contextvar merging.

    Args:
        level: Minimum log level name (e.g. "INFO", "DEBUG").
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )
