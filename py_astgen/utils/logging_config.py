"""Logging configuration."""

import logging
import sys

import structlog


def configure_logging(level: str = "WARNING", fmt: str = "plain") -> None:
    """
    Configure stdlib logging and structlog for the process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: "json" for machine-readable lines, anything else for console output
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        format="%(message)s", stream=sys.stderr, level=log_level, force=True
    )

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
