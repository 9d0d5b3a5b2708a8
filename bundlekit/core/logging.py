"""
Structured logging configuration for bundlekit.

Library code only obtains loggers through `get_logger`; it never configures
output. Applications embedding bundlekit call `setup_logging` once at startup
(it is exported as `bundlekit.setup_logging`). Records render for humans on a
console and as JSON lines when the output is collected by another process.
"""

from __future__ import annotations

import logging
import sys

import structlog
from rich.console import Console
from rich.logging import RichHandler

from .config import Config, get_config


def _use_console_renderer(config: Config) -> bool:
    if config.log_format == "auto":
        return sys.stderr.isatty()
    return config.log_format == "console"


def setup_logging(config: Config | None = None) -> None:
    """Configure structured logging for an application using bundlekit.

    Args:
        config: Optional configuration. If None, the environment-derived
            configuration from `get_config()` is used.
    """
    config = config or get_config()
    log_level = config.log_level
    level = getattr(logging, log_level, logging.INFO)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=log_level == "DEBUG",
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if _use_console_renderer(config):
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)
