"""
Logging — structlog setup.
"""

from __future__ import annotations

import logging

import structlog

from digigoods._config import Settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the process. Call once at startup."""
    settings = settings or Settings()
    level = logging.getLevelName(settings.log_level.upper())

    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


__all__ = ("configure_logging",)
