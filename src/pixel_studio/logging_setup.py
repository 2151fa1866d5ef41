"""structlog configuration shared by the editor session and scripts."""

from __future__ import annotations

import logging

import structlog

from pixel_studio.config import settings


def configure_logging(env: str | None = None, level: str | None = None) -> None:
    """Configure structlog processors for the given environment.

    Development gets the coloured console renderer; every other
    environment emits one JSON object per line.
    """
    env = env or settings.APP_ENV
    level_name = (level or settings.LOG_LEVEL).upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        min_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.dev.ConsoleRenderer()
                if env == "development"
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
