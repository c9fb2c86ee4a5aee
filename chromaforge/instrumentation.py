"""Logging setup for ChromaForge."""

import logging
import sys
from typing import Optional

import structlog

from chromaforge.settings import get_settings


def setup_logging(level: Optional[str] = None, log_json: Optional[bool] = None) -> None:
    """Configure structlog. Arguments left as None fall back to settings."""
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if log_json is None else log_json

    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
