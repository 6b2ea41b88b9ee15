"""
Logging configuration.
Call configure_logging() once at startup, before the first log record is emitted.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger with a single console handler."""
    log_level = (level or settings.LOG_LEVEL).upper()

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": log_level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
    })

    # SQL echo is controlled by DEBUG on the engine; keep its logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
