"""Logging setup for the API process."""

from __future__ import annotations

import logging

from thriftdesk.config import get_settings

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_level: str | None = None) -> None:
    """Install a single stream handler on the root logger."""

    settings = get_settings()
    level_name = (log_level or settings.log_level or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # SQLAlchemy echoes every statement at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s", level_name)


__all__ = ["configure_logging"]
