"""Application logging configuration."""

from __future__ import annotations

import logging.config
from typing import Optional

from spotifart.config import settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging with a single stderr handler.

    *level* defaults to ``settings.log_level``.  Safe to call more than once;
    the last call wins.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"plain": {"format": _FORMAT}},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "plain",
                },
            },
            "root": {
                "level": (level or settings.log_level).upper(),
                "handlers": ["default"],
            },
            "loggers": {
                # httpx logs every request at INFO; keep it out of the way.
                "httpx": {"level": "WARNING"},
            },
        }
    )
