"""
Structured logging for the insights service.

Every module grabs its logger with ``get_logger(__name__)``; all of them
share one stdout handler format and the level configured in Settings.
"""
from __future__ import annotations

import logging
import sys

from src.core.config import get_settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level() -> int:
    return getattr(logging, get_settings().log_level.upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        # uvicorn installs its own root handler; avoid printing twice
        logger.propagate = False
    logger.setLevel(_level())
    return logger
