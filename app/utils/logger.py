"""
utils/logger.py -- Structured logging for the loyalty rewards service.

get_logger(name)                       -> logger, configured on first use
setup_logger(name, level, format_type) -> (re)configure a logger explicitly

Settings come from app.config (LOG_LEVEL, LOG_FORMAT). In "json" mode every
record is one JSON object with timestamp, level, logger, module, function
and message keys; "text" is a plain line format for local runs.
"""
from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from app import config

DEFAULT_LOGGER = "loyalty-rewards"

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s"
_JSON_FIELDS = "%(levelname)s %(name)s %(module)s %(funcName)s %(message)s"
_JSON_RENAMES = {"levelname": "level", "name": "logger", "funcName": "function"}


def _formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JsonFormatter(_JSON_FIELDS, rename_fields=_JSON_RENAMES, timestamp=True)
    return logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logger(
    name: str = DEFAULT_LOGGER,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Attach a single stdout handler to `name`.

    Unknown level names fall back to INFO. The logger does not propagate,
    so uvicorn's root configuration never duplicates our lines.
    """
    level_name = (level or config.LOG_LEVEL).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_formatter(format_type or config.LOG_FORMAT))

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger
