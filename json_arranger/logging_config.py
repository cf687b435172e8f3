"""
Logging setup for the app: one console handler on the `json_arranger`
logger, plus an optional log file.
"""
from __future__ import annotations

import logging
import logging.config
from typing import Optional, Union

LOGGER_NAME = "json_arranger"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Accept `logging.DEBUG` or names like "debug"; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def build_logging_config(level: int, log_file: Optional[str] = None) -> dict:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "short",
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "short",
            "filename": log_file,
            "mode": "w",
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"short": {"format": LOG_FORMAT, "datefmt": "%H:%M:%S"}},
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {"level": level, "handlers": list(handlers), "propagate": False},
        },
    }


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    # dictConfig replaces the logger's handlers, so Gradio reloads do not stack them
    logging.config.dictConfig(build_logging_config(resolve_level(level), log_file))
    logger = logging.getLogger(LOGGER_NAME)
    logger.debug("Logging initialized.")
    return logger
