"""Logging configuration for the gatehouse_core logger tree."""

from __future__ import annotations

import json
import logging
from datetime import datetime

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Attach a stream handler to the ``gatehouse_core`` logger.

    Replaces any handler installed by a previous call, so it is safe to call
    more than once.
    """
    logger = logging.getLogger("gatehouse_core")
    logger.setLevel(_LEVELS.get(level, logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_gatehouse", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT))
    handler._gatehouse = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
