"""Logging configuration for lesson2html."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_PLAIN_FORMAT = "%(levelname)s %(name)s - %(message)s"
_DEBUG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Emit each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: int | str = logging.INFO, *, json_logs: bool = False) -> None:
    """Configure the package logger to write to stderr.

    Replaces handlers installed by an earlier call so repeated CLI runs in
    one process do not duplicate output.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(stream=sys.stderr)
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        fmt = _DEBUG_FORMAT if level <= logging.DEBUG else _PLAIN_FORMAT
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=_DATE_FORMAT))

    package_logger = logging.getLogger("lesson2html")
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
