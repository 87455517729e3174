# src/israstat/adapters/logging_utils.py
import json
import logging
import sys
import time
from typing import Any, Optional, TextIO

from .config import config

# Where new israstat handlers write; None means sys.stdout.
_log_stream: Optional[TextIO] = None


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per line.

    Anything passed as extra={"context": {...}} is merged into the payload,
    so a calculation log line carries its inputs and headline numbers.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": round(time.time(), 3),
            "env": config.ENV,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update(ctx)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # enums, dates and dataclass fields fall back to str()
        return json.dumps(payload, default=str)


def get_logger(name: str, stream: Optional[TextIO] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(stream or _log_stream or sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL.upper())
        logger.propagate = False
    return logger


def route_logs_to(stream: TextIO) -> None:
    """
    Point every israstat JSON handler, existing and future, at `stream`.

    The CLI calls this with sys.stderr so stdout carries only its JSON output.
    """
    global _log_stream
    _log_stream = stream
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith("israstat") or not isinstance(logger, logging.Logger):
            continue
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and isinstance(handler.formatter, JsonLogFormatter):
                handler.setStream(stream)


def log_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Shorthand for logger.log(level, message, extra={"context": context})."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"context": context})
