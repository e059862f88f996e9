"""Logging utilities for the Apple docs search service."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import orjson

_DEFAULT_LEVEL = os.environ.get("ADOCS_LOG_LEVEL", "INFO")
_DEFAULT_JSON = os.environ.get("ADOCS_LOG_JSON", "1").lower() not in {"0", "false", "no"}


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON; ``extra`` keys prefixed ``ctx_`` are kept."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - thin wrapper
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                payload[key[4:]] = value
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(
    level: str | int = _DEFAULT_LEVEL,
    use_json: bool = _DEFAULT_JSON,
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger; logs go to stderr unless a stream is given."""
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.handlers = [handler]


def get_logger(name: str = "apple_docs") -> logging.Logger:
    """Return configured logger, configuring root on first call."""
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "configure_logging", "get_logger"]
