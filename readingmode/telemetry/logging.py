"""Logging configuration for extraction services."""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOG_LEVEL_ENV = "READINGMODE_LOG_LEVEL"
LOG_FORMAT_ENV = "READINGMODE_LOG_FORMAT"

# Attributes present on every LogRecord; anything else arrived through ``extra``.
_RESERVED_FIELDS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_FIELDS or key.startswith("_"):
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        return json.dumps(payload, ensure_ascii=False, default=str)


def _resolve_level(level: Optional[str]) -> int:
    level_name = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    resolved = logging.getLevelName(level_name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Handler:
    """Install a single stream handler on the root logger.

    ``level`` and ``fmt`` default to ``READINGMODE_LOG_LEVEL`` and
    ``READINGMODE_LOG_FORMAT``; ``fmt`` accepts ``plain`` or ``json``.
    """

    format_name = (fmt or os.getenv(LOG_FORMAT_ENV, "plain")).lower()
    structured = format_name in {"json", "structured"}

    handler = logging.StreamHandler()
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    root_logger.handlers = [handler]
    return handler


__all__ = ["configure_logging", "StructuredFormatter"]
