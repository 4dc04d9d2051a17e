"""Logging setup.

Modules log through ``logging.getLogger(__name__)`` with event-style messages
and structured fields in ``extra``:

    logger.info("backend_attempt_failed", extra={"backend": "openai", "error": "..."})

Production writes one JSON object per line to stdout; every other environment
gets readable lines on stderr with the extra fields appended.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else came from ``extra``
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

_NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "openai", "google_genai")


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_FIELDS and not key.startswith("_")}


class JSONFormatter(logging.Formatter):
    """Single-line JSON: timestamp, level, logger, message, then the extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class DevFormatter(logging.Formatter):
    """``[HH:MM:SS] LEVEL logger: message [key=value ...]``"""

    def format(self, record: logging.LogRecord) -> str:
        extras = " ".join(f"{key}={value}" for key, value in record_extras(record).items())
        line = f"[{self.formatTime(record, '%H:%M:%S')}] {record.levelname:<8} {record.name}: {record.getMessage()}"
        if extras:
            line += f" [{extras}]"
        if record.exc_info and record.exc_info[1]:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: str | int = logging.INFO, environment: str = "development") -> None:
    """Replace the root handlers with one stream handler for ``environment``."""
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if environment == "production":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(DevFormatter())
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["DevFormatter", "JSONFormatter", "configure_logging", "record_extras"]
