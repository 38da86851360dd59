"""
Logging — Scan and Render Diagnostics

proxylens itself only logs through module loggers under the "proxylens"
namespace and never installs handlers. Hosts that want the diagnostics
(budget overruns, rejected highlight patterns, unrenderable signal
values) call setup_logging() once.

Context travels in the record's extra dict. Only the keys listed in
CONTEXT_FIELDS are emitted:

    logger.warning(
        "Highlight scan budget exceeded",
        extra={"pattern": "a+", "matches": 12, "duration_ms": 251.3},
    )

JSON output puts them at the top level of the line; text output appends
them as key=value pairs.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from proxylens.config import settings

NAMESPACE = "proxylens"

CONTEXT_FIELDS = (
    # highlighting
    "pattern", "flags", "matches", "body_length", "duration_ms",
    # signal formatting
    "kind", "key", "depth",
    # failures
    "error", "error_type",
)


def _context(record: logging.LogRecord) -> dict:
    """Known context fields set on the record, in CONTEXT_FIELDS order."""
    found = {}
    for name in CONTEXT_FIELDS:
        val = getattr(record, name, None)
        if val is not None:
            found[name] = val
    return found


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context(record))

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Single-line text for local runs, context appended as key=value."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{k}={v!r}" for k, v in _context(record).items())
        return f"{line} [{pairs}]" if pairs else line


def setup_logging(fmt: str | None = None, level: str | None = None) -> logging.Logger:
    """
    Attach a stdout handler to the proxylens logger.

    Args:
        fmt: "json" or "text". Defaults to settings.LOG_FORMAT.
        level: Level name. Defaults to settings.LOG_LEVEL.
    """
    package_logger = logging.getLogger(NAMESPACE)
    level_name = (level or settings.LOG_LEVEL).upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Repeated calls replace the handler instead of stacking duplicates
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or settings.LOG_FORMAT).lower() == "text":
        handler.setFormatter(TextFormatter())
    else:
        handler.setFormatter(JSONFormatter())
    package_logger.addHandler(handler)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a proxylens component, e.g. get_logger("highlighter")."""
    return logging.getLogger(f"{NAMESPACE}.{name}")
