"""Structured Logging: JSON formatter and setup for catalog observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (table, deleted, check_point, ...) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - setup_logging called once on startup by open_catalog
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "table", "deleted", "fixed", "maximum", "check_point",
    "error_code", "migrations",
)
HANDLER_MARK = "_quickpizza_handler"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the catalog process. Safe to call more than once."""
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if any(getattr(h, HANDLER_MARK, False) for h in logging.root.handlers):
        return
    handler = logging.StreamHandler()
    setattr(handler, HANDLER_MARK, True)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
