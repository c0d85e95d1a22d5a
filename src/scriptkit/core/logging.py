"""Diagnostics logging for scriptkit itself.

These helpers configure the `scriptkit` logger hierarchy, which carries the
library's own diagnostics (lock retries, backend fallbacks). They never touch
the destinations that the log router writes user messages to.
"""

import json
import logging
import os
import sys
from datetime import UTC, datetime

from scriptkit.core.constants import DEFAULT_DIAGNOSTIC_LEVEL, ENV_LOG_LEVEL

_LOG_RECORD_RESERVED_FIELDS = set(logging.makeLogRecord({}).__dict__.keys()) | {"message", "asctime"}
_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_HANDLER_MARKER = "_scriptkit_handler"


def _safe_record_message(record: logging.LogRecord) -> str:
    try:
        return record.getMessage()
    except Exception:
        # Keep logging resilient when message formatting fails (bad placeholders or broken __str__).
        return f"{record.msg!s} [log-message-format-error]"


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured diagnostics.

    Each log record is a single JSON object on one line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _safe_record_message(record),
            "process": record.process,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Custom LogRecord attributes set via logging's `extra`.
        for key, value in record.__dict__.items():
            if key in _LOG_RECORD_RESERVED_FIELDS or key.startswith("_"):
                continue
            log_entry.setdefault(key, value)

        return json.dumps(log_entry, default=str)


def _resolve_level(log_level: str | None) -> int:
    if log_level is None:
        log_level = os.environ.get(ENV_LOG_LEVEL, DEFAULT_DIAGNOSTIC_LEVEL)
    if log_level.upper() not in _VALID_LEVELS:
        print(f"Warning: Invalid log level '{log_level}', using {DEFAULT_DIAGNOSTIC_LEVEL}", file=sys.stderr)
        log_level = DEFAULT_DIAGNOSTIC_LEVEL
    return getattr(logging, log_level.upper())


def setup_logging(log_level: str | None = None, log_format: str = "text") -> logging.Logger:
    """Attach a stderr handler to the `scriptkit` logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "text" (default) or "json"

    Returns:
        The configured `scriptkit` logger

    Priority: 1) Passed parameter, 2) SCRIPTKIT_LOG_LEVEL, 3) Default WARNING.
    Calling it again replaces the handler it installed earlier.
    """
    numeric_level = _resolve_level(log_level)
    logger = logging.getLogger("scriptkit")

    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            handler.close()
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    handler.setLevel(numeric_level)
    setattr(handler, _HANDLER_MARKER, True)

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False
    return logger
