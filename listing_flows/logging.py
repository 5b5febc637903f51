"""Logging setup for listing-flows.

Detection, validation and audit log records may carry listing context
passed through ``extra=``: ``listing_id``, ``flow_type``, ``signal`` and
``step_id``. The JSON formatter emits those as top-level keys so audit
logs can be filtered per listing or per step.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

CONTEXT_FIELDS = ("listing_id", "flow_type", "signal", "step_id")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger for scripts and audit runs.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        ``standard`` (pipe-separated lines) or ``json``.
    stream : TextIO | None
        Log destination, stderr by default so reports on stdout stay clean.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter = (
        JsonFormatter() if format_type == "json" else logging.Formatter(STANDARD_FORMAT, DATE_FORMAT)
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    logging.getLogger("listing_flows").setLevel(log_level)
    # Faker logs every provider lookup at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def listing_context(record: logging.LogRecord) -> dict[str, Any]:
    """Listing context attached to a log record."""
    context = {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}
    extra = getattr(record, "extra", None)
    if isinstance(extra, dict):
        context.update(extra)
    return context


class JsonFormatter(logging.Formatter):
    """One JSON object per line, listing context included."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(listing_context(record))
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Rupee amounts stay readable
        return json.dumps(log_data, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger for a listing_flows module (pass ``__name__``)."""
    return logging.getLogger(name)
