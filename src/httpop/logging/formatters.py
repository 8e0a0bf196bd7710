"""
Log formatters.

Records written through HttpOpLogger carry a ``correlation_id`` attribute and
an ``extra_context`` dict; the dispatcher puts the request's sequence number
there as ``request_id``. Both formatters render that context so lines from
one request can be picked out of interleaved output. Records from plain
loggers format normally.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s: %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the request context attached to ``record``, empty if none."""
    context = dict(getattr(record, "extra_context", None) or {})
    correlation_id = getattr(record, "correlation_id", None)
    if correlation_id is not None:
        context.setdefault("correlation_id", correlation_id)
    return context


class ContextFormatter(logging.Formatter):
    """Text formatter that appends the record's context as ``key=value`` pairs.

    The correlation id is dropped when it only repeats the request id.
    """

    def __init__(self, fmt: str = CONSOLE_FORMAT, datefmt: str = CONSOLE_DATE_FORMAT):
        super().__init__(fmt, datefmt)

    def formatMessage(self, record: logging.LogRecord) -> str:
        text = super().formatMessage(record)
        context = record_context(record)
        if "request_id" in context and str(context["request_id"]) == context.get("correlation_id"):
            del context["correlation_id"]
        if not context:
            return text
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{text} ({pairs})"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, service_name: str = "httpop", version: str = "unknown"):
        super().__init__()
        self.service_name = service_name
        self.version = version

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.version,
            "thread": record.threadName,
        }
        entry.update(record_context(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def create_console_formatter() -> logging.Formatter:
    return ContextFormatter()


def create_rich_handler() -> logging.Handler:
    """Rich handler on stderr; time and level are rendered by rich itself."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(ContextFormatter("%(message)s"))
    return handler
