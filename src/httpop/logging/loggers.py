"""
Enhanced logger classes with correlation IDs and structured context.

Provides HttpOpLogger with correlation tracking and context management.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional
from uuid import uuid4


class HttpOpLogger:
    """Logger wrapper that stamps every record with a correlation id and context."""

    def __init__(self, name: str, correlation_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or str(uuid4())
        self.extra_context: Dict[str, Any] = {}

    def _log(self, level: int, msg: str, extra: Optional[Dict[str, Any]] = None, exc_info=None, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        extra = extra or {}
        extra["correlation_id"] = self.correlation_id
        if self.extra_context:
            extra["extra_context"] = self.extra_context.copy()

        if kwargs:
            if "extra_context" not in extra:
                extra["extra_context"] = {}
            extra["extra_context"].update(kwargs)

        self.logger.log(level, msg, extra=extra, exc_info=exc_info)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def debug(self, msg: str, **kwargs):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)

    def add_context(self, **kwargs):
        """Add persistent context to this logger."""
        self.extra_context.update(kwargs)

    def clear_context(self):
        self.extra_context.clear()

    def with_context(self, **kwargs) -> "HttpOpLogger":
        """Create a copy of this logger with additional context."""
        new_logger = HttpOpLogger(self.logger.name, self.correlation_id)
        new_logger.extra_context = self.extra_context.copy()
        new_logger.extra_context.update(kwargs)
        return new_logger

    @contextmanager
    def temp_context(self, **kwargs):
        """Context manager for temporary context (keyword arguments)."""
        original_context = self.extra_context.copy()
        self.extra_context.update(kwargs)
        try:
            yield self
        finally:
            self.extra_context = original_context
