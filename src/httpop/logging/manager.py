"""
Centralized logging configuration and management.

Provides the LoggingManager singleton for configuring and managing loggers.
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig
from .formatters import (
    StructuredFormatter,
    create_console_formatter,
    create_rich_handler,
)
from .loggers import HttpOpLogger

LIBRARY_LOGGER_NAME = "httpop"


class LoggingManager:
    """Centralized logging configuration and management.

    Handlers are attached to the ``httpop`` logger rather than the root
    logger so that configuring the library never rewires an application's
    own logging.
    """

    _instance = None
    _initialized = False
    _lock = threading.Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.config: Optional[LoggingConfig] = None
            self.handlers: List[logging.Handler] = []
            self._initialized = True

    def configure(self, config: LoggingConfig):
        """Configure the library logger."""
        with self._lock:
            self.config = config

            library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
            for handler in self.handlers:
                library_logger.removeHandler(handler)
                handler.close()
            self.handlers.clear()

            library_logger.setLevel(config.level)

            for output in config.output:
                if output == "console":
                    self._add_console_handler(library_logger, config)
                elif output == "file":
                    self._add_file_handler(library_logger, config)

    def reset(self):
        """Remove handlers installed by configure()."""
        with self._lock:
            library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
            for handler in self.handlers:
                library_logger.removeHandler(handler)
                handler.close()
            self.handlers.clear()
            library_logger.setLevel(logging.NOTSET)
            self.config = None

    def _add_console_handler(self, logger: logging.Logger, config: LoggingConfig):
        if config.format_type == "rich":
            handler = create_rich_handler()
        elif config.format_type == "json":
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                StructuredFormatter(config.service_name, config.version)
            )
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(create_console_formatter())

        handler.setLevel(config.level)
        logger.addHandler(handler)
        self.handlers.append(handler)

    def _add_file_handler(self, logger: logging.Logger, config: LoggingConfig):
        """Add file handler with rotation."""
        file_path = config.file_path or Path("logs/httpop.log")
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )

        if config.format_type == "json":
            handler.setFormatter(
                StructuredFormatter(config.service_name, config.version)
            )
        else:
            handler.setFormatter(create_console_formatter())

        handler.setLevel(config.level)
        logger.addHandler(handler)
        self.handlers.append(handler)

    def get_logger(
        self, name: str, correlation_id: Optional[str] = None
    ) -> HttpOpLogger:
        return HttpOpLogger(name, correlation_id)


# Global logging manager instance
logging_manager = LoggingManager()


def configure_logging(config: LoggingConfig):
    """Configure the global logging system."""
    logging_manager.configure(config)
