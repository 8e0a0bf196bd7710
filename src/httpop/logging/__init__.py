"""
httpop Logging Package

Structured logging for the request pipeline:
- formatters: Log formatting with request context (JSON, console, rich)
- loggers: Logger wrapper with correlation IDs
- config: Logging configuration
- manager: Centralized logging setup and management

The library only installs handlers when configure_logging() is called.
"""

import logging

from .config import LoggingConfig, create_default_config
from .formatters import ContextFormatter, StructuredFormatter, create_console_formatter
from .loggers import HttpOpLogger
from .manager import LIBRARY_LOGGER_NAME, LoggingManager, configure_logging, logging_manager

get_logger = logging_manager.get_logger

# Without configuration, records propagate to whatever the application set up.
logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())

__all__ = [
    "LoggingConfig",
    "create_default_config",
    "LoggingManager",
    "configure_logging",
    "logging_manager",
    "HttpOpLogger",
    "get_logger",
    "ContextFormatter",
    "StructuredFormatter",
    "create_console_formatter",
    "LIBRARY_LOGGER_NAME",
]
