"""Configuration for httpop: models, environment overrides and the process-wide holder."""

from .manager import ConfigManager, apply_logging_config, get_config, set_config
from .models import (
    AuthScheme,
    HttpOpConfig,
    HttpOpSettings,
    LoggingSettingsConfig,
    LogLevel,
    ServiceCredentialsConfig,
    TransportConfig,
)

__all__ = [
    "ConfigManager",
    "get_config",
    "set_config",
    "apply_logging_config",
    "HttpOpConfig",
    "HttpOpSettings",
    "TransportConfig",
    "LoggingSettingsConfig",
    "ServiceCredentialsConfig",
    "AuthScheme",
    "LogLevel",
]
