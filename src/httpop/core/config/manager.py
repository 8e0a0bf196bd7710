"""
Configuration manager for httpop.

Loads the TOML configuration file, applies HTTPOP_* environment overrides and
holds the process-wide configuration used when callers do not supply their
own session or context.
"""

import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import ValidationError

from httpop.exceptions.config import (
    ConfigurationValidationError,
    InvalidConfigurationError,
)
from httpop.logging import LoggingConfig, configure_logging

from .models import HttpOpConfig, HttpOpSettings


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""
    config_section: Dict[str, Any]
    settings: HttpOpSettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply setting if it's set in environment."""
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value

    def apply_string_if_set(self, setting_name: str, config_key: str) -> None:
        """Apply string setting if it's set and non-empty."""
        value = getattr(self.settings, setting_name, None)
        if value:
            self.config_section[config_key] = value


class ConfigManager:
    """Loads and validates httpop configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to a TOML config file. If None, HTTPOP_CONFIG_FILE
                is consulted, then ~/.config/httpop/config.toml.
        """
        self._settings = HttpOpSettings()
        if config_file:
            self.config_file = Path(config_file)
        elif self._settings.httpop_config_file:
            self.config_file = Path(self._settings.httpop_config_file)
        else:
            self.config_file = Path.home() / ".config" / "httpop" / "config.toml"

        self._config: Optional[HttpOpConfig] = None

    def load_config(self) -> HttpOpConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_file.exists():
            config_data = self._load_toml_file()

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = HttpOpConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            ) from e

        return self._config

    def _load_toml_file(self) -> Dict[str, Any]:
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(self.config_file), f"Invalid TOML syntax: {e}", "valid TOML format"
            ) from e
        except OSError as e:
            raise InvalidConfigurationError(
                str(self.config_file), f"Unreadable file: {e}", "a readable TOML file"
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        settings = self._settings

        transport = config_data.setdefault("transport", {})
        override = EnvironmentOverride(transport, settings)
        override.apply_if_set("httpop_connect_timeout", "connect_timeout")
        override.apply_if_set("httpop_read_timeout", "read_timeout")
        override.apply_if_set("httpop_connect_retries", "connect_retries")
        override.apply_if_set("httpop_max_redirects", "max_redirects")
        override.apply_if_set("httpop_verify_tls", "verify_tls")
        override.apply_string_if_set("httpop_user_agent", "user_agent")

        logging_config = config_data.setdefault("logging", {})
        override = EnvironmentOverride(logging_config, settings)
        override.apply_string_if_set("httpop_logging_level", "level")
        override.apply_string_if_set("httpop_logging_format", "format")
        override.apply_string_if_set("httpop_logging_file_path", "file_path")
        if settings.httpop_logging_output:
            # Comma-separated outputs
            logging_config["output"] = [
                o.strip() for o in settings.httpop_logging_output.split(",")
            ]

        return config_data

    def reset(self) -> None:
        """Forget the cached configuration so the next load re-reads it."""
        self._config = None


_config_lock = threading.Lock()
_current_config: Optional[HttpOpConfig] = None


def get_config() -> HttpOpConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _current_config
    with _config_lock:
        if _current_config is None:
            _current_config = ConfigManager().load_config()
        return _current_config


def set_config(config: Optional[HttpOpConfig]) -> None:
    """Replace the process-wide configuration.

    Passing None makes the next get_config() reload from file and environment.
    """
    global _current_config
    with _config_lock:
        _current_config = config


def apply_logging_config(config: Optional[HttpOpConfig] = None) -> None:
    """Configure the httpop logger from the logging section of a configuration."""
    config = config or get_config()
    section = config.logging
    configure_logging(
        LoggingConfig(
            level=section.level.value,
            format_type=section.format,
            output=section.output,
            file_path=section.file_path,
            max_file_size=section.max_file_size,
            backup_count=section.backup_count,
        )
    )
