"""
Configuration models for httpop.

Pydantic models that validate the transport defaults, the logging setup and
the per-service credentials used by the default authenticator.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from httpop.constants import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_CONNECT_RETRIES,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_FILE_SIZE_BYTES,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    MAX_TIMEOUT_SECONDS,
    MIN_LOG_FILE_SIZE_BYTES,
)


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class AuthScheme(str, Enum):
    """Supported HTTP authentication schemes."""

    BASIC = "basic"
    DIGEST = "digest"


class TransportConfig(BaseModel):
    """Settings for sessions the library creates on the caller's behalf."""

    connect_timeout: float = Field(
        DEFAULT_CONNECT_TIMEOUT, gt=0, le=MAX_TIMEOUT_SECONDS,
        description="Connection timeout in seconds",
    )
    read_timeout: float = Field(
        DEFAULT_READ_TIMEOUT, gt=0, le=MAX_TIMEOUT_SECONDS,
        description="Read timeout in seconds",
    )
    connect_retries: int = Field(
        DEFAULT_CONNECT_RETRIES, ge=0, le=10,
        description="Socket-level connect retries performed by urllib3",
    )
    backoff_factor: float = Field(
        DEFAULT_BACKOFF_FACTOR, ge=0, le=10,
        description="Backoff factor between connect retries",
    )
    max_redirects: int = Field(
        DEFAULT_MAX_REDIRECTS, ge=0, le=100,
        description="Maximum number of redirects followed by the transport",
    )
    verify_tls: bool = Field(True, description="Verify TLS certificates")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header value")

    @property
    def timeout(self) -> Tuple[float, float]:
        """(connect, read) tuple in the form requests expects."""
        return (self.connect_timeout, self.read_timeout)


class LoggingSettingsConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Logging level")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        DEFAULT_LOG_BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(
                    f"output must contain only: {', '.join(sorted(valid_outputs))}"
                )
        return v


class ServiceCredentialsConfig(BaseModel):
    """Credentials for one service, matched by URI prefix."""

    username: str = Field(..., description="User name")
    password: str = Field(..., description="Password")
    scheme: AuthScheme = Field(AuthScheme.BASIC, description="Authentication scheme")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if len(v.strip()) == 0:
            raise ValueError("username must not be empty")
        return v


class HttpOpConfig(BaseModel):
    """Main httpop configuration model."""

    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingSettingsConfig = Field(default_factory=LoggingSettingsConfig)
    services: Dict[str, ServiceCredentialsConfig] = Field(
        default_factory=dict,
        description="Credentials keyed by service URI prefix",
    )

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }

    @model_validator(mode="after")
    def validate_service_uris(self) -> "HttpOpConfig":
        for service_uri in self.services:
            if not service_uri.startswith(("http://", "https://")):
                raise ValueError(
                    f"service URI must start with http:// or https://: {service_uri}"
                )
            if not urlsplit(service_uri).hostname:
                raise ValueError(f"service URI has no host: {service_uri}")
        return self


class HttpOpSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    httpop_config_file: Optional[str] = Field(None, alias="HTTPOP_CONFIG_FILE")

    # Transport settings
    httpop_connect_timeout: Optional[float] = Field(None, alias="HTTPOP_CONNECT_TIMEOUT")
    httpop_read_timeout: Optional[float] = Field(None, alias="HTTPOP_READ_TIMEOUT")
    httpop_connect_retries: Optional[int] = Field(None, alias="HTTPOP_CONNECT_RETRIES")
    httpop_max_redirects: Optional[int] = Field(None, alias="HTTPOP_MAX_REDIRECTS")
    httpop_verify_tls: Optional[bool] = Field(None, alias="HTTPOP_VERIFY_TLS")
    httpop_user_agent: Optional[str] = Field(None, alias="HTTPOP_USER_AGENT")

    # Logging settings
    httpop_logging_level: Optional[str] = Field(None, alias="HTTPOP_LOGGING_LEVEL")
    httpop_logging_format: Optional[str] = Field(None, alias="HTTPOP_LOGGING_FORMAT")
    httpop_logging_output: Optional[str] = Field(None, alias="HTTPOP_LOGGING_OUTPUT")
    httpop_logging_file_path: Optional[str] = Field(None, alias="HTTPOP_LOGGING_FILE_PATH")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
