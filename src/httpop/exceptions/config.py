"""
Configuration-related exceptions.

Raised for caller mistakes that retrying cannot fix: invalid request URIs and
invalid configuration values.
"""

from typing import Any, List, Optional

from .base import ExceptionContext, HttpOpError
from .templates import ErrorCodes, ErrorMessageTemplates


class ConfigurationError(HttpOpError):
    """Base class for configuration-related errors."""
    pass


class InvalidRequestURIError(ConfigurationError):
    """Raised when a request URI is missing or cannot be parsed."""

    def __init__(self, uri: Optional[str], details: Optional[str] = None):
        self.uri = uri
        if uri is None:
            message = ErrorMessageTemplates.NULL_REQUEST_URI
        else:
            message = ErrorMessageTemplates.INVALID_REQUEST_URI.format(uri=uri)
        context = ExceptionContext(
            help_text="Pass an absolute http:// or https:// URI",
            error_code=ErrorCodes.CONFIG_INVALID_URI,
            context={"uri": uri},
            technical_details=details,
        )
        super().__init__(message, context)


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = ErrorMessageTemplates.CONFIG_INVALID.format(
            field=field, value=value, expected=expected
        )
        context = ExceptionContext(
            help_text=f"Check the configuration for '{field}' and ensure it matches: {expected}",
            error_code=ErrorCodes.CONFIG_INVALID,
        )
        super().__init__(message, context)


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = ErrorMessageTemplates.CONFIG_VALIDATION
        for error in errors:
            message += f"\n  - {error}"
        context = ExceptionContext(
            help_text="Fix the listed configuration problems and try again",
            error_code=ErrorCodes.CONFIG_VALIDATION_ERROR,
            context={"error_count": len(errors)},
        )
        super().__init__(message, context)
