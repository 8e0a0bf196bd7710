"""
Standardized error message templates and error codes.

Keeps the wording of pipeline failures consistent across the exception modules.
"""


class ErrorMessageTemplates:
    """Standardized error message templates for consistent formatting."""

    HTTP_STATUS = "HTTP {status_code} {reason}"
    HTTP_STATUS_FOR_URI = "HTTP {status_code} {reason} ({uri})"
    TRANSPORT_FAILED = "Transport failure: {details}"
    TRANSPORT_FAILED_FOR_URI = "Transport failure for {uri}: {details}"

    CONFIG_INVALID = "Invalid configuration for '{field}': got {value!r}, expected {expected}"
    CONFIG_VALIDATION = "Configuration validation failed:"
    INVALID_REQUEST_URI = "Invalid request URI: {uri!r}"
    NULL_REQUEST_URI = "Null request URI"

    INTERNAL_ERROR = "Internal error: {details}"


class ErrorCodes:
    """Standardized error codes for consistent error categorization."""

    # HTTP errors (HTTP_xxx)
    HTTP_CLIENT_ERROR = "HTTP_001"
    HTTP_SERVER_ERROR = "HTTP_002"
    HTTP_TRANSPORT_ERROR = "HTTP_003"

    # Configuration errors (CONFIG_xxx)
    CONFIG_INVALID = "CONFIG_001"
    CONFIG_VALIDATION_ERROR = "CONFIG_002"
    CONFIG_INVALID_URI = "CONFIG_003"

    # Internal errors (INTERNAL_xxx)
    INTERNAL_ERROR = "INTERNAL_001"
