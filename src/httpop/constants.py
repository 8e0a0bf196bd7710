"""
Library-wide constants for httpop.

This module contains the header names, status code boundaries and network
defaults shared by the request pipeline, the configuration models and the
tests.
"""

# Header names
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_ENCODING = "Content-Encoding"
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_USER_AGENT = "User-Agent"

# Content types
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"

# Text encoding used for request bodies and captured responses
UTF_8 = "UTF-8"

# HTTP status codes
HTTP_STATUS_MULTIPLE_CHOICES = 300
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500
HTTP_STATUS_MAX = 600

# Network defaults
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 60.0
DEFAULT_CONNECT_RETRIES = 2
DEFAULT_BACKOFF_FACTOR = 0.3
DEFAULT_MAX_REDIRECTS = 10
MAX_TIMEOUT_SECONDS = 3600
DEFAULT_USER_AGENT = "httpop/0.1.0"

# Stream handling
DEFAULT_CHUNK_SIZE = 64 * 1024

# Logging
DEFAULT_LOG_FILE_SIZE_BYTES = 10 * 1024 * 1024
MIN_LOG_FILE_SIZE_BYTES = 1024
DEFAULT_LOG_BACKUP_COUNT = 5


def is_redirection(status_code: int) -> bool:
    """Return True for 3xx status codes."""
    return HTTP_STATUS_MULTIPLE_CHOICES <= status_code < HTTP_STATUS_BAD_REQUEST


def is_server_error(status_code: int) -> bool:
    return HTTP_STATUS_INTERNAL_SERVER_ERROR <= status_code < HTTP_STATUS_MAX


def is_error(status_code: int) -> bool:
    """Return True for any status code the pipeline reports as a failure."""
    return status_code >= HTTP_STATUS_BAD_REQUEST
