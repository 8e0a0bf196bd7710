"""
httpop Exception Hierarchy

All failures raised by the request pipeline come from this package.

Exception Hierarchy:
    HttpOpError (base)
    ├── HttpStatusError
    ├── HttpTransportError
    ├── ConfigurationError
    │   ├── InvalidRequestURIError
    │   ├── InvalidConfigurationError
    │   └── ConfigurationValidationError
    └── InternalError

Handler errors are not wrapped: whatever a response handler raises reaches
the caller unchanged.
"""

from .base import ExceptionContext, HttpOpError

# Configuration exceptions
from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    InvalidRequestURIError,
)

# HTTP exchange exceptions
from .http import HttpStatusError, HttpTransportError

from .internal import InternalError
from .templates import ErrorCodes, ErrorMessageTemplates

__all__ = [
    # Base
    "HttpOpError",
    "ExceptionContext",
    # HTTP
    "HttpStatusError",
    "HttpTransportError",
    # Configuration
    "ConfigurationError",
    "InvalidRequestURIError",
    "InvalidConfigurationError",
    "ConfigurationValidationError",
    # Internal
    "InternalError",
    # Templates
    "ErrorCodes",
    "ErrorMessageTemplates",
]
