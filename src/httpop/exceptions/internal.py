"""
Internal exceptions.

Raised only for conditions a conforming runtime never produces.
"""

from .base import ExceptionContext, HttpOpError
from .templates import ErrorCodes, ErrorMessageTemplates


class InternalError(HttpOpError):
    """Raised when the platform cannot do something the library requires."""

    def __init__(self, details: str):
        context = ExceptionContext(
            error_code=ErrorCodes.INTERNAL_ERROR,
            technical_details=details,
        )
        super().__init__(ErrorMessageTemplates.INTERNAL_ERROR.format(details=details), context)
