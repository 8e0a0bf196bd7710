"""
HTTP exchange exceptions.

Failures reported by the request pipeline once a request has been handed to
the transport: error status codes and transport-level I/O faults.
"""

from typing import Optional

from ..constants import HTTP_STATUS_NOT_FOUND, is_server_error
from .base import ExceptionContext, HttpOpError
from .templates import ErrorCodes, ErrorMessageTemplates


class HttpStatusError(HttpOpError):
    """Raised when the server answers with a status code of 400 or above."""

    def __init__(self, status_code: int, reason: Optional[str] = None, uri: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        self.uri = uri

        if uri:
            message = ErrorMessageTemplates.HTTP_STATUS_FOR_URI.format(
                status_code=status_code, reason=self.reason, uri=uri
            )
        else:
            message = ErrorMessageTemplates.HTTP_STATUS.format(
                status_code=status_code, reason=self.reason
            )

        error_code = (
            ErrorCodes.HTTP_SERVER_ERROR
            if is_server_error(status_code)
            else ErrorCodes.HTTP_CLIENT_ERROR
        )
        context = ExceptionContext(
            error_code=error_code,
            context={"status_code": status_code, "uri": uri},
        )
        super().__init__(message.strip(), context)

    @property
    def response_code(self) -> int:
        return self.status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == HTTP_STATUS_NOT_FOUND


class HttpTransportError(HttpOpError):
    """Raised when the transport fails before a complete response is available.

    The underlying exception is kept both as ``cause`` and as ``__cause__``
    when raised with ``raise ... from``.
    """

    def __init__(self, cause: BaseException, uri: Optional[str] = None):
        self.cause = cause
        self.uri = uri

        details = str(cause) or cause.__class__.__name__
        if uri:
            message = ErrorMessageTemplates.TRANSPORT_FAILED_FOR_URI.format(uri=uri, details=details)
        else:
            message = ErrorMessageTemplates.TRANSPORT_FAILED.format(details=details)

        context = ExceptionContext(
            help_text="Check that the server is reachable and the network is available",
            error_code=ErrorCodes.HTTP_TRANSPORT_ERROR,
            context={"uri": uri, "cause": cause.__class__.__name__},
            technical_details=repr(cause),
        )
        super().__init__(message, context)
