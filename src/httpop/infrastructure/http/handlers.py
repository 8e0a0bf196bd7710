"""
Response handlers.

A response handler consumes the body of a successful response. The dispatcher
calls ``handle(base_uri, response)`` at most once per request, and only when
the status code is below 300.

Handlers declare, through ``takes_stream_ownership``, whether they keep the
body stream open past the end of the call. The dispatcher closes the response
after any handler that does not; for one that does, closing becomes the job
of whoever receives the stream.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Generic, Optional, TypeVar

import requests

from httpop.constants import DEFAULT_CHUNK_SIZE, UTF_8

from .streams import TypedInputStream

T = TypeVar("T")


class ResponseHandler(ABC):
    """Capability that consumes a successful response."""

    #: True if the handler keeps the body stream open after handle() returns.
    takes_stream_ownership: bool = False

    @abstractmethod
    def handle(self, base_uri: str, response: requests.Response) -> None:
        """Consume ``response``.

        Args:
            base_uri: Request URI without query string and fragment, the base
                for resolving relative references found in the body
            response: Response whose status has already been checked
        """


class NullResponseHandler(ResponseHandler):
    """Drains and discards the body so the connection can be reused."""

    def handle(self, base_uri: str, response: requests.Response) -> None:
        for _ in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
            pass


class FunctionResponseHandler(ResponseHandler):
    """Adapts a plain callable ``fn(base_uri, response)`` to the handler interface."""

    def __init__(self, fn: Callable[[str, requests.Response], None], takes_stream_ownership: bool = False):
        self._fn = fn
        self.takes_stream_ownership = takes_stream_ownership

    def handle(self, base_uri: str, response: requests.Response) -> None:
        self._fn(base_uri, response)


class CaptureResponse(ResponseHandler, Generic[T]):
    """Handler that keeps a value derived from the response for later retrieval."""

    def __init__(self):
        self._result: Optional[T] = None

    def get(self) -> Optional[T]:
        """The captured value, or None if the handler was never invoked."""
        return self._result


class CaptureString(CaptureResponse[str]):
    """Reads the whole body as UTF-8 text."""

    def handle(self, base_uri: str, response: requests.Response) -> None:
        try:
            self._result = response.content.decode(UTF_8)
        finally:
            response.close()


class CaptureBytes(CaptureResponse[bytes]):
    """Reads the whole body into memory."""

    def handle(self, base_uri: str, response: requests.Response) -> None:
        try:
            self._result = response.content
        finally:
            response.close()


class CaptureHeaders(CaptureResponse[Dict[str, str]]):
    """Records status and headers and discards any body. Suited to HEAD requests."""

    def __init__(self):
        super().__init__()
        self.status_code: Optional[int] = None
        self.reason: Optional[str] = None

    def handle(self, base_uri: str, response: requests.Response) -> None:
        self.status_code = response.status_code
        self.reason = response.reason
        self._result = dict(response.headers)


class CaptureInput(CaptureResponse[TypedInputStream]):
    """Hands the still-open body to the caller as a TypedInputStream.

    The caller must close the stream it gets from get().
    """

    takes_stream_ownership = True

    def handle(self, base_uri: str, response: requests.Response) -> None:
        self._result = TypedInputStream.from_response(response, base_uri)


NULL_HANDLER = NullResponseHandler()
