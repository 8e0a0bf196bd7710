"""
Typed response streams.

A TypedInputStream is an open response body together with the media type the
server declared for it. Whoever holds one must close it.
"""

import io
from typing import Optional

import requests


def parse_content_type(content_type: str):
    """Split a Content-Type value into its media type and lower-cased parameters."""
    parts = content_type.split(";")
    mime_type = parts[0].strip().lower()
    params = {}
    for part in parts[1:]:
        key, sep, value = part.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip().strip("\"'")
    return mime_type, params


class TypedInputStream(io.RawIOBase):
    """Readable binary stream over a response body that knows its content type.

    Closing the stream releases the underlying response (and its connection).
    It can be used as a context manager.
    """

    def __init__(
        self,
        raw,
        content_type: Optional[str] = None,
        base_uri: Optional[str] = None,
        response: Optional[requests.Response] = None,
    ):
        super().__init__()
        self._raw = raw
        self._response = response
        self.content_type = content_type
        self.base_uri = base_uri
        if content_type:
            mime_type, params = parse_content_type(content_type)
            self.mime_type: Optional[str] = mime_type or None
            self.charset: Optional[str] = params.get("charset")
        else:
            self.mime_type = None
            self.charset = None

    @classmethod
    def from_response(cls, response: requests.Response, base_uri: Optional[str] = None) -> "TypedInputStream":
        """Wrap the still-open body of ``response``."""
        raw = response.raw
        if hasattr(raw, "decode_content"):
            # Undo gzip/deflate transfer compression while reading.
            raw.decode_content = True
        return cls(raw, response.headers.get("Content-Type"), base_uri, response)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._raw is None:
            return 0
        data = self._raw.read(len(buffer))
        if not data:
            return 0
        n = len(data)
        buffer[:n] = data
        return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._response is not None:
                self._response.close()
            elif self._raw is not None:
                self._raw.close()
        finally:
            super().close()

    def __repr__(self) -> str:
        return f"TypedInputStream(content_type={self.content_type!r}, base_uri={self.base_uri!r})"
