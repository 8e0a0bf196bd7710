"""
Request entities.

An entity is the body of a request together with the metadata that goes into
its headers. Entities are built fresh for every call and closed by the verb
facade that created or received them, whatever the outcome of the call.
"""

import io
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
from urllib.parse import urlencode

from httpop.constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_OCTET_STREAM,
    DEFAULT_CHUNK_SIZE,
    HEADER_CONTENT_ENCODING,
    HEADER_CONTENT_LENGTH,
    HEADER_CONTENT_TYPE,
    UTF_8,
)
from httpop.exceptions import InternalError

logger = logging.getLogger(__name__)


class Params:
    """Ordered, multi-valued list of name/value pairs.

    Duplicate names are kept as separate pairs in insertion order, which is
    what HTML forms and SPARQL protocol requests (several ``default-graph-uri``
    values, for instance) rely on.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[str, str]]] = None):
        self._pairs: List[Tuple[str, str]] = []
        if pairs is not None:
            for name, value in pairs:
                self.add(name, value)

    def add(self, name: str, value: str) -> "Params":
        if name is None:
            raise ValueError("Parameter name must not be None")
        self._pairs.append((str(name), "" if value is None else str(value)))
        return self

    def get(self, name: str) -> Optional[str]:
        """Return the first value for ``name``, or None."""
        for key, value in self._pairs:
            if key == name:
                return value
        return None

    def get_multi(self, name: str) -> List[str]:
        return [value for key, value in self._pairs if key == name]

    def contains(self, name: str) -> bool:
        return any(key == name for key, _ in self._pairs)

    def remove(self, name: str) -> "Params":
        """Remove every pair called ``name``."""
        self._pairs = [(key, value) for key, value in self._pairs if key != name]
        return self

    def names(self) -> List[str]:
        seen: List[str] = []
        for key, _ in self._pairs:
            if key not in seen:
                seen.append(key)
        return seen

    def pairs(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Params):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"Params({self._pairs!r})"


class HttpEntity:
    """Base class for request bodies.

    Attributes:
        content_type: Value of the Content-Type header, if any
        content_encoding: Value of the Content-Encoding header, if any
        content_length: Body length in bytes, or -1 when unknown
    """

    def __init__(
        self,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
        content_length: int = -1,
    ):
        self.content_type = content_type
        self.content_encoding = content_encoding
        self.content_length = content_length
        self._closed = False

    @property
    def body(self) -> Any:
        """Body object handed to the transport (bytes or a readable stream)."""
        raise NotImplementedError

    @property
    def closed(self) -> bool:
        return self._closed

    def headers(self) -> Dict[str, str]:
        """Headers describing this entity."""
        headers: Dict[str, str] = {}
        if self.content_type:
            headers[HEADER_CONTENT_TYPE] = self.content_type
        if self.content_encoding:
            headers[HEADER_CONTENT_ENCODING] = self.content_encoding
        if self.content_length >= 0:
            headers[HEADER_CONTENT_LENGTH] = str(self.content_length)
        return headers

    def close(self) -> None:
        """Release the entity. Calling close() more than once has no effect."""
        if self._closed:
            return
        self._closed = True
        self._release()

    def _release(self) -> None:
        """Free whatever the entity holds; called at most once."""

    def __enter__(self) -> "HttpEntity":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(content_type={self.content_type!r}, "
            f"content_length={self.content_length})"
        )


class ByteArrayEntity(HttpEntity):
    """Entity over an in-memory byte string."""

    def __init__(self, content: bytes, content_type: Optional[str] = None,
                 content_encoding: Optional[str] = None):
        data = bytes(content)
        super().__init__(content_type, content_encoding, len(data))
        self._content = data

    @property
    def body(self) -> bytes:
        return self._content

    def _release(self) -> None:
        self._content = b""


class StringEntity(ByteArrayEntity):
    """Entity over text, encoded as UTF-8."""

    def __init__(self, content: str, content_type: Optional[str] = None):
        try:
            data = content.encode(UTF_8)
        except UnicodeError as e:
            # Lone surrogates are the only way to get here on a conforming runtime.
            raise InternalError(f"Text cannot be encoded as {UTF_8}: {e}") from e
        super().__init__(data, content_type, UTF_8)
        self.text = content


class UrlEncodedFormEntity(ByteArrayEntity):
    """``application/x-www-form-urlencoded`` entity built from name/value pairs."""

    def __init__(self, params: Union[Params, Iterable[Tuple[str, str]]]):
        pairs = params.pairs() if isinstance(params, Params) else list(params)
        try:
            data = urlencode(pairs, encoding=UTF_8).encode("ascii")
        except UnicodeError as e:
            raise InternalError(f"Form parameters cannot be encoded as {UTF_8}: {e}") from e
        super().__init__(data, f"{CONTENT_TYPE_FORM}; charset={UTF_8}")
        self.params = pairs


class _BoundedReader(io.RawIOBase):
    """Reader that yields at most ``length`` bytes of the wrapped stream.

    Defining ``__len__`` lets requests send a Content-Length header instead
    of falling back to chunked transfer encoding.
    """

    def __init__(self, stream, length: int):
        self._stream = stream
        self._remaining = length
        self._length = length

    def __len__(self) -> int:
        return self._length

    def readable(self) -> bool:
        return True

    def tell(self) -> int:
        return self._length - self._remaining

    def readinto(self, buffer) -> int:
        if self._remaining <= 0:
            return 0
        size = min(len(buffer), self._remaining)
        data = self._stream.read(size)
        if not data:
            return 0
        n = len(data)
        buffer[:n] = data
        self._remaining -= n
        return n

    def __iter__(self):
        while True:
            chunk = self.read(DEFAULT_CHUNK_SIZE)
            if not chunk:
                return
            yield chunk


class InputStreamEntity(HttpEntity):
    """Entity over a binary stream supplied by the caller.

    The stream is read once. Closing the entity closes the stream.
    """

    def __init__(self, stream, length: int = -1, content_type: Optional[str] = None):
        if stream is None or not hasattr(stream, "read"):
            raise TypeError("InputStreamEntity needs a readable binary stream")
        super().__init__(content_type or CONTENT_TYPE_OCTET_STREAM, UTF_8, length)
        self._stream = stream

    @property
    def body(self):
        if self.content_length >= 0:
            return _BoundedReader(self._stream, self.content_length)
        return self._stream

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        # requests computes Content-Length or switches to chunked encoding itself.
        headers.pop(HEADER_CONTENT_LENGTH, None)
        return headers

    def _release(self) -> None:
        self._stream.close()


def build_entity(
    content: Any,
    content_type: Optional[str] = None,
    length: int = -1,
) -> Optional[HttpEntity]:
    """Turn a caller payload into an entity.

    Args:
        content: An HttpEntity (returned unchanged), text, bytes, a binary
            stream, or Params or a list of (name, value) pairs for a form body
        content_type: Content type for text, bytes and stream payloads
        length: Byte length of a stream payload, -1 if unknown

    Returns:
        The entity, or None if ``content`` is None
    """
    if content is None:
        return None
    if isinstance(content, HttpEntity):
        return content
    if isinstance(content, str):
        return StringEntity(content, content_type)
    if isinstance(content, (bytes, bytearray, memoryview)):
        return ByteArrayEntity(bytes(content), content_type)
    if isinstance(content, (Params, list, tuple)):
        return UrlEncodedFormEntity(content)
    if hasattr(content, "read"):
        return InputStreamEntity(content, length, content_type)
    raise TypeError(f"Cannot build a request body from {type(content).__name__}")


def close_entity(entity: Optional[HttpEntity]) -> None:
    """Close an entity, logging rather than raising if closing fails.

    Used on exit paths where an exception may already be propagating.
    """
    if entity is None:
        return
    try:
        entity.close()
    except Exception as e:
        logger.debug(f"Ignoring failure while closing {entity!r}: {e}")
