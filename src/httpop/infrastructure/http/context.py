"""
Per-call HTTP context.

The context carries state that belongs to one exchange rather than to the
session: the authentication an authenticator chose, extra headers, the
timeout, and free-form attributes. The dispatcher works on a copy of the
caller's context, or an empty one when none is passed in, so authentication
applied for one call is never seen by the next.
"""

from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple, Union

from requests.auth import AuthBase

Timeout = Union[float, Tuple[float, float]]


class HttpContext:
    """Mutable state for a single request.

    Attributes:
        auth: requests auth object applied when the request is prepared
        headers: Extra headers sent with the request
        timeout: Timeout passed to the transport; None means the configured default
        verify: TLS verification override; None means the session's setting
        proxies: Proxy mapping override
        attributes: Free-form values shared between authenticators and callers
    """

    def __init__(
        self,
        auth: Optional[AuthBase] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[Timeout] = None,
        verify: Optional[Union[bool, str]] = None,
        proxies: Optional[Mapping[str, str]] = None,
    ):
        self.auth = auth
        self.headers: Dict[str, str] = dict(headers or {})
        self.timeout = timeout
        self.verify = verify
        self.proxies: Dict[str, str] = dict(proxies or {})
        self.attributes: MutableMapping[str, Any] = {}

    def copy(self) -> "HttpContext":
        """Return a copy with its own headers, proxies and attributes."""
        clone = HttpContext(self.auth, self.headers, self.timeout, self.verify, self.proxies)
        clone.attributes.update(self.attributes)
        return clone

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def remove_attribute(self, name: str) -> Any:
        return self.attributes.pop(name, None)

    def __repr__(self) -> str:
        return (
            f"HttpContext(auth={type(self.auth).__name__ if self.auth else None}, "
            f"headers={sorted(self.headers)}, timeout={self.timeout!r})"
        )
