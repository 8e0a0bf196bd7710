"""
HTTP authentication.

Authenticators prepare a session and a per-call context so that the request
they are about to send carries credentials. They never send anything
themselves.

A process-wide default authenticator is used whenever a call does not name
one. It starts out as a ServiceAuthenticator fed from configuration and can
be replaced, or switched off entirely, with set_default_authenticator().
"""

import logging
import threading
from abc import ABC, abstractmethod
from base64 import b64encode
from typing import Dict, Optional, Tuple
from urllib.parse import SplitResult, urlsplit

import requests
from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth

from httpop.constants import HEADER_AUTHORIZATION
from httpop.core.config import AuthScheme, HttpOpConfig, get_config
from httpop.exceptions import InvalidRequestURIError

from .context import HttpContext

logger = logging.getLogger(__name__)


class HttpAuthenticator(ABC):
    """Capability that applies authentication before a request is dispatched."""

    @abstractmethod
    def apply(self, session: requests.Session, context: HttpContext, uri: SplitResult) -> None:
        """Prepare ``session`` and ``context`` for a request to ``uri``.

        Args:
            session: Session the request will go through
            context: Per-call context; put request-scoped auth here
            uri: Parsed target URI
        """

    def invalidate(self) -> None:
        """Drop any cached credentials or tokens."""


class SimpleAuthenticator(HttpAuthenticator):
    """Applies one set of credentials to every request."""

    def __init__(self, username: str, password: str, scheme: AuthScheme = AuthScheme.BASIC):
        self.username = username
        self.password = password
        self.scheme = AuthScheme(scheme)

    def create_auth(self) -> AuthBase:
        if self.scheme == AuthScheme.DIGEST:
            return HTTPDigestAuth(self.username, self.password)
        return HTTPBasicAuth(self.username, self.password)

    def apply(self, session: requests.Session, context: HttpContext, uri: SplitResult) -> None:
        context.auth = self.create_auth()

    def __repr__(self) -> str:
        return f"SimpleAuthenticator(username={self.username!r}, scheme={self.scheme.value!r})"


class PreemptiveBasicAuthenticator(HttpAuthenticator):
    """Sends Basic credentials with the first request instead of waiting for a challenge."""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def apply(self, session: requests.Session, context: HttpContext, uri: SplitResult) -> None:
        token = b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        context.headers[HEADER_AUTHORIZATION] = f"Basic {token}"


class BearerTokenAuthenticator(HttpAuthenticator):
    """Sends ``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self.token = token

    def apply(self, session: requests.Session, context: HttpContext, uri: SplitResult) -> None:
        context.headers[HEADER_AUTHORIZATION] = f"Bearer {self.token}"


_DEFAULT_PORTS = {"http": 80, "https": 443}


def _origin(uri: SplitResult) -> Tuple[str, str, Optional[int]]:
    scheme = uri.scheme.lower()
    return scheme, (uri.hostname or "").lower(), uri.port or _DEFAULT_PORTS.get(scheme)


def _service_matches(service_uri: str, target: SplitResult) -> bool:
    """True if ``target`` is on the same origin as ``service_uri`` and under its path.

    Paths match on whole segments: ``/ds`` covers ``/ds`` and ``/ds/query``
    but not ``/dsx``.
    """
    try:
        service = urlsplit(service_uri)
        if _origin(service) != _origin(target):
            return False
    except ValueError:
        return False
    prefix = service.path
    path = target.path or "/"
    if not prefix or prefix == "/" or path == prefix:
        return True
    if prefix.endswith("/"):
        return path.startswith(prefix)
    return path.startswith(prefix + "/")


class ServiceAuthenticator(HttpAuthenticator):
    """Chooses credentials by matching the request URI against service prefixes.

    A service applies when the request has the same scheme, host and port
    and its path lies under the service path. The longest matching service
    URI wins. Requests to URIs with no matching service go out unauthenticated.

    When created without an explicit registry, the ``services`` table of the
    process-wide configuration is loaded on first use.
    """

    def __init__(self, services: Optional[Dict[str, SimpleAuthenticator]] = None):
        self._lock = threading.Lock()
        self._services: Dict[str, SimpleAuthenticator] = dict(services or {})
        self._loaded = services is not None

    @classmethod
    def from_config(cls, config: HttpOpConfig) -> "ServiceAuthenticator":
        authenticator = cls({})
        authenticator._load(config)
        return authenticator

    def _load(self, config: HttpOpConfig) -> None:
        for service_uri, credentials in config.services.items():
            self._services.setdefault(
                service_uri,
                SimpleAuthenticator(credentials.username, credentials.password, credentials.scheme),
            )
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        config = get_config()
        with self._lock:
            if not self._loaded:
                self._load(config)

    def register(self, service_uri: str, username: str, password: str,
                 scheme: AuthScheme = AuthScheme.BASIC) -> None:
        with self._lock:
            self._services[service_uri] = SimpleAuthenticator(username, password, scheme)

    def unregister(self, service_uri: str) -> None:
        with self._lock:
            self._services.pop(service_uri, None)

    def find(self, uri: str) -> Optional[Tuple[str, SimpleAuthenticator]]:
        """Return the (prefix, authenticator) pair that applies to ``uri``, if any."""
        self._ensure_loaded()
        target = urlsplit(uri)
        with self._lock:
            matches = [prefix for prefix in self._services if _service_matches(prefix, target)]
            if not matches:
                return None
            prefix = max(matches, key=len)
            return prefix, self._services[prefix]

    def apply(self, session: requests.Session, context: HttpContext, uri: SplitResult) -> None:
        match = self.find(uri.geturl())
        if match is None:
            return
        prefix, authenticator = match
        logger.debug(f"Using credentials registered for {prefix}")
        authenticator.apply(session, context, uri)

    def invalidate(self) -> None:
        with self._lock:
            self._services.clear()
            self._loaded = False


class DefaultAuthenticatorHolder:
    """Lock-guarded cell holding the process-wide default authenticator.

    Replacement is last-writer-wins; a call that already read the old value
    keeps using it.
    """

    def __init__(self, authenticator: Optional[HttpAuthenticator] = None):
        self._lock = threading.Lock()
        self._authenticator = authenticator

    def get(self) -> Optional[HttpAuthenticator]:
        with self._lock:
            return self._authenticator

    def set(self, authenticator: Optional[HttpAuthenticator]) -> None:
        with self._lock:
            self._authenticator = authenticator


_default_authenticator = DefaultAuthenticatorHolder(ServiceAuthenticator())


def get_default_authenticator() -> Optional[HttpAuthenticator]:
    """Return the authenticator used when a call does not supply one."""
    return _default_authenticator.get()


def set_default_authenticator(authenticator: Optional[HttpAuthenticator]) -> None:
    """Replace the default authenticator.

    Passing None turns default authentication off; calls then authenticate
    only when they pass an authenticator explicitly.
    """
    _default_authenticator.set(authenticator)


def parse_request_uri(target: Optional[str]) -> SplitResult:
    """Parse ``target``, raising InvalidRequestURIError if it is missing or malformed."""
    if target is None:
        raise InvalidRequestURIError(None)
    if not isinstance(target, str) or not target.strip():
        raise InvalidRequestURIError(str(target), "empty request URI")
    try:
        parsed = urlsplit(target)
        # Accessing the port validates it.
        parsed.port
    except ValueError as e:
        raise InvalidRequestURIError(target, str(e)) from e
    return parsed


def apply_authentication(
    session: Optional[requests.Session],
    target: Optional[str],
    context: HttpContext,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """Apply authentication for a request to ``target``.

    If ``authenticator`` is None the current default is used. If that is also
    None the request goes out unauthenticated.

    Raises:
        InvalidRequestURIError: If ``target`` is missing or cannot be parsed
    """
    if session is None:
        return

    if authenticator is None:
        authenticator = get_default_authenticator()

    if authenticator is None:
        return

    uri = parse_request_uri(target)
    authenticator.apply(session, context, uri)
