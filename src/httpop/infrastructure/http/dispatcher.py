"""
Request dispatcher.

Every verb facade ends up in execute(). It resolves the session, context and
authenticator for the call, sends the request, turns error status codes into
HttpStatusError, passes successful responses to the handler and releases the
request entity, the response and any session it created, on every exit path.
"""

import threading
from dataclasses import dataclass, field
from typing import Optional

import requests
from requests.exceptions import InvalidSchema, InvalidURL, MissingSchema

from httpop.constants import HEADER_ACCEPT, is_error, is_redirection
from httpop.core.config import get_config
from httpop.exceptions import HttpStatusError, HttpTransportError, InvalidRequestURIError
from httpop.logging import HttpOpLogger, get_logger

from .auth import HttpAuthenticator, apply_authentication
from .context import HttpContext
from .entities import HttpEntity, close_entity
from .handlers import ResponseHandler
from .transport import create_session


def determine_request_uri(url: str) -> str:
    """Strip the fragment; fragments are never sent to a server."""
    index = url.find("#")
    return url if index < 0 else url[:index]


def determine_base_uri(request_uri: str) -> str:
    """Strip query string and fragment, giving the base for relative references."""
    base = determine_request_uri(request_uri)
    index = base.find("?")
    return base if index < 0 else base[:index]


@dataclass(frozen=True)
class RequestDescriptor:
    """One request as the dispatcher sees it.

    ``target`` is the URL as the caller gave it; ``uri`` is what goes on the
    wire, with the fragment removed.
    """

    method: str
    target: str
    accept: Optional[str] = None
    entity: Optional[HttpEntity] = None
    uri: str = field(init=False)

    def __post_init__(self):
        if self.target is None:
            raise InvalidRequestURIError(None)
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "uri", determine_request_uri(self.target))

    @property
    def base_uri(self) -> str:
        return determine_base_uri(self.uri)


@dataclass(frozen=True)
class RequestOptions:
    """Collaborators for a call. Every field is optional.

    Attributes:
        session: Session to send through. When None a session is created for
            this call and closed afterwards; a supplied session is left open
            and may be reused across calls.
        context: Template for the per-call context. The call works on a
            copy, so the caller's object is never modified. When None a
            fresh empty one is used.
        authenticator: Authenticator for this call. When None the current
            default authenticator applies.
    """

    session: Optional[requests.Session] = None
    context: Optional[HttpContext] = None
    authenticator: Optional[HttpAuthenticator] = None


class RequestCounter:
    """Monotonic, thread-safe sequence numbers for correlating log lines."""

    def __init__(self, start: int = 0):
        self._lock = threading.Lock()
        self._value = start

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


_counter = RequestCounter()


def execute(
    descriptor: RequestDescriptor,
    handler: Optional[ResponseHandler] = None,
    options: Optional[RequestOptions] = None,
) -> None:
    """Send ``descriptor`` and hand a successful response to ``handler``.

    Args:
        descriptor: Method, URI, Accept value and entity of the request
        handler: Consumer for a response with a status below 300; None
            means the response is released unread
        options: Session, context and authenticator for the call

    Raises:
        HttpStatusError: If the status code is 400 or above
        HttpTransportError: If the transport fails (connection refused,
            timeout, malformed response)
        InvalidRequestURIError: If the URI is missing or malformed
    """
    options = options or RequestOptions()
    request_id = _counter.next()
    log = get_logger(__name__, correlation_id=str(request_id)).with_context(request_id=request_id)

    session = options.session
    owns_session = session is None
    try:
        if owns_session:
            session = create_session()
        context = options.context.copy() if options.context is not None else HttpContext()

        log.debug(f"[{request_id}] {descriptor.method} {descriptor.uri}")

        headers = {}
        entity = descriptor.entity
        if entity is not None:
            headers.update(entity.headers())
        if descriptor.accept is not None:
            headers[HEADER_ACCEPT] = descriptor.accept

        apply_authentication(session, descriptor.target, context, options.authenticator)
        headers.update(context.headers)

        try:
            response = _send(session, context, descriptor, headers)
        except (requests.RequestException, OSError) as e:
            raise _transport_error(log, request_id, descriptor, e) from e

        try:
            _handle_response(log, request_id, response, descriptor, handler)
        except requests.RequestException as e:
            # Body read failures surface as requests exceptions from the handler.
            raise _transport_error(log, request_id, descriptor, e) from e
    finally:
        close_entity(descriptor.entity)
        if owns_session and session is not None:
            _close_session(log, session)


def _send(
    session: requests.Session,
    context: HttpContext,
    descriptor: RequestDescriptor,
    headers: dict,
) -> requests.Response:
    entity = descriptor.entity
    request = requests.Request(
        method=descriptor.method,
        url=descriptor.uri,
        headers=headers,
        data=entity.body if entity is not None else None,
        auth=context.auth,
    )
    timeout = context.timeout if context.timeout is not None else get_config().transport.timeout
    try:
        prepared = session.prepare_request(request)
        # Raises InvalidSchema when no adapter is mounted for the scheme.
        session.get_adapter(prepared.url)
    except (MissingSchema, InvalidSchema, InvalidURL) as e:
        raise InvalidRequestURIError(descriptor.uri, str(e)) from e

    settings = session.merge_environment_settings(
        prepared.url, context.proxies, True, context.verify, None
    )
    # URL errors past this point come from redirect targets, not the caller.
    return session.send(prepared, timeout=timeout, allow_redirects=True, **settings)


def _transport_error(
    log: HttpOpLogger,
    request_id: int,
    descriptor: RequestDescriptor,
    error: BaseException,
) -> HttpTransportError:
    log.debug(f"[{request_id}] {descriptor.method} {descriptor.uri} failed: {error}")
    return HttpTransportError(error, descriptor.uri)


def _handle_response(
    log: HttpOpLogger,
    request_id: int,
    response: requests.Response,
    descriptor: RequestDescriptor,
    handler: Optional[ResponseHandler],
) -> None:
    status_code = response.status_code
    reason = response.reason or ""
    transferred = False
    try:
        log.debug(f"[{request_id}] {status_code} {reason}")
        if is_error(status_code):
            raise HttpStatusError(status_code, reason, descriptor.uri)

        if is_redirection(status_code):
            # Redirects are followed by the transport; one reaching here was not.
            log.warning(f"[{request_id}] Not handled: {status_code} {reason}")
        elif handler is not None:
            handler.handle(descriptor.base_uri, response)
            transferred = handler.takes_stream_ownership
    finally:
        if not transferred:
            _close_response(log, response)


def _close_response(log: HttpOpLogger, response: requests.Response) -> None:
    try:
        response.close()
    except Exception as e:
        log.debug(f"Ignoring failure while closing response: {e}")


def _close_session(log: HttpOpLogger, session: requests.Session) -> None:
    try:
        session.close()
    except Exception as e:
        log.debug(f"Ignoring failure while closing session: {e}")
