"""
HTTP verb operations.

Thin entry points for GET, POST, PUT, HEAD and DELETE. Each one builds the
request body if the verb carries one, fills in defaults and hands over to
the dispatcher. Status codes of 400 and above raise HttpStatusError, except
in the convenience functions documented to return None on 404.

Every function accepts the same keyword-only collaborators:

    session: requests.Session to send through; a fresh single-use session
        is created when omitted
    context: HttpContext for the call; a fresh one when omitted
    authenticator: HttpAuthenticator for the call; the current default
        authenticator when omitted
"""

from typing import Any, Iterable, Optional, Tuple, Union

import requests

from httpop.exceptions import HttpStatusError

from .auth import HttpAuthenticator
from .context import HttpContext
from .dispatcher import RequestDescriptor, RequestOptions, execute
from .entities import Params, UrlEncodedFormEntity, build_entity, close_entity
from .handlers import NULL_HANDLER, CaptureInput, CaptureString, ResponseHandler
from .streams import TypedInputStream

FormParams = Union[Params, Iterable[Tuple[str, str]]]


def _options(session, context, authenticator) -> RequestOptions:
    return RequestOptions(session=session, context=context, authenticator=authenticator)


def _none_if_not_found(error: HttpStatusError) -> None:
    if not error.is_not_found:
        raise error


# ---- GET

def exec_http_get(
    url: str,
    accept: Optional[str] = None,
    handler: Optional[ResponseHandler] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """GET ``url`` and pass the response to ``handler``.

    Args:
        url: Target URL; any fragment is removed before sending
        accept: Value for the Accept header
        handler: Consumer of the response body; the body is discarded if None
    """
    execute(
        RequestDescriptor("GET", url, accept),
        handler if handler is not None else NULL_HANDLER,
        _options(session, context, authenticator),
    )


def exec_http_get_stream(
    url: str,
    accept: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> Optional[TypedInputStream]:
    """GET ``url`` and return the open response body.

    Returns:
        The body as a TypedInputStream, which the caller must close, or None
        if the server answered 404
    """
    handler = CaptureInput()
    try:
        exec_http_get(url, accept, handler, session=session, context=context, authenticator=authenticator)
    except HttpStatusError as e:
        return _none_if_not_found(e)
    return handler.get()


def exec_http_get_string(
    url: str,
    accept: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> Optional[str]:
    """GET ``url`` and return the body decoded as UTF-8, or None on 404."""
    handler = CaptureString()
    try:
        exec_http_get(url, accept, handler, session=session, context=context, authenticator=authenticator)
    except HttpStatusError as e:
        return _none_if_not_found(e)
    return handler.get()


# ---- POST

def exec_http_post(
    url: str,
    content: Any,
    content_type: Optional[str] = None,
    *,
    length: int = -1,
    accept: Optional[str] = None,
    handler: Optional[ResponseHandler] = None,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """POST ``content`` to ``url``.

    Args:
        url: Target URL
        content: Text (sent as UTF-8), bytes, a binary stream, Params, a
            list of (name, value) pairs or an HttpEntity
        content_type: Content-Type for text, bytes and stream content
        length: Byte length of stream content, -1 if unknown
        accept: Value for the Accept header
        handler: Consumer of the response body; when None the response is
            drained and discarded
    """
    entity = None
    try:
        entity = build_entity(content, content_type, length)
        execute(
            RequestDescriptor("POST", url, accept, entity),
            handler if handler is not None else NULL_HANDLER,
            _options(session, context, authenticator),
        )
    finally:
        close_entity(entity)


def exec_http_post_form(
    url: str,
    params: FormParams,
    accept: Optional[str] = None,
    handler: Optional[ResponseHandler] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """POST ``params`` as an HTML form (application/x-www-form-urlencoded, UTF-8).

    Pair order and repeated names are preserved.
    """
    entity = None
    try:
        entity = UrlEncodedFormEntity(params)
        execute(
            RequestDescriptor("POST", url, accept, entity),
            handler if handler is not None else NULL_HANDLER,
            _options(session, context, authenticator),
        )
    finally:
        close_entity(entity)


def exec_http_post_form_stream(
    url: str,
    params: FormParams,
    accept: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> Optional[TypedInputStream]:
    """POST a form and return the open response body, or None on 404."""
    handler = CaptureInput()
    try:
        exec_http_post_form(
            url, params, accept, handler,
            session=session, context=context, authenticator=authenticator,
        )
    except HttpStatusError as e:
        return _none_if_not_found(e)
    return handler.get()


# ---- PUT

def exec_http_put(
    url: str,
    content: Any,
    content_type: Optional[str] = None,
    *,
    length: int = -1,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """PUT ``content`` to ``url``. Any response body is discarded.

    Args:
        content: Text (sent as UTF-8), bytes, a binary stream or an HttpEntity
        content_type: Content-Type for text, bytes and stream content
        length: Byte length of stream content, -1 if unknown
    """
    if isinstance(content, (Params, list, tuple)):
        raise TypeError("Form parameters cannot be sent with PUT")
    entity = None
    try:
        entity = build_entity(content, content_type, length)
        execute(
            RequestDescriptor("PUT", url, None, entity),
            NULL_HANDLER,
            _options(session, context, authenticator),
        )
    finally:
        close_entity(entity)


# ---- HEAD

def exec_http_head(
    url: str,
    accept: Optional[str] = None,
    handler: Optional[ResponseHandler] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """HEAD ``url``. The response has no body; only its status is checked
    unless a handler wants the headers."""
    execute(
        RequestDescriptor("HEAD", url, accept),
        handler,
        _options(session, context, authenticator),
    )


# ---- DELETE

def exec_http_delete(
    url: str,
    handler: Optional[ResponseHandler] = None,
    *,
    session: Optional[requests.Session] = None,
    context: Optional[HttpContext] = None,
    authenticator: Optional[HttpAuthenticator] = None,
) -> None:
    """DELETE ``url``, passing any response body to ``handler``."""
    execute(
        RequestDescriptor("DELETE", url),
        handler if handler is not None else NULL_HANDLER,
        _options(session, context, authenticator),
    )
