"""HTTP infrastructure: entities, handlers, authentication, the dispatcher and verb operations."""

from .auth import (
    BearerTokenAuthenticator,
    DefaultAuthenticatorHolder,
    HttpAuthenticator,
    PreemptiveBasicAuthenticator,
    ServiceAuthenticator,
    SimpleAuthenticator,
    apply_authentication,
    get_default_authenticator,
    set_default_authenticator,
)
from .context import HttpContext
from .dispatcher import (
    RequestCounter,
    RequestDescriptor,
    RequestOptions,
    determine_base_uri,
    determine_request_uri,
    execute,
)
from .entities import (
    ByteArrayEntity,
    HttpEntity,
    InputStreamEntity,
    Params,
    StringEntity,
    UrlEncodedFormEntity,
    build_entity,
)
from .handlers import (
    CaptureBytes,
    CaptureHeaders,
    CaptureInput,
    CaptureResponse,
    CaptureString,
    FunctionResponseHandler,
    NullResponseHandler,
    ResponseHandler,
)
from .ops import (
    exec_http_delete,
    exec_http_get,
    exec_http_get_stream,
    exec_http_get_string,
    exec_http_head,
    exec_http_post,
    exec_http_post_form,
    exec_http_post_form_stream,
    exec_http_put,
)
from .streams import TypedInputStream
from .transport import create_session

__all__ = [
    # Operations
    "exec_http_get",
    "exec_http_get_stream",
    "exec_http_get_string",
    "exec_http_post",
    "exec_http_post_form",
    "exec_http_post_form_stream",
    "exec_http_put",
    "exec_http_head",
    "exec_http_delete",
    # Dispatcher
    "execute",
    "RequestDescriptor",
    "RequestOptions",
    "RequestCounter",
    "determine_request_uri",
    "determine_base_uri",
    # Authentication
    "HttpAuthenticator",
    "SimpleAuthenticator",
    "PreemptiveBasicAuthenticator",
    "BearerTokenAuthenticator",
    "ServiceAuthenticator",
    "DefaultAuthenticatorHolder",
    "apply_authentication",
    "get_default_authenticator",
    "set_default_authenticator",
    # Entities
    "HttpEntity",
    "ByteArrayEntity",
    "StringEntity",
    "InputStreamEntity",
    "UrlEncodedFormEntity",
    "Params",
    "build_entity",
    # Handlers
    "ResponseHandler",
    "NullResponseHandler",
    "FunctionResponseHandler",
    "CaptureResponse",
    "CaptureString",
    "CaptureBytes",
    "CaptureHeaders",
    "CaptureInput",
    "TypedInputStream",
    # Context and transport
    "HttpContext",
    "create_session",
]
