"""
httpop: a small facade for content-negotiated HTTP operations.

GET, POST, PUT, HEAD and DELETE all run through one dispatcher that strips
URI fragments, applies authentication, turns status codes of 400 and above
into exceptions, hands successful responses to a pluggable handler and
releases request bodies and responses on every path. It is meant for
protocol clients (SPARQL query and update, graph store access) that need to
send a request with an Accept header and read the answer without dealing
with the HTTP client library directly.

Architecture Overview:
- infrastructure.http: Entities, handlers, authentication, dispatcher, verb operations
- exceptions: Error taxonomy (status, transport, configuration, internal)
- core.config: Pydantic configuration with TOML file and environment overrides
- logging: Structured logging for the library logger
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigurationError,
    HttpOpError,
    HttpStatusError,
    HttpTransportError,
    InternalError,
    InvalidRequestURIError,
)
from .infrastructure.http import (
    BearerTokenAuthenticator,
    ByteArrayEntity,
    CaptureBytes,
    CaptureHeaders,
    CaptureInput,
    CaptureString,
    FunctionResponseHandler,
    HttpAuthenticator,
    HttpContext,
    HttpEntity,
    InputStreamEntity,
    NullResponseHandler,
    Params,
    PreemptiveBasicAuthenticator,
    RequestDescriptor,
    RequestOptions,
    ResponseHandler,
    ServiceAuthenticator,
    SimpleAuthenticator,
    StringEntity,
    TypedInputStream,
    UrlEncodedFormEntity,
    apply_authentication,
    exec_http_delete,
    exec_http_get,
    exec_http_get_stream,
    exec_http_get_string,
    exec_http_head,
    exec_http_post,
    exec_http_post_form,
    exec_http_post_form_stream,
    exec_http_put,
    execute,
    get_default_authenticator,
    set_default_authenticator,
)

__all__ = [
    "__version__",
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
    "execute",
    "RequestDescriptor",
    "RequestOptions",
    # Authentication
    "HttpAuthenticator",
    "SimpleAuthenticator",
    "PreemptiveBasicAuthenticator",
    "BearerTokenAuthenticator",
    "ServiceAuthenticator",
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
    # Handlers
    "ResponseHandler",
    "NullResponseHandler",
    "FunctionResponseHandler",
    "CaptureString",
    "CaptureBytes",
    "CaptureHeaders",
    "CaptureInput",
    "TypedInputStream",
    "HttpContext",
    # Exceptions
    "HttpOpError",
    "HttpStatusError",
    "HttpTransportError",
    "ConfigurationError",
    "InvalidRequestURIError",
    "InternalError",
]
