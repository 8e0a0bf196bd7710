"""
Pytest configuration and shared fixtures for httpop tests.
"""

import io
import json
import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, List, Optional
from unittest.mock import Mock, patch
from urllib.parse import parse_qsl

import pytest
import requests

from httpop.core.config import HttpOpConfig, set_config
from httpop.infrastructure.http import auth as auth_module


@pytest.fixture(autouse=True)
def default_config():
    """Pin the process-wide configuration so tests never read ~/.config."""
    config = HttpOpConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture(autouse=True)
def restore_default_authenticator():
    """Put back whatever default authenticator was installed before the test."""
    original = auth_module.get_default_authenticator()
    auth_module.set_default_authenticator(auth_module.ServiceAuthenticator({}))
    yield
    auth_module.set_default_authenticator(original)


@pytest.fixture
def clean_environment():
    """Ensure clean environment variables for testing."""
    original_env = {}

    env_vars = [
        "HTTPOP_CONFIG_FILE", "HTTPOP_CONNECT_TIMEOUT", "HTTPOP_READ_TIMEOUT",
        "HTTPOP_CONNECT_RETRIES", "HTTPOP_MAX_REDIRECTS", "HTTPOP_VERIFY_TLS",
        "HTTPOP_USER_AGENT", "HTTPOP_LOGGING_LEVEL", "HTTPOP_LOGGING_FORMAT",
        "HTTPOP_LOGGING_OUTPUT", "HTTPOP_LOGGING_FILE_PATH",
    ]

    for var in env_vars:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


def make_response(
    status_code: int = 200,
    body: bytes = b"",
    content_type: Optional[str] = None,
    reason: str = "OK",
    url: str = "http://example.org/",
) -> requests.Response:
    """Build a requests.Response over an in-memory body.

    ``response.close`` is wrapped in a Mock so tests can count calls.
    """
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = url
    response.raw = io.BytesIO(body)
    if content_type:
        response.headers["Content-Type"] = content_type
    response.close = Mock(wraps=response.close)
    return response


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def session():
    """A real session whose send() is mocked; nothing goes on the network."""
    session = requests.Session()
    session.trust_env = False
    with patch.object(session, "send") as mock_send:
        mock_send.return_value = make_response(200, b"", "text/plain")
        yield session
    session.close()


class RecordedRequest:
    def __init__(self, method: str, path: str, headers: Dict[str, str], body: bytes):
        self.method = method
        self.path = path
        self.headers = headers
        self.body = body


class _ServerState:
    def __init__(self):
        self.requests: List[RecordedRequest] = []
        self.lock = threading.Lock()

    def record(self, request: RecordedRequest) -> None:
        with self.lock:
            self.requests.append(request)

    @property
    def last(self) -> RecordedRequest:
        with self.lock:
            return self.requests[-1]


BINARY_PAYLOAD = bytes(range(10))


class _Handler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def _record(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.state.record(
            RecordedRequest(self.command, self.path, dict(self.headers), body)
        )
        return body

    def _write(self, status: int, body: bytes = b"", content_type: Optional[str] = None,
               headers: Optional[Dict[str, str]] = None) -> None:
        self.send_response(status)
        if content_type:
            self.send_header("Content-Type", content_type)
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def do_GET(self):
        self._record()
        path = self.path.split("?", 1)[0]
        if path == "/data":
            self._write(200, b"hello", "text/plain")
        elif path == "/binary":
            self._write(200, BINARY_PAYLOAD, "application/octet-stream")
        elif path == "/redirect":
            self._write(302, headers={"Location": "/data"})
        elif path == "/protected":
            if self.headers.get("Authorization") == "Basic dXNlcjpzZWNyZXQ=":
                self._write(200, b"welcome", "text/plain")
            else:
                self._write(401, headers={"WWW-Authenticate": 'Basic realm="test"'})
        elif path == "/error":
            self._write(500, b"boom", "text/plain")
        elif path == "/accept":
            accept = self.headers.get("Accept", "")
            self._write(200, accept.encode("utf-8"), "text/plain")
        else:
            self._write(404, b"not found", "text/plain")

    def do_HEAD(self):
        self._record()
        if self.path == "/data":
            self._write(200, b"hello", "text/plain")
        else:
            self._write(404)

    def do_POST(self):
        body = self._record()
        if self.path == "/items":
            self._write(201)
        elif self.path == "/echo-form":
            pairs = parse_qsl(body.decode("ascii"), keep_blank_values=True, encoding="utf-8")
            self._write(200, json.dumps(pairs).encode("utf-8"), "application/json")
        elif self.path == "/echo":
            self._write(200, body, self.headers.get("Content-Type", "application/octet-stream"))
        else:
            self._write(404)

    def do_PUT(self):
        self._record()
        if self.path.startswith("/items/"):
            self._write(204)
        else:
            self._write(404)

    def do_DELETE(self):
        self._record()
        if self.path == "/items/1":
            self._write(200, b"deleted", "text/plain")
        else:
            self._write(404)


class _Server(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address, handler):
        super().__init__(address, handler)
        self.state = _ServerState()


@pytest.fixture(scope="session")
def http_server():
    """Local HTTP server for end-to-end tests; yields its base URL and state."""
    server = _Server(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}", server.state
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def no_proxy(monkeypatch):
    """Keep requests from routing local traffic through an environment proxy."""
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
