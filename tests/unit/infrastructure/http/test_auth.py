"""
Unit tests for authenticators and the default-authenticator fallback.
"""

import threading
from unittest.mock import Mock
from urllib.parse import urlsplit

import pytest
import requests
from requests.auth import HTTPBasicAuth, HTTPDigestAuth

from httpop.core.config import AuthScheme, HttpOpConfig, set_config
from httpop.exceptions import InvalidRequestURIError
from httpop.infrastructure.http.auth import (
    BearerTokenAuthenticator,
    DefaultAuthenticatorHolder,
    HttpAuthenticator,
    PreemptiveBasicAuthenticator,
    ServiceAuthenticator,
    SimpleAuthenticator,
    apply_authentication,
    get_default_authenticator,
    parse_request_uri,
    set_default_authenticator,
)
from httpop.infrastructure.http.context import HttpContext


@pytest.fixture
def http_session():
    session = requests.Session()
    yield session
    session.close()


class TestSimpleAuthenticator:
    def test_basic_sets_context_auth(self, http_session):
        context = HttpContext()
        SimpleAuthenticator("user", "secret").apply(
            http_session, context, urlsplit("http://example.org/sparql")
        )

        assert context.auth == HTTPBasicAuth("user", "secret")
        assert http_session.auth is None

    def test_digest_scheme(self, http_session):
        context = HttpContext()
        SimpleAuthenticator("user", "secret", AuthScheme.DIGEST).apply(
            http_session, context, urlsplit("http://example.org/")
        )

        assert isinstance(context.auth, HTTPDigestAuth)
        assert context.auth.username == "user"

    def test_scheme_accepts_string(self):
        assert SimpleAuthenticator("u", "p", "digest").scheme is AuthScheme.DIGEST

    def test_repr_hides_password(self):
        assert "secret" not in repr(SimpleAuthenticator("user", "secret"))


class TestPreemptiveBasicAuthenticator:
    def test_sets_basic_header_without_challenge(self, http_session):
        context = HttpContext()
        PreemptiveBasicAuthenticator("user", "secret").apply(
            http_session, context, urlsplit("http://example.org/")
        )

        assert context.headers["Authorization"] == "Basic dXNlcjpzZWNyZXQ="
        assert context.auth is None


class TestBearerTokenAuthenticator:
    def test_sets_authorization_header(self, http_session):
        context = HttpContext()
        BearerTokenAuthenticator("tok123").apply(http_session, context, urlsplit("https://api.example.org/"))

        assert context.headers["Authorization"] == "Bearer tok123"


class TestServiceAuthenticator:
    def test_longest_prefix_wins(self, http_session):
        authenticator = ServiceAuthenticator({})
        authenticator.register("http://example.org/", "general", "pw1")
        authenticator.register("http://example.org/ds/", "dataset", "pw2")

        context = HttpContext()
        authenticator.apply(http_session, context, urlsplit("http://example.org/ds/query"))

        assert context.auth == HTTPBasicAuth("dataset", "pw2")

    def test_no_match_leaves_request_unauthenticated(self, http_session):
        authenticator = ServiceAuthenticator({})
        authenticator.register("http://example.org/", "user", "pw")

        context = HttpContext()
        authenticator.apply(http_session, context, urlsplit("http://other.example.org/"))

        assert context.auth is None

    @pytest.mark.parametrize(
        "uri",
        [
            "http://example.org.evil.com/steal",
            "http://example.org:8080/",
            "https://example.org/",
            "http://evil.com/http://example.org",
        ],
    )
    def test_other_origins_do_not_match(self, uri):
        authenticator = ServiceAuthenticator({})
        authenticator.register("http://example.org", "user", "pw")

        assert authenticator.find(uri) is None

    @pytest.mark.parametrize(
        "uri",
        ["http://example.org", "http://example.org/", "http://EXAMPLE.org:80/sparql"],
    )
    def test_same_origin_matches(self, uri):
        authenticator = ServiceAuthenticator({})
        authenticator.register("http://example.org", "user", "pw")

        assert authenticator.find(uri)[0] == "http://example.org"

    def test_path_prefix_matches_whole_segments(self):
        authenticator = ServiceAuthenticator({})
        authenticator.register("http://example.org/ds", "user", "pw")

        assert authenticator.find("http://example.org/ds") is not None
        assert authenticator.find("http://example.org/ds/query") is not None
        assert authenticator.find("http://example.org/dsx/query") is None

    def test_unregister(self):
        authenticator = ServiceAuthenticator({})
        authenticator.register("http://example.org/", "user", "pw")
        authenticator.unregister("http://example.org/")

        assert authenticator.find("http://example.org/x") is None

    def test_from_config(self):
        config = HttpOpConfig(services={
            "https://secure.example.org/": {"username": "alice", "password": "pw", "scheme": "digest"},
        })

        authenticator = ServiceAuthenticator.from_config(config)
        prefix, simple = authenticator.find("https://secure.example.org/data")

        assert prefix == "https://secure.example.org/"
        assert simple.username == "alice"
        assert simple.scheme is AuthScheme.DIGEST

    def test_lazily_loads_process_configuration(self):
        set_config(HttpOpConfig(services={
            "http://example.org/": {"username": "bob", "password": "pw"},
        }))

        authenticator = ServiceAuthenticator()

        assert authenticator.find("http://example.org/sparql")[1].username == "bob"

    def test_invalidate_reloads_configuration(self):
        set_config(HttpOpConfig(services={
            "http://example.org/": {"username": "bob", "password": "pw"},
        }))
        authenticator = ServiceAuthenticator()
        assert authenticator.find("http://example.org/") is not None

        set_config(HttpOpConfig())
        authenticator.invalidate()

        assert authenticator.find("http://example.org/") is None


class TestDefaultAuthenticator:
    def test_holder_get_set(self):
        holder = DefaultAuthenticatorHolder()
        assert holder.get() is None

        authenticator = BearerTokenAuthenticator("t")
        holder.set(authenticator)
        assert holder.get() is authenticator

    def test_concurrent_get_and_set(self):
        candidates = [BearerTokenAuthenticator(f"t{i}") for i in range(4)]
        holder = DefaultAuthenticatorHolder(candidates[0])
        observed = []
        lock = threading.Lock()

        def writer(authenticator):
            for _ in range(200):
                holder.set(authenticator)

        def reader():
            for _ in range(200):
                value = holder.get()
                with lock:
                    observed.append(value)

        threads = [threading.Thread(target=writer, args=(a,)) for a in candidates]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(observed) == 800
        assert all(any(value is c for c in candidates) for value in observed)
        assert any(holder.get() is c for c in candidates)

    def test_set_and_get_default(self):
        authenticator = BearerTokenAuthenticator("t")
        set_default_authenticator(authenticator)
        assert get_default_authenticator() is authenticator

        set_default_authenticator(None)
        assert get_default_authenticator() is None


class TestApplyAuthentication:
    def test_explicit_authenticator_is_used(self, http_session):
        authenticator = Mock(spec=HttpAuthenticator)
        context = HttpContext()

        apply_authentication(http_session, "http://example.org/q#frag", context, authenticator)

        authenticator.apply.assert_called_once()
        session_arg, context_arg, uri_arg = authenticator.apply.call_args[0]
        assert session_arg is http_session
        assert context_arg is context
        assert uri_arg.netloc == "example.org"

    def test_falls_back_to_default(self, http_session):
        default = Mock(spec=HttpAuthenticator)
        set_default_authenticator(default)

        apply_authentication(http_session, "http://example.org/", HttpContext())

        default.apply.assert_called_once()

    def test_explicit_authenticator_overrides_default(self, http_session):
        default = Mock(spec=HttpAuthenticator)
        explicit = Mock(spec=HttpAuthenticator)
        set_default_authenticator(default)

        apply_authentication(http_session, "http://example.org/", HttpContext(), explicit)

        explicit.apply.assert_called_once()
        default.apply.assert_not_called()

    def test_no_default_means_no_authentication(self, http_session):
        set_default_authenticator(None)
        context = HttpContext()

        apply_authentication(http_session, "http://example.org/", context)

        assert context.auth is None
        assert context.headers == {}

    def test_no_session_is_a_no_op(self):
        authenticator = Mock(spec=HttpAuthenticator)

        apply_authentication(None, "http://example.org/", HttpContext(), authenticator)

        authenticator.apply.assert_not_called()

    def test_malformed_uri_raises(self, http_session):
        with pytest.raises(InvalidRequestURIError):
            apply_authentication(
                http_session, "http://example.org:notaport/", HttpContext(), Mock(spec=HttpAuthenticator)
            )


class TestParseRequestUri:
    def test_none(self):
        with pytest.raises(InvalidRequestURIError) as exc_info:
            parse_request_uri(None)
        assert exc_info.value.uri is None

    def test_empty(self):
        with pytest.raises(InvalidRequestURIError):
            parse_request_uri("  ")

    def test_valid(self):
        parsed = parse_request_uri("https://example.org:8443/a?b=c")
        assert parsed.port == 8443
        assert parsed.query == "b=c"
