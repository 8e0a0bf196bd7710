"""
Unit tests for default session creation.
"""

from unittest.mock import patch

from requests.adapters import HTTPAdapter

from httpop.core.config import HttpOpConfig, TransportConfig, set_config
from httpop.infrastructure.http.transport import create_retry, create_session


class TestCreateRetry:
    def test_only_connect_failures_are_retried(self):
        retry = create_retry(TransportConfig(connect_retries=4, backoff_factor=0.5))

        assert retry.connect == 4
        assert retry.read == 0
        assert retry.status == 0
        assert retry.other == 0
        assert retry.backoff_factor == 0.5
        assert retry.raise_on_status is False


class TestCreateSession:
    def test_uses_transport_config(self):
        config = TransportConfig(user_agent="test-agent/1.0", max_redirects=3, verify_tls=False, connect_retries=1)

        session = create_session(config)
        try:
            assert session.headers["User-Agent"] == "test-agent/1.0"
            assert session.max_redirects == 3
            assert session.verify is False

            for prefix in ("http://", "https://"):
                adapter = session.get_adapter(prefix + "example.org/")
                assert isinstance(adapter, HTTPAdapter)
                assert adapter.max_retries.connect == 1
        finally:
            session.close()

    def test_defaults_to_process_configuration(self):
        set_config(HttpOpConfig(transport={"user_agent": "configured/2.0"}))

        session = create_session()
        try:
            assert session.headers["User-Agent"] == "configured/2.0"
        finally:
            session.close()

    @patch("httpop.infrastructure.http.transport.requests.Session")
    def test_mounts_adapter_for_both_schemes(self, mock_session_class):
        mock_session = mock_session_class.return_value

        create_session(TransportConfig())

        assert mock_session.mount.call_count == 2
        mount_calls = mock_session.mount.call_args_list
        assert mount_calls[0][0][0] == "http://"
        assert mount_calls[1][0][0] == "https://"
