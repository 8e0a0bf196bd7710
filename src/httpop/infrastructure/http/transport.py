"""
Default transport sessions.

Builds the requests.Session used when a caller does not supply one. Such a
session lives for a single call and is closed by the dispatcher.
"""

from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from httpop.constants import HEADER_USER_AGENT
from httpop.core.config import TransportConfig, get_config


def create_retry(config: TransportConfig) -> Retry:
    """Retry policy covering connection establishment only.

    Reads, status codes and redirects are never retried at this level, so a
    request that reached the server is sent exactly once.
    """
    return Retry(
        total=None,
        connect=config.connect_retries,
        read=0,
        status=0,
        other=0,
        redirect=None,
        backoff_factor=config.backoff_factor,
        raise_on_status=False,
    )


def create_session(config: Optional[TransportConfig] = None) -> requests.Session:
    """Create a session configured from ``config`` (or the process-wide configuration)."""
    config = config or get_config().transport
    session = requests.Session()
    session.headers.update({HEADER_USER_AGENT: config.user_agent})
    session.max_redirects = config.max_redirects
    session.verify = config.verify_tls

    adapter = HTTPAdapter(max_retries=create_retry(config))
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session
