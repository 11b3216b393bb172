"""Thin requests-based HTTP transport.

The transport performs a request and hands back the ``requests.Response``.
It does not interpret status codes; callers decide what a 4xx or 5xx means.
Network failures surface as ``requests.RequestException``.
"""

from __future__ import annotations

from typing import Any

import requests

from infrastructure.client import Client
from infrastructure.config import HttpConfig
from infrastructure.logging.logger import get_logger


def json_body(response: requests.Response) -> Any:
    """Decode a response body as JSON.

    Returns:
        The decoded value, or None when the body is empty.

    Raises:
        ValueError: If the body is not valid JSON.
    """
    if not response.content or not response.content.strip():
        return None
    return response.json()


class HttpTransport(Client):
    """Session-backed HTTP transport.

    Args:
        config: Optional HttpConfig. If None, auto-populates from environment.
        session: Optional pre-built ``requests.Session`` (e.g. with custom
            adapters). A new session is created when omitted.
        logger: Optional logger instance.
    """

    def __init__(
        self,
        config: HttpConfig | None = None,
        session: requests.Session | None = None,
        logger=None,
    ) -> None:
        self.config = config or HttpConfig()
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.config.user_agent
        self.logger = logger or get_logger(self.__class__.__name__)

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send an HTTP request.

        Args:
            method: HTTP method (GET, POST, ...).
            url: Absolute URL.
            **kwargs: Passed through to ``requests.Session.request``.

        Returns:
            The raw response, whatever its status code.

        Raises:
            requests.RequestException: On connection errors, timeouts and
                other transport-level failures.
        """
        kwargs.setdefault("timeout", self.config.timeout_seconds)
        self.logger.debug(f"{method} {url}")
        response = self.session.request(method, url, **kwargs)
        self.logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def close(self) -> None:
        self.session.close()
