"""Shared fixtures for LinxPay client tests.

All external dependencies (env, HTTP transport, clock) are mocked here so
individual tests only assert behavior and contracts. Responses are real
``requests.Response`` objects so JSON decoding follows the production path.
"""

from __future__ import annotations

import json
import os
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests

from infrastructure.http.http_transport import HttpTransport
from system.linxpay.config import LinxPayConfig

BASE_URI = "https://linxpay.test"
TOKEN_URL = f"{BASE_URI}/oauth/token"
POLL_URL = f"{BASE_URI}/api/v1/poll"
REDEMPTION_URL = f"{BASE_URI}/api/v1/redemptions/redemption"
NOW = 1_000_000.0


def build_response(
    status_code: int = 200,
    body: Any = None,
    text: str | None = None,
) -> requests.Response:
    """Build a ``requests.Response`` with a JSON (or raw text) body."""
    response = requests.Response()
    response.status_code = status_code
    if text is None:
        text = "" if body is None else json.dumps(body)
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


def token_body(
    access: str = "access-1",
    refresh: str | None = "refresh-1",
    expires_in: int | None = 3600,
) -> dict[str, Any]:
    body: dict[str, Any] = {"access_token": access, "token_type": "Bearer"}
    if refresh is not None:
        body["refresh_token"] = refresh
    if expires_in is not None:
        body["expires_in"] = expires_in
    return body


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove LINXPAY_* and HTTP_* variables so configs only see test input."""
    for name in list(os.environ):
        if name.startswith(("LINXPAY_", "HTTP_")):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def make_token_body():
    return token_body


@pytest.fixture
def token_response() -> requests.Response:
    return build_response(200, token_body())


@pytest.fixture
def config() -> LinxPayConfig:
    return LinxPayConfig(
        base_uri=BASE_URI,
        username="pos-user",
        password="pos-pass",
        client_id="test-client",
        client_secret="test-secret",
    )


@pytest.fixture
def credentials(config: LinxPayConfig):
    return config.to_credentials()


@pytest.fixture
def transport() -> MagicMock:
    """HttpTransport double; tests script ``request.side_effect``."""
    return MagicMock(spec=HttpTransport)


@pytest.fixture
def clock():
    """Patch the time module used by TokenManager; ``clock.time`` is adjustable."""
    with patch("system.linxpay.token_manager.time") as time_mod:
        time_mod.time.return_value = NOW
        yield time_mod


@pytest.fixture
def token_manager(credentials, transport: MagicMock, clock):  # noqa: ARG001
    from system.linxpay.token_manager import TokenManager

    return TokenManager(credentials, transport=transport, logger=MagicMock())


@pytest.fixture
def client(config: LinxPayConfig, transport: MagicMock, clock):  # noqa: ARG001
    from system.linxpay.linxpay_client import LinxPayClient

    return LinxPayClient(config, transport=transport)


@pytest.fixture
def redemption_fields() -> dict[str, Any]:
    return {
        "linx_card_number": "123",
        "customer": {"type": "passport", "id_number": "X1", "country": "US"},
        "product_type": "medicinal",
        "store_location": {"name": "Shop"},
        "budtender": {"name": "Bud"},
        "amount": 20,
    }
