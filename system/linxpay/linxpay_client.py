"""
LinxPay API Client

Exposes one method per LinxPay business operation. Each call:
1. Resolves the operation's EndpointSpec
2. Validates the payload (redemption only) - raises ValidationError
3. Gets a bearer token from TokenManager - AuthError propagates
4. Sends the request; on 401 renews the token once and retries
5. Normalizes the response into Success / ApiError / TransportError

API-level 4xx responses (e.g. a declined card) are returned as ApiError
values, never raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
import requests

from infrastructure.client import Client
from infrastructure.http.form_encoding import encode_form_fields
from infrastructure.http.http_transport import HttpTransport, json_body
from infrastructure.logging.logger import get_logger
from system.linxpay.config import LinxPayConfig, LinxPayOptions
from system.linxpay.endpoints import POLL, REDEMPTION, EndpointSpec
from system.linxpay.errors import ConfigError, InternalError
from system.linxpay.models import RedemptionRequest, Token
from system.linxpay.results import ApiError, ApiResult, Success, TransportError
from system.linxpay.token_manager import TokenManager
from system.linxpay.validation import validate


class LinxPayClient(Client):
    """Client for the LinxPay point-of-sale API.

    Args:
        config: Optional LinxPayConfig. If None, auto-populates from environment.
        transport: Optional HttpTransport shared by token and API calls.
        token_manager: Optional pre-built TokenManager.
        logger: Optional logger instance.

    Raises:
        ConfigError: If client_id or client_secret is missing.
    """

    def __init__(
        self,
        config: LinxPayConfig | None = None,
        transport: HttpTransport | None = None,
        token_manager: TokenManager | None = None,
        logger=None,
    ) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        if config is None:
            try:
                config = LinxPayConfig()
            except pydantic.ValidationError as e:
                raise ConfigError(f"Invalid LinxPay environment configuration: {e}") from e
        self.config = config
        self.credentials = config.to_credentials()
        self.transport = transport or HttpTransport(config.http)
        self.token_manager = token_manager or TokenManager(
            self.credentials,
            transport=self.transport,
            expiry_leeway=config.token_expiry_leeway,
        )
        self.logger.debug(f"LinxPayClient initialized for {self.credentials.base_uri}")

    @classmethod
    def from_options(cls, **options: Any) -> LinxPayClient:
        """Build a client from a plain options map.

        Only the given options are used; LINXPAY_* environment variables are
        not consulted.

        Raises:
            ConfigError: On unknown keys, bad values or missing credentials.
        """
        try:
            config = LinxPayOptions(**options)
        except pydantic.ValidationError as e:
            raise ConfigError(f"Invalid LinxPay configuration: {e}") from e
        return cls(config)

    def poll(self) -> ApiResult:
        """Check connectivity and credentials against the API."""
        return self.execute(POLL)

    def redemption(self, fields: RedemptionRequest | Mapping[str, Any]) -> ApiResult:
        """Redeem a Linx card transaction.

        Raises:
            ValidationError: If ``fields`` breaks a field rule. No request is
                sent in that case.
        """
        validate(fields, REDEMPTION.required_fields)
        return self.execute(REDEMPTION, fields)

    def execute(self, spec: EndpointSpec, fields: Mapping[str, Any] | None = None) -> ApiResult:
        """Send an authorized request for ``spec`` and normalize the response.

        Args:
            spec: Endpoint descriptor.
            fields: Payload, form-encoded for POST; ignored for GET.

        Returns:
            Success, ApiError or TransportError.

        Raises:
            InternalError: If ``spec`` has no path or method.
            AuthError: If no valid token can be obtained.
        """
        if not spec.path or not spec.method:
            raise InternalError(f"Invalid endpoint: {spec!r}")

        method = spec.method.upper()
        url = self.credentials.url_for(spec.path)
        kwargs: dict[str, Any] = {}
        if method != "GET":
            kwargs["data"] = encode_form_fields(fields)

        token = self.token_manager.get_valid_token()
        self.logger.info(f"{method} {spec.path}")

        try:
            response = self._send(method, url, token, **kwargs)
            if response.status_code == 401:
                self.logger.warning(f"{spec.path} rejected the access token, renewing and retrying")
                token = self.token_manager.refresh_if_current(token)
                response = self._send(method, url, token, **kwargs)
        except requests.RequestException as e:
            self.logger.error(f"{method} {spec.path} failed: {e}")
            return TransportError(reason=str(e) or e.__class__.__name__)

        return self._normalize(spec, response)

    def close(self) -> None:
        self.transport.close()

    def _send(self, method: str, url: str, token: Token, **kwargs: Any) -> requests.Response:
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "Accept": "application/json",
        }
        return self.transport.request(method, url, headers=headers, **kwargs)

    def _normalize(self, spec: EndpointSpec, response: requests.Response) -> ApiResult:
        status = response.status_code

        if 400 <= status < 500:
            try:
                body = json_body(response)
            except ValueError:
                body = None
            self.logger.warning(f"{spec.path} returned {status}")
            return ApiError(body=body, status_code=status)

        if not 200 <= status < 300:
            self.logger.error(f"{spec.path} returned {status} - {response.text[:200]}")
            return TransportError(reason=f"Unexpected HTTP status {status}", status_code=status)

        try:
            body = json_body(response)
        except ValueError:
            self.logger.error(f"{spec.path} returned a non-JSON body")
            return TransportError(reason="Malformed response: body is not JSON", status_code=status)

        return Success(body=body, status_code=status)
