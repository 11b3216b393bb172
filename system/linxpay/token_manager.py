"""Token manager for LinxPay API authentication.

Owns the OAuth2 token lifecycle for one set of credentials:

1. First use: password grant (or client_credentials when no user is set)
2. Cached token still valid: reuse it, no network call
3. Expired: refresh grant with the cached refresh token
4. No refresh token was ever issued: authorize again

Tokens live only in memory on the instance. A re-entrant lock serializes
acquisition so concurrent callers share one round-trip per expiry.
"""

from __future__ import annotations

import threading
import time
from typing import Any

import requests

from infrastructure.client import Client
from infrastructure.http.http_transport import HttpTransport, json_body
from infrastructure.logging.logger import get_logger
from system.linxpay.errors import AuthError
from system.linxpay.models import Credentials, Token


class TokenManager(Client):
    """Produces valid bearer tokens for LinxPay requests.

    Args:
        credentials: Validated OAuth2 credentials.
        transport: HttpTransport used for token endpoint calls.
        expiry_leeway: Seconds before ``expires_at`` at which a token is
            already treated as expired.
        logger: Optional logger instance. If not provided, creates a new logger.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: HttpTransport | None = None,
        expiry_leeway: float = 30.0,
        logger=None,
    ) -> None:
        self.credentials = credentials
        self.transport = transport or HttpTransport()
        self.expiry_leeway = expiry_leeway
        self.logger = logger or get_logger(self.__class__.__name__)
        self._token: Token | None = None
        self._lock = threading.RLock()

    @property
    def token(self) -> Token | None:
        """The cached token, if any. Never triggers a network call."""
        return self._token

    def authorize(self, credentials: Credentials | None = None) -> Token:
        """Acquire a fresh token from the token endpoint.

        Uses the password grant when a username and password are configured,
        the client_credentials grant otherwise.

        Args:
            credentials: Optional replacement credentials; stored for later
                refreshes when given.

        Returns:
            The newly cached token.

        Raises:
            AuthError: If the token endpoint rejects the request or cannot be
                reached.
        """
        with self._lock:
            if credentials is not None:
                self.credentials = credentials
            creds = self.credentials

            payload = {"client_id": creds.client_id, "client_secret": creds.client_secret}
            if creds.has_user_credentials:
                payload.update(
                    grant_type="password", username=creds.username, password=creds.password
                )
            else:
                self.logger.debug("No username/password configured, using client_credentials")
                payload["grant_type"] = "client_credentials"

            self.logger.debug(f"Requesting {payload['grant_type']} token")
            self._token = self._request_token(payload)
            self.logger.info("Acquired LinxPay access token")
            return self._token

    def refresh(self) -> Token:
        """Exchange the cached refresh token for a new token.

        A response without ``refresh_token`` keeps the previous one.

        Raises:
            AuthError: If there is no refresh token or the exchange fails.
        """
        with self._lock:
            current = self._token
            if current is None or not current.refresh_token:
                raise AuthError("No refresh token available, authorize first")

            payload = {
                "grant_type": "refresh_token",
                "refresh_token": current.refresh_token,
                "client_id": self.credentials.client_id,
                "client_secret": self.credentials.client_secret,
            }

            self.logger.debug("Sending token refresh request")
            self._token = self._request_token(payload, fallback_refresh=current.refresh_token)
            self.logger.info("Refreshed LinxPay access token")
            return self._token

    def get_valid_token(self) -> Token:
        """Return a usable token, acquiring or refreshing it when needed.

        Raises:
            AuthError: If acquisition or refresh fails.
        """
        token = self._token
        if token is not None and not self._is_expired(token):
            return token

        with self._lock:
            token = self._token
            if token is not None and not self._is_expired(token):
                self.logger.debug("Token was renewed by another caller")
                return token
            return self._renew(token)

    def refresh_if_current(self, stale: Token) -> Token:
        """Renew after the API rejected ``stale``.

        If another caller already replaced ``stale``, that token is returned
        without a round-trip.
        """
        with self._lock:
            current = self._token
            if current is not None and current.access_token != stale.access_token:
                self.logger.debug("Rejected token already replaced")
                return current
            return self._renew(current)

    def invalidate(self) -> None:
        """Drop the cached token so the next call authorizes from scratch."""
        with self._lock:
            self._token = None

    def close(self) -> None:
        self.transport.close()

    def _renew(self, token: Token | None) -> Token:
        if token is None:
            return self.authorize()
        if token.refresh_token:
            self.logger.info("Access token expired, refreshing")
            return self.refresh()
        self.logger.info("Access token expired and no refresh token was issued, re-authorizing")
        return self.authorize()

    def _is_expired(self, token: Token) -> bool:
        return token.is_expired(time.time(), self.expiry_leeway)

    def _request_token(
        self, payload: dict[str, str], fallback_refresh: str | None = None
    ) -> Token:
        url = self.credentials.token_endpoint
        try:
            response = self.transport.request(
                "POST", url, data=payload, headers={"Accept": "application/json"}
            )
        except requests.RequestException as e:
            self.logger.error(f"Token request to {url} failed: {e}")
            raise AuthError(f"Token request failed: {e}") from e

        body = self._decode(response)
        if not 200 <= response.status_code < 300:
            self.logger.error(f"Token request failed: {response.status_code}")
            raise AuthError(
                f"Token request failed with status {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        if not isinstance(body, dict) or not body.get("access_token"):
            raise AuthError(
                "Token response did not include an access_token",
                status_code=response.status_code,
                body=body,
            )

        expires_at = None
        lifetime = None
        if body.get("expires_in") is not None:
            try:
                lifetime = float(body["expires_in"])
            except (TypeError, ValueError) as e:
                raise AuthError(
                    f"Token response has an invalid expires_in: {body['expires_in']!r}",
                    status_code=response.status_code,
                    body=body,
                ) from e
            expires_at = time.time() + lifetime

        return Token(
            access_token=str(body["access_token"]),
            refresh_token=body.get("refresh_token") or fallback_refresh,
            expires_at=expires_at,
            lifetime=lifetime,
        )

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return json_body(response)
        except ValueError:
            return response.text
