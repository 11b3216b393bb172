"""Exceptions raised by the LinxPay client.

Only programmer-facing and authentication failures are exceptions. API-level
business errors are returned as ``ApiError`` results (see ``results.py``).
"""

from __future__ import annotations

from typing import Any


class LinxPayError(Exception):
    """Base class for every exception raised by this package."""


class ConfigError(LinxPayError):
    """Required configuration (client_id, client_secret) is missing or invalid."""


class ValidationError(LinxPayError):
    """An outgoing payload failed a field rule; nothing was sent.

    Attributes:
        field: Name of the offending field (e.g. ``"amount"`` or
            ``"customer"``).
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class AuthError(LinxPayError):
    """Token acquisition or refresh failed.

    Attributes:
        status_code: HTTP status returned by the token endpoint, or None if
            the request never completed.
        body: Parsed JSON body of the token endpoint response, the raw text if
            it was not JSON, or None.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InternalError(LinxPayError):
    """An endpoint descriptor is malformed (missing path or method)."""
