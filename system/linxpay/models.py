"""Domain models for the LinxPay client.

Credentials and Token are immutable values; payload shapes are TypedDicts so
callers can keep passing plain dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypedDict, Union

from system.linxpay.errors import ConfigError

DEFAULT_BASE_URI = "https://linxpay-staging.linxkiosk.com"
DEFAULT_TOKEN_URL = "/oauth/token"

REQUIRED_CREDENTIALS = ("client_id", "client_secret")


class ProductType(Enum):
    """Product categories accepted by the redemption endpoint."""

    RECREATIONAL = "recreational"
    MEDICINAL = "medicinal"


class CustomerType(Enum):
    """Identity documents accepted for a redemption customer."""

    DRIVERS_LICENSE = "drivers_license"
    PASSPORT = "passport"


@dataclass(frozen=True)
class Credentials:
    """OAuth2 credentials and endpoint location for one LinxPay account.

    Raises:
        ConfigError: If ``client_id`` or ``client_secret`` is empty.
    """

    client_id: str
    client_secret: str
    username: str = ""
    password: str = ""
    token_url: str = DEFAULT_TOKEN_URL
    base_uri: str = DEFAULT_BASE_URI

    def __post_init__(self) -> None:
        for name in REQUIRED_CREDENTIALS:
            if not getattr(self, name):
                raise ConfigError(f"Missing required configuration parameter: {name}")

    @property
    def has_user_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def token_endpoint(self) -> str:
        if self.token_url.startswith(("http://", "https://")):
            return self.token_url
        return self.url_for(self.token_url)

    def url_for(self, path: str) -> str:
        """Join an endpoint path onto ``base_uri``."""
        return f"{self.base_uri.rstrip('/')}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        return (
            f"Credentials(client_id={self.client_id!r}, username={self.username!r}, "
            f"base_uri={self.base_uri!r})"
        )


@dataclass(frozen=True)
class Token:
    """An issued access token.

    Attributes:
        access_token: Bearer credential attached to API requests.
        refresh_token: Credential for the refresh grant, if one was issued.
        expires_at: Epoch seconds at which the token expires, or None when the
            server did not report a lifetime.
        lifetime: The ``expires_in`` the token was issued with, in seconds.
    """

    access_token: str
    refresh_token: str | None = None
    expires_at: float | None = None
    lifetime: float | None = None

    def is_expired(self, now: float, leeway: float = 0) -> bool:
        """True once ``now`` is within ``leeway`` seconds of ``expires_at``.

        The leeway never exceeds half the token's lifetime, so a short-lived
        token is still reused for the first half of its life.
        """
        if self.expires_at is None:
            return False
        if self.lifetime is not None:
            leeway = min(leeway, self.lifetime / 2)
        return now >= self.expires_at - leeway

    def __repr__(self) -> str:
        return f"Token(expires_at={self.expires_at!r})"


class Customer(TypedDict, total=False):
    type: str
    id_number: str
    state: str
    country: str


class NamedParty(TypedDict):
    name: str


class RedemptionRequest(TypedDict):
    """Form payload for ``POST /api/v1/redemptions/redemption``."""

    linx_card_number: str
    customer: Customer
    product_type: str
    store_location: NamedParty
    budtender: NamedParty
    amount: Union[int, float, str]
