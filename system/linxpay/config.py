"""Configuration for the LinxPay client.

``LinxPayConfig`` reads LINXPAY_* environment variables and converts them into
validated ``Credentials``. ``LinxPayOptions`` takes keyword arguments only.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from infrastructure.config import HttpConfig
from system.linxpay.models import DEFAULT_BASE_URI, DEFAULT_TOKEN_URL, Credentials


class LinxPayConfig(BaseSettings):
    """LinxPay API configuration with environment variable support.

    Unknown keyword arguments are rejected rather than silently ignored.

    Attributes:
        base_uri: API root URL.
        username: Password-grant username.
        password: Password-grant password.
        client_id: OAuth2 client id (required).
        client_secret: OAuth2 client secret (required).
        token_url: Token endpoint path, or an absolute URL.
        token_expiry_leeway: Seconds before expiry at which a token is
            treated as expired.
        http: Transport settings.
    """

    base_uri: str = Field(default=DEFAULT_BASE_URI)
    username: str = Field(default="")
    password: str = Field(default="", repr=False)
    client_id: str = Field(default="")
    client_secret: str = Field(default="", repr=False)
    token_url: str = Field(default=DEFAULT_TOKEN_URL)
    token_expiry_leeway: float = Field(default=30.0, ge=0)
    http: HttpConfig = Field(default_factory=HttpConfig)

    model_config = SettingsConfigDict(
        env_prefix="LINXPAY_",
        env_file=None,
        extra="forbid",
    )

    def to_credentials(self) -> Credentials:
        """Build immutable credentials.

        Raises:
            ConfigError: If client_id or client_secret is empty.
        """
        return Credentials(
            client_id=self.client_id,
            client_secret=self.client_secret,
            username=self.username,
            password=self.password,
            token_url=self.token_url,
            base_uri=self.base_uri,
        )


class LinxPayOptions(LinxPayConfig):
    """LinxPayConfig built only from explicit keyword arguments.

    LINXPAY_* environment variables are ignored, so a missing client_id or
    client_secret is never filled in from the process environment.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],  # noqa: ARG003
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)
