"""Configuration models for infrastructure components.

Provides Pydantic settings shared by anything that speaks HTTP.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HttpConfig(BaseSettings):
    """HTTP transport configuration with environment variable support.

    Reads from HTTP_* environment variables automatically.

    Attributes:
        timeout_seconds: Connect/read timeout applied to every request.
        user_agent: User-Agent header sent with every request.
    """

    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="linxpay-python")

    model_config = SettingsConfigDict(
        env_prefix="HTTP_",
        env_file=None,
        extra="ignore",
    )
