"""
Process-wide link defaults loaded from environment variables.

Example:
    GRAPHLINK_URI=https://api.example.com/graphql
    GRAPHLINK_INCLUDE_EXTENSIONS=true
    GRAPHLINK_TIMEOUT=10
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class LinkSettings(BaseSettings):
    """Defaults applied when a link is created without explicit values."""

    model_config = SettingsConfigDict(env_prefix="GRAPHLINK_", extra="ignore")

    URI: str = "/graphql"
    INCLUDE_EXTENSIONS: bool = False

    # httpx client
    TIMEOUT: float = 30.0
    BASE_URL: str = ""


def load_settings() -> LinkSettings:
    """Read settings from the current environment."""
    return LinkSettings()
