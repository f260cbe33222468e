"""
Service settings loaded from environment variables (and an optional .env file).

Usage:
    from hashistack_hello.config import get_settings
    token = get_settings().VAULT_TOKEN
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings resolved once at startup and read-only afterwards."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    VAULT_TOKEN: str = Field(
        default="root",
        description="Token sent as X-Vault-Token when reading secrets",
    )

    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        description="Per-call timeout for Consul and Vault requests",
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to",
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server",
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
