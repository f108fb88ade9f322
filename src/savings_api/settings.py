"""
savings_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, identity provider key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration, prefixed with `SAVINGS_`.
    Defaults are safe for local development only.
    """

    model_config = SettingsConfigDict(env_prefix="SAVINGS_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "savings-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    # Hosting platforms usually hand the port over as plain `PORT`.
    api_port: int = Field(default=5000, validation_alias=AliasChoices("SAVINGS_API_PORT", "PORT"))
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Auth
    auth_strategy: Literal["self_issued", "delegated"] = "self_issued"
    jwt_alg: str = "HS256"
    jwt_issuer: str = "savings-api"
    jwt_audience: str = "savings-app"
    jwt_secret: str = Field(default="dev-secret-change-me-please-32-bytes", repr=False)
    jwt_ttl_minutes: int = 60
    allow_admin_signup: bool = False

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./savings.db"

    # Identity provider (used when auth_strategy == "delegated")
    identity_provider_url: str = "https://identitytoolkit.googleapis.com"
    identity_provider_api_key: str = Field(default="", repr=False)
    identity_provider_timeout_seconds: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()
