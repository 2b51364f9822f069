"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, RedisDsn, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repogate.core.constants import (
    DEFAULT_INSECURE_SECRET,
    GITHUB_API_URL,
    GITHUB_AUTHORIZE_URL,
    GITHUB_TOKEN_URL,
    MIN_SECRET_KEY_LENGTH,
    REPO_CACHE_CHECK_PERIOD_SECONDS,
    REPO_CACHE_TTL_SECONDS,
    SESSION_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "repogate"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    host: str = "127.0.0.1"
    port: int = 3000

    # GitHub OAuth app
    client_id: str | None = None
    client_secret: str | None = None
    github_authorize_url: str = GITHUB_AUTHORIZE_URL
    github_token_url: str = GITHUB_TOKEN_URL
    github_api_url: str = GITHUB_API_URL

    # Sessions
    session_secret: str = DEFAULT_INSECURE_SECRET
    session_ttl_seconds: int = Field(default=SESSION_TTL_SECONDS, gt=0)
    session_backend: Literal["memory", "redis"] = "memory"
    cookie_secure: bool = False

    # Redis (only used by the redis session backend)
    redis_url: RedisDsn = RedisDsn("redis://localhost:6379")

    # Repository list cache
    repo_cache_ttl_seconds: int = Field(default=REPO_CACHE_TTL_SECONDS, gt=0)
    repo_cache_check_period_seconds: int = Field(
        default=REPO_CACHE_CHECK_PERIOD_SECONDS, gt=0
    )
    # All sessions share one cached list when enabled. Only safe for a
    # single user.
    repo_cache_shared: bool = False

    # Observability
    log_level: str = "INFO"

    # API Documentation
    api_docs_base_url: str = "https://repogate.example.com"

    @field_validator("session_secret")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """Validate that the session secret is long enough.

        The insecure default is accepted here and rejected at runtime
        by ``is_production``, so development keeps working without setup.

        Raises:
            ValueError: If the secret is too short
        """
        if v != DEFAULT_INSECURE_SECRET and len(v) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"SESSION_SECRET must be at least {MIN_SECRET_KEY_LENGTH} characters. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def oauth_configured(self) -> bool:
        """Check if the GitHub OAuth credentials are present."""
        return bool(self.client_id and self.client_secret)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment.

        Raises:
            ValueError: If using insecure session secret in production
        """
        is_prod = self.environment == "production"
        if is_prod and self.session_secret == DEFAULT_INSECURE_SECRET:
            raise ValueError(
                "SESSION_SECRET must be set to a secure value in production. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )
        return is_prod

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
