"""Client configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class Settings(BaseSettings):
    """Client settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Solve360 API
    SOLVE360_URL: str = "https://secure.solve360.com"
    SOLVE360_USERNAME: str = ""
    SOLVE360_TOKEN: str = ""
    SOLVE360_TIMEOUT: float = 30.0

    # Ownership applied to records saved without one
    SOLVE360_DEFAULT_OWNERSHIP: str = ""

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def base_url(self) -> str:
        """API root without a trailing slash."""
        return self.SOLVE360_URL.rstrip("/")

    @property
    def basic_auth(self) -> tuple[str, str]:
        """(username, token) pair for HTTP basic authentication."""
        return (self.SOLVE360_USERNAME, self.SOLVE360_TOKEN)


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
