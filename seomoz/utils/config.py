"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "http://lsapi.seomoz.com/linkscape/url-metrics/"


class Settings(BaseSettings):
    """Client settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Credentials
    SEOMOZ_ACCESS_ID: str = ""
    SEOMOZ_SECRET_KEY: str = ""

    # API
    SEOMOZ_API_URL: str = DEFAULT_API_URL
    SEOMOZ_MAX_BATCH_URLS: int = 10
    SEOMOZ_MAX_CONCURRENCY: Optional[int] = None  # None = one request per batch at once
    SEOMOZ_TIMEOUT: float = 60.0

    LOG_LEVEL: str = "WARNING"

    @property
    def has_credentials(self) -> bool:
        """Check if both credentials are set."""
        return bool(self.SEOMOZ_ACCESS_ID and self.SEOMOZ_SECRET_KEY)


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
