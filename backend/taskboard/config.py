"""
Application settings for Taskboard.

Values are read from environment variables (or a local .env file).
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# Publicly known; only acceptable for local development with debug enabled
DEFAULT_JWT_SECRET = "change-me-in-production-use-a-long-random-value"


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TASKBOARD_",
        extra="ignore",
    )

    app_name: str = "Taskboard"
    debug: bool = False
    log_level: str | None = None
    log_json: bool = False

    database_url: str = "sqlite+aiosqlite:///./taskboard.db"

    # Bearer tokens
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Passwords
    bcrypt_rounds: int = 12

    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
