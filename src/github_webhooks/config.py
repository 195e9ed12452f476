"""Configuration management using Pydantic settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Required settings
    github_webhook_secret: str = Field(
        ...,
        min_length=1,
        description="Secret for validating GitHub webhook signatures",
    )

    # Optional settings
    max_body_size: int = Field(
        default=8_000_000,
        gt=0,
        description="Maximum JSON request body size in bytes",
    )
    webhook_prefix: str = Field(
        default="/api",
        description="Path prefix the webhook router is mounted under",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
