"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "EventHub"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Store
    seed_data_path: Path | None = Field(
        default=None,
        description="JSON file with users, locations, events and participants",
    )
    id_length: int = Field(
        default=21,
        ge=8,
        le=64,
        description="Length of generated record identifiers",
    )

    # Notifications
    subscription_queue_size: int = Field(
        default=100,
        ge=0,
        description="Pending deliveries per subscription (0 = unbounded)",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
