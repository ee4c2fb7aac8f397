"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC offset) used for persisted timestamps",
    )
    notification_brand_name: str = Field(
        default="GramorX",
        description="Product name used when an event key cannot produce a title",
        min_length=1,
    )
    notification_fallback_message: str = Field(
        default="You have a new notification",
        description="Body used when neither a template nor the payload yields content",
        min_length=1,
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level configured by the application factory",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Drop cached settings and the timezone derived from them."""

    from notification_engine.utils.datetime import get_app_timezone

    get_settings.cache_clear()
    get_app_timezone.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
