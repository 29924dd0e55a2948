"""Application configuration settings."""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

_CLOCK_PATTERN = re.compile(r"^(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)$")


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA name or UTC offset used for wall-clock schedules and timestamps",
    )
    debug: bool = Field(
        default=False,
        description="Expose internal error details in failed HTTP responses",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    notification_retention_days: int = Field(
        default=10,
        description="Age in days after which notifications are removed",
        gt=0,
    )
    notification_list_limit: int = Field(
        default=50,
        description="Maximum number of notifications returned by a list request",
        gt=0,
    )
    subscription_expiry_window_days: int = Field(
        default=3,
        description="Subscriptions expiring within this many days receive a warning",
        gt=0,
    )
    recipe_keep_top_viewed: int = Field(
        default=5,
        description="Number of most viewed external recipes kept by the recipe cleanup",
        ge=0,
    )

    scheduler_enabled: bool = Field(
        default=True,
        description="Start the recurring jobs when the application boots",
    )
    subscription_expiry_check_at: str = Field(
        default="00:00",
        description="Daily wall-clock time (HH:MM) of the subscription expiry check",
    )
    recipe_cleanup_at: str = Field(
        default="02:00",
        description="Daily wall-clock time (HH:MM) of the stale recipe cleanup",
    )
    notification_cleanup_at: str = Field(
        default="03:30",
        description="Daily wall-clock time (HH:MM) of the notification retention sweep",
    )

    @field_validator(
        "subscription_expiry_check_at", "recipe_cleanup_at", "notification_cleanup_at"
    )
    @classmethod
    def _validate_clock(cls, value: str) -> str:
        if not _CLOCK_PATTERN.match(value.strip()):
            raise ValueError("Schedule times must use the HH:MM 24-hour format")
        return value.strip()


def parse_clock(value: str) -> tuple[int, int]:
    """Return the ``(hour, minute)`` pair encoded in an ``HH:MM`` string."""

    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid schedule time: {value!r}")
    return int(match.group("hour")), int(match.group("minute"))


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "parse_clock", "reset_settings_cache"]
