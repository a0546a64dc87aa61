"""Application settings and configuration.

This module defines all configuration options for the KohliVerse ranking
service. Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="KohliVerse", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./kohliverse.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Hot score tunables: net / (age_hours + hour_offset) ** gravity
    hot_gravity: float = Field(default=1.5, gt=0, alias="HOT_GRAVITY")
    hot_hour_offset: float = Field(default=2.0, gt=0, alias="HOT_HOUR_OFFSET")

    # Voting policy
    allow_self_vote: bool = Field(default=True, alias="ALLOW_SELF_VOTE")
    vote_max_retries: int = Field(default=3, ge=0, alias="VOTE_MAX_RETRIES")

    # Duplicate detection: "canonical" collapses URL variants of one video,
    # "legacy" only matches byte-identical URLs.
    fingerprint_mode: Literal["canonical", "legacy"] = Field(
        default="canonical",
        alias="FINGERPRINT_MODE",
    )

    # Feed pagination
    feed_default_limit: int = Field(default=20, ge=1, alias="FEED_DEFAULT_LIMIT")
    feed_max_limit: int = Field(default=100, ge=1, alias="FEED_MAX_LIMIT")
    leaderboard_limit: int = Field(default=10, ge=1, alias="LEADERBOARD_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()
