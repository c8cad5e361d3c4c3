"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _require_non_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty")
    return v


class SteamConfig(BaseSettings):
    """Steam Store / Web API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STEAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_id: str = Field(
        default=...,
        description="SteamID64 of the user whose wishlist is tracked",
    )
    wishlist_url: str = Field(
        default="https://api.steampowered.com/IWishlistService/GetWishlist/v1/",
        description="Wishlist endpoint of the Steam Web API",
    )
    app_details_url: str = Field(
        default="https://store.steampowered.com/api/appdetails/",
        description="App details endpoint of the Steam Store API",
    )
    country_code: str = Field(
        default="jp",
        description="Store region used for pricing",
    )
    requests_per_second: float = Field(
        default=5.0,
        gt=0,
        le=50,
        description="Rate limit for app details requests",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP request timeout in seconds",
    )

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Reject blank user IDs."""
        return _require_non_blank(v)


class NotionConfig(BaseSettings):
    """Notion API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr = Field(
        default=...,
        description="Notion integration token",
    )
    database_id: str = Field(
        default=...,
        description="ID of the database holding the wishlist",
    )
    base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Base URL for the Notion API",
    )
    api_version: str = Field(
        default="2022-06-28",
        description="Value of the Notion-Version header",
    )
    requests_per_second: float = Field(
        default=3.0,
        gt=0,
        le=10,
        description="Rate limit for page writes (Notion allows ~3 req/s)",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: SecretStr) -> SecretStr:
        """Reject blank tokens."""
        _require_non_blank(v.get_secret_value())
        return v

    @field_validator("database_id")
    @classmethod
    def validate_database_id(cls, v: str) -> str:
        """Reject blank database IDs."""
        return _require_non_blank(v)


class DiscordConfig(BaseSettings):
    """Discord webhook configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    webhook_id: str = Field(
        default=...,
        description="Webhook ID",
    )
    webhook_token: SecretStr = Field(
        default=...,
        description="Webhook token",
    )
    base_url: str = Field(
        default="https://discord.com/api",
        description="Base URL for the Discord API",
    )
    requests_per_second: float = Field(
        default=5.0,
        gt=0,
        le=50,
        description="Rate limit for webhook posts",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP request timeout in seconds",
    )

    @field_validator("webhook_id")
    @classmethod
    def validate_webhook_id(cls, v: str) -> str:
        """Reject blank webhook IDs."""
        return _require_non_blank(v)

    @field_validator("webhook_token")
    @classmethod
    def validate_webhook_token(cls, v: SecretStr) -> SecretStr:
        """Reject blank webhook tokens."""
        _require_non_blank(v.get_secret_value())
        return v

    @property
    def webhook_url(self) -> str:
        """Full webhook URL including the secret token."""
        return (
            f"{self.base_url.rstrip('/')}/webhooks/"
            f"{self.webhook_id}/{self.webhook_token.get_secret_value()}"
        )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    steam: SteamConfig = Field(default_factory=SteamConfig)
    notion: NotionConfig = Field(default_factory=NotionConfig)
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()


@lru_cache
def get_logging_config() -> LoggingConfig:
    """Get cached logging configuration (needs no credentials)."""
    return LoggingConfig()
