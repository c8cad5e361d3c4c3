"""Tests for configuration module."""

import os
from unittest.mock import patch

import pytest

from steam_price_notifier.config import (
    DiscordConfig,
    LoggingConfig,
    NotionConfig,
    Settings,
    SteamConfig,
)


class TestSteamConfig:
    """Tests for Steam configuration."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        with patch.dict(os.environ, {"STEAM_USER_ID": "76561198000000000"}, clear=True):
            config = SteamConfig()

        assert config.user_id == "76561198000000000"
        assert config.wishlist_url == (
            "https://api.steampowered.com/IWishlistService/GetWishlist/v1/"
        )
        assert config.app_details_url == "https://store.steampowered.com/api/appdetails/"
        assert config.country_code == "jp"
        assert config.requests_per_second == 5.0

    def test_user_id_required(self) -> None:
        """Test that the user ID is required."""
        with patch.dict(os.environ, {}, clear=True), pytest.raises(ValueError):
            SteamConfig()

    def test_user_id_not_blank(self) -> None:
        """Test that an empty user ID is rejected."""
        with patch.dict(os.environ, {"STEAM_USER_ID": ""}, clear=True), pytest.raises(ValueError):
            SteamConfig()


class TestNotionConfig:
    """Tests for Notion configuration."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        with patch.dict(
            os.environ,
            {"NOTION_API_KEY": "secret_key_123", "NOTION_DATABASE_ID": "db-1"},
            clear=True,
        ):
            config = NotionConfig()

        assert config.base_url == "https://api.notion.com/v1"
        assert config.api_version == "2022-06-28"
        assert config.requests_per_second == 3.0

    def test_api_key_secret(self) -> None:
        """Test that API key is stored as secret."""
        with patch.dict(
            os.environ,
            {"NOTION_API_KEY": "secret_key_123", "NOTION_DATABASE_ID": "db-1"},
            clear=True,
        ):
            config = NotionConfig()

        assert "secret_key_123" not in repr(config.api_key)
        assert config.api_key.get_secret_value() == "secret_key_123"

    def test_missing_values(self) -> None:
        """Test that key and database ID are required."""
        with patch.dict(os.environ, {}, clear=True), pytest.raises(ValueError):
            NotionConfig()

    def test_empty_values(self) -> None:
        """Test that empty key and database ID are rejected."""
        with (
            patch.dict(
                os.environ,
                {"NOTION_API_KEY": "", "NOTION_DATABASE_ID": ""},
                clear=True,
            ),
            pytest.raises(ValueError),
        ):
            NotionConfig()


class TestDiscordConfig:
    """Tests for Discord configuration."""

    def test_webhook_url(self) -> None:
        """Test webhook URL is built from ID and token."""
        with patch.dict(
            os.environ,
            {"DISCORD_WEBHOOK_ID": "123", "DISCORD_WEBHOOK_TOKEN": "s3cr3t"},
            clear=True,
        ):
            config = DiscordConfig()

        assert config.webhook_url == "https://discord.com/api/webhooks/123/s3cr3t"
        assert "s3cr3t" not in repr(config)

    def test_missing_token(self) -> None:
        """Test that the webhook token is required."""
        with (
            patch.dict(os.environ, {"DISCORD_WEBHOOK_ID": "123"}, clear=True),
            pytest.raises(ValueError),
        ):
            DiscordConfig()


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_valid_levels(self) -> None:
        """Test valid log levels."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            with patch.dict(os.environ, {"LOG_LEVEL": level}):
                config = LoggingConfig()
                assert config.level == level

    def test_invalid_format(self) -> None:
        """Test that unknown formats are rejected."""
        with patch.dict(os.environ, {"LOG_FORMAT": "xml"}), pytest.raises(ValueError):
            LoggingConfig()


class TestSettings:
    """Tests for aggregated settings."""

    def test_sections_loaded(self, mock_env: None) -> None:
        """Test every section is read from the environment."""
        settings = Settings()

        assert settings.steam.user_id == "76561198000000000"
        assert settings.notion.database_id == "db-0000"
        assert settings.discord.webhook_id == "123456"
        assert settings.logging.format == "json"
