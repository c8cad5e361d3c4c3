"""Shared fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from steam_price_notifier.config import get_logging_config, get_settings

TEST_ENV = {
    "STEAM_USER_ID": "76561198000000000",
    "NOTION_API_KEY": "secret_notion_key",
    "NOTION_DATABASE_ID": "db-0000",
    "DISCORD_WEBHOOK_ID": "123456",
    "DISCORD_WEBHOOK_TOKEN": "webhook_token_abc",
}

WISHLIST_URL = "https://api.steampowered.com/IWishlistService/GetWishlist/v1/"
APP_DETAILS_URL = "https://store.steampowered.com/api/appdetails/"
NOTION_QUERY_URL = "https://api.notion.com/v1/databases/db-0000/query"
NOTION_PAGES_URL = "https://api.notion.com/v1/pages"
DISCORD_WEBHOOK_URL = "https://discord.com/api/webhooks/123456/webhook_token_abc"


@pytest.fixture
def mock_env() -> Iterator[None]:
    """Mock environment variables for tests."""
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    with patch.dict(os.environ, TEST_ENV, clear=True):
        yield
    get_settings.cache_clear()
    get_logging_config.cache_clear()
