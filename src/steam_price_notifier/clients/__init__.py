"""
API clients for Steam, Notion and Discord.

All clients share a common base with status checking, decoding
into Pydantic contracts, and structured logging.
"""

from steam_price_notifier.clients.base import BaseClient
from steam_price_notifier.clients.discord import DiscordClient
from steam_price_notifier.clients.notion import NotionClient
from steam_price_notifier.clients.steam import SteamClient

__all__ = [
    "BaseClient",
    "DiscordClient",
    "NotionClient",
    "SteamClient",
]
