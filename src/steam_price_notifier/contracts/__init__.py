"""
Data contracts for the Steam, Notion and Discord APIs.

These Pydantic models define the expected structure of every
payload the notifier reads or writes, ensuring type safety and
validation across the reconciliation.
"""

from steam_price_notifier.contracts.discord import (
    DigestEntry,
    DiscordMessage,
    build_digest_messages,
    build_error_message,
)
from steam_price_notifier.contracts.notion import (
    NotionPage,
    NotionPageProperties,
    NotionQueryResponse,
    NotionWishlistRow,
)
from steam_price_notifier.contracts.steam import (
    AppId,
    PriceOverview,
    ReleaseDate,
    SteamAppData,
    SteamAppDetailsEntry,
    SteamGameDetails,
    SteamWishlistResponse,
    normalize_price,
    normalize_release_date,
)

__all__ = [
    "AppId",
    "DigestEntry",
    "DiscordMessage",
    "NotionPage",
    "NotionPageProperties",
    "NotionQueryResponse",
    "NotionWishlistRow",
    "PriceOverview",
    "ReleaseDate",
    "SteamAppData",
    "SteamAppDetailsEntry",
    "SteamGameDetails",
    "SteamWishlistResponse",
    "build_digest_messages",
    "build_error_message",
    "normalize_price",
    "normalize_release_date",
]
