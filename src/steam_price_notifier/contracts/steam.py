"""
Data contracts for Steam API responses.

These Pydantic models define the expected structure of the wishlist
and app details responses, plus the price and release date
normalization applied before anything is written to Notion.
"""

import re
from datetime import date
from typing import Annotated

from pydantic import BaseModel, Field

from steam_price_notifier.errors import DecodeError

AppId = Annotated[int, Field(ge=0, description="Steam App ID")]

TO_BE_ANNOUNCED = "To be announced"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_PRICE_PATTERN = re.compile(r"[+-]?\d+")
_RELEASE_DATE_PATTERN = re.compile(r"^(\d{1,2}) ([A-Z][a-z]{2}), (\d{4})$")
_MONTHS = {
    name: number
    for number, name in enumerate(
        ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        start=1,
    )
}


class SteamWishlistItem(BaseModel):
    """A single wishlist entry. Only the app ID is used."""

    appid: AppId


class SteamWishlistBody(BaseModel):
    """Inner ``response`` object. Steam omits ``items`` for an empty wishlist."""

    items: list[SteamWishlistItem] = Field(default_factory=list)


class SteamWishlistResponse(BaseModel):
    """Response of IWishlistService/GetWishlist."""

    response: SteamWishlistBody

    @property
    def app_ids(self) -> list[int]:
        return [item.appid for item in self.response.items]


class PriceOverview(BaseModel):
    """Price information. ``final`` has two implicit fraction digits."""

    final: int = Field(..., description="Final price in hundredths (after discount)")


class ReleaseDate(BaseModel):
    """Release date as displayed on the store page."""

    date: str = Field(..., description="Free-text release date")


class SteamAppData(BaseModel):
    """The ``data`` object of an app details entry."""

    name: str
    price_overview: PriceOverview | None = Field(
        default=None, description="Absent when the game is not on sale"
    )
    release_date: ReleaseDate


class SteamAppDetailsEntry(BaseModel):
    """
    One entry of the /appdetails response.

    The API returns {"<app_id>": {"success": bool, "data": {...}}},
    so entries are looked up by the requested ID before validation.
    """

    success: bool = True
    data: SteamAppData


class SteamGameDetails(BaseModel):
    """Game details as needed by the reconciliation."""

    app_id: AppId
    title: str
    current_price_raw: str | None = Field(
        default=None, description="Integer price string with two implicit decimals"
    )
    release_date_raw: str = ""

    @classmethod
    def from_entry(cls, app_id: int, entry: SteamAppDetailsEntry) -> "SteamGameDetails":
        price = entry.data.price_overview
        return cls(
            app_id=app_id,
            title=entry.data.name,
            current_price_raw=str(price.final) if price is not None else None,
            release_date_raw=entry.data.release_date.date,
        )

    @property
    def current_price(self) -> int | None:
        """Normalized current price, or None when not on sale."""
        if self.current_price_raw is None:
            return None
        return normalize_price(self.current_price_raw)

    @property
    def release_date(self) -> date | None:
        """Normalized release date, or None when unknown."""
        return normalize_release_date(self.release_date_raw)


def normalize_price(raw: str) -> int:
    """
    Convert a Steam price string to whole currency units.

    Steam reports prices with two implicit fraction digits,
    e.g. "100000" -> 1000 (JPY). The fraction is floored away.

    Raises:
        DecodeError: If the string is not a signed 64-bit integer
    """
    if _PRICE_PATTERN.fullmatch(raw) is None:
        raise DecodeError(f"Price is not an integer: {raw!r}", service="steam_store_api")
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise DecodeError(
            f"Price does not fit a 64-bit integer: {raw!r}", service="steam_store_api"
        )
    return value // 100


def normalize_release_date(raw: str) -> date | None:
    """
    Parse a store release date such as "2 Jan, 2006" or "11 Nov, 2021".

    "To be announced", bare years ("2025") and anything else that does
    not name a calendar day are treated as unknown rather than as errors.
    """
    if raw == TO_BE_ANNOUNCED:
        return None
    match = _RELEASE_DATE_PATTERN.match(raw.strip())
    if match is None:
        return None
    day, month_name, year = match.groups()
    month = _MONTHS.get(month_name)
    if month is None:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None
