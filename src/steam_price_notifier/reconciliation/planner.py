"""
Change planning for the wishlist reconciliation.

Pure functions that compare the Steam wishlist with the Notion rows
and decide what to create, update and trash, and which games made
it into the price-drop digest. Nothing here performs I/O.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from steam_price_notifier.contracts import (
    AppId,
    DigestEntry,
    NotionWishlistRow,
    SteamGameDetails,
)
from steam_price_notifier.errors import DataIntegrityError


@dataclass
class WishlistChanges:
    """
    The three disjoint change sets of a run.

    to_create: on Steam only. to_update: on both, paired as
    (stored row, fresh details). to_delete: in Notion only.
    """

    to_create: dict[AppId, SteamGameDetails] = field(default_factory=dict)
    to_update: dict[AppId, tuple[NotionWishlistRow, SteamGameDetails]] = field(
        default_factory=dict
    )
    to_delete: dict[AppId, NotionWishlistRow] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)


def parse_app_id(row: NotionWishlistRow) -> AppId:
    """
    Parse the App ID stored on a Notion row.

    Raises:
        DataIntegrityError: If the stored text is not a decimal unsigned integer
    """
    if not (row.app_id.isascii() and row.app_id.isdigit()):
        raise DataIntegrityError(
            f"Notion row {row.page_id} has an invalid App ID: {row.app_id!r}",
            service="notion_api",
        )
    return int(row.app_id)


def index_rows(rows: Iterable[NotionWishlistRow]) -> dict[AppId, NotionWishlistRow]:
    """Index Notion rows by their parsed App ID. Later duplicates win."""
    return {parse_app_id(row): row for row in rows}


def plan_changes(
    steam_details: Mapping[AppId, SteamGameDetails],
    notion_rows: Iterable[NotionWishlistRow],
) -> WishlistChanges:
    """
    Partition app IDs into create, update and delete sets.

    Raises:
        DataIntegrityError: If any Notion row has an unusable App ID
    """
    indexed = index_rows(notion_rows)
    changes = WishlistChanges()

    for app_id, details in steam_details.items():
        existing = indexed.get(app_id)
        if existing is None:
            changes.to_create[app_id] = details
        else:
            changes.to_update[app_id] = (existing, details)

    for app_id, row in indexed.items():
        if app_id not in steam_details:
            changes.to_delete[app_id] = row

    return changes


def next_lowest_price(
    stored_lowest: int | None,
    current: int | None,
) -> tuple[int | None, bool]:
    """
    Apply the lowest-price rule.

    Returns the new lowest price and whether the current price is a
    genuine drop. Once either price is unknown the history is no
    longer trusted and the lowest price resets to None.
    """
    if stored_lowest is None or current is None:
        return None, False
    if current < stored_lowest:
        return current, True
    return stored_lowest, False


def build_new_row(app_id: AppId, details: SteamGameDetails) -> NotionWishlistRow:
    """Row for a game that is not in Notion yet. No price history exists."""
    return NotionWishlistRow(
        app_id=str(app_id),
        title=details.title,
        current_price=details.current_price,
        lowest_price=None,
        release_date=details.release_date,
    )


def build_updated_row(
    app_id: AppId,
    existing: NotionWishlistRow,
    details: SteamGameDetails,
) -> tuple[NotionWishlistRow, DigestEntry | None]:
    """
    Row refreshed from Steam, plus a digest entry when the price dropped.

    The digest entry carries the lowest price recorded before this run.
    """
    current = details.current_price
    previous_lowest = existing.lowest_price
    lowest, dropped = next_lowest_price(previous_lowest, current)

    row = NotionWishlistRow(
        page_id=existing.page_id,
        app_id=str(app_id),
        title=details.title,
        current_price=current,
        lowest_price=lowest,
        release_date=details.release_date,
    )

    entry = None
    if dropped and current is not None and previous_lowest is not None:
        entry = DigestEntry(
            title=details.title,
            current_price=current,
            lowest_price=previous_lowest,
        )
    return row, entry
