"""
Wishlist reconciler that coordinates all clients.

Runs the complete flow: read Steam and Notion, plan the changes,
apply them to Notion with rate-limited concurrent writes, and post
the price-drop digest to Discord.
"""

import asyncio
from collections.abc import Coroutine, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from steam_price_notifier.clients import DiscordClient, NotionClient, SteamClient
from steam_price_notifier.config import get_settings
from steam_price_notifier.contracts import AppId, DigestEntry, NotionWishlistRow, SteamGameDetails
from steam_price_notifier.contracts.steam import TO_BE_ANNOUNCED
from steam_price_notifier.logger import get_logger
from steam_price_notifier.reconciliation.planner import (
    WishlistChanges,
    build_new_row,
    build_updated_row,
    plan_changes,
)
from steam_price_notifier.utils import RateLimiter, gather_fail_fast


@dataclass
class ReconciliationResult:
    """Result of a complete reconciliation run."""

    run_id: UUID
    started_at: datetime
    completed_at: datetime
    created: int
    updated: int
    deleted: int
    digest: dict[AppId, DigestEntry] = field(default_factory=dict)
    messages_sent: int = 0

    @property
    def duration_seconds(self) -> float:
        """Get total duration in seconds."""
        return (self.completed_at - self.started_at).total_seconds()


class WishlistReconciler:
    """
    Reconciles the Notion wishlist database with the Steam wishlist.

    Every Notion write goes through ``write_limiter``, which is shared
    by the create, update and delete batches. Each batch fails fast:
    its first error cancels the rest of the batch and aborts the run.
    Writes already applied are not rolled back.
    """

    def __init__(
        self,
        *,
        steam: SteamClient,
        notion: NotionClient,
        discord: DiscordClient,
        write_limiter: RateLimiter | None = None,
    ) -> None:
        self._steam = steam
        self._notion = notion
        self._discord = discord
        self._write_limiter = write_limiter or RateLimiter.per_second(
            get_settings().notion.requests_per_second, name="notion_writes"
        )
        self._logger = get_logger(__name__, component="reconciler")

    async def run(self) -> ReconciliationResult:
        """Run one full reconciliation."""
        run_id = uuid4()
        started_at = datetime.now(timezone.utc)
        self._logger.info("Starting reconciliation", run_id=str(run_id))

        steam_details = await self._steam.get_wishlist_details()
        notion_rows = await self._notion.get_all_rows()

        changes = plan_changes(steam_details, notion_rows)
        self._logger.info(
            "Planned changes",
            run_id=str(run_id),
            to_create=len(changes.to_create),
            to_update=len(changes.to_update),
            to_delete=len(changes.to_delete),
        )

        digest = await self.apply(changes)

        messages_sent = 0
        if digest:
            messages_sent = await self._discord.notify_price_drops(digest)
        else:
            self._logger.info("No price drops to announce", run_id=str(run_id))

        result = ReconciliationResult(
            run_id=run_id,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            created=len(changes.to_create),
            updated=len(changes.to_update),
            deleted=len(changes.to_delete),
            digest=digest,
            messages_sent=messages_sent,
        )

        self._logger.info(
            "Reconciliation complete",
            run_id=str(run_id),
            duration_seconds=round(result.duration_seconds, 3),
            created=result.created,
            updated=result.updated,
            deleted=result.deleted,
            price_drops=len(digest),
        )
        return result

    async def apply(self, changes: WishlistChanges) -> dict[AppId, DigestEntry]:
        """
        Apply planned changes to Notion: create, then update, then delete.

        Returns:
            dict[AppId, DigestEntry]: Games whose price dropped
        """
        await self._create_rows(changes.to_create)
        digest = await self._update_rows(changes.to_update)
        await self._delete_rows(changes.to_delete)
        return digest

    async def _create_rows(self, to_create: dict[AppId, SteamGameDetails]) -> None:
        async def create(app_id: AppId, details: SteamGameDetails) -> None:
            await self._write_limiter.acquire()
            row = build_new_row(app_id, details)
            self._warn_unknown_release_date(app_id, details, row)
            await self._notion.create_row(row)

        await self._run_batch("create", (create(i, d) for i, d in to_create.items()))

    async def _update_rows(
        self,
        to_update: dict[AppId, tuple[NotionWishlistRow, SteamGameDetails]],
    ) -> dict[AppId, DigestEntry]:
        digest: dict[AppId, DigestEntry] = {}
        digest_lock = asyncio.Lock()

        async def update(
            app_id: AppId,
            existing: NotionWishlistRow,
            details: SteamGameDetails,
        ) -> None:
            await self._write_limiter.acquire()
            row, entry = build_updated_row(app_id, existing, details)
            self._warn_unknown_release_date(app_id, details, row)
            if entry is not None:
                self._logger.info(
                    "Price dropped",
                    app_id=app_id,
                    title=entry.title,
                    current_price=entry.current_price,
                    lowest_price=entry.lowest_price,
                )
                async with digest_lock:
                    digest[app_id] = entry
            await self._notion.update_row(row)

        await self._run_batch(
            "update",
            (update(i, existing, details) for i, (existing, details) in to_update.items()),
        )
        return digest

    async def _delete_rows(self, to_delete: dict[AppId, NotionWishlistRow]) -> None:
        async def delete(app_id: AppId, row: NotionWishlistRow) -> None:
            await self._write_limiter.acquire()
            if row.page_id is None:
                raise ValueError(f"Row for app_id={app_id} has no page ID")
            await self._notion.delete_row(row.page_id)

        await self._run_batch("delete", (delete(i, r) for i, r in to_delete.items()))

    async def _run_batch(
        self,
        operation: str,
        coros: Iterable[Coroutine[Any, Any, None]],
    ) -> None:
        try:
            await gather_fail_fast(coros)
        except Exception as e:
            self._logger.error(
                "Notion batch failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    def _warn_unknown_release_date(
        self,
        app_id: AppId,
        details: SteamGameDetails,
        row: NotionWishlistRow,
    ) -> None:
        if row.release_date is None and details.release_date_raw not in ("", TO_BE_ANNOUNCED):
            self._logger.warning(
                "Release date left empty",
                app_id=app_id,
                release_date=details.release_date_raw,
            )
