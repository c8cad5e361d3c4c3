"""
Notion API client for the wishlist database.

Reads every row of the database (following query pagination) and
creates, updates and trashes individual pages.
"""

from typing import Any

from steam_price_notifier.clients.base import BaseClient
from steam_price_notifier.config import NotionConfig, get_settings
from steam_price_notifier.contracts import NotionQueryResponse, NotionWishlistRow


class NotionClient(BaseClient):
    """
    Client for the Notion database and page endpoints.

    Writes are not paced here; callers that fan out share one
    RateLimiter across their tasks (Notion allows about 3 req/s).

    Example:
        >>> async with NotionClient() as notion:
        ...     rows = await notion.get_all_rows()
    """

    def __init__(
        self,
        config: NotionConfig | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize Notion client.

        Args:
            config: Notion configuration (loaded from settings if None)
            **kwargs: Arguments passed to BaseClient
        """
        self._config = config or get_settings().notion
        kwargs.setdefault("timeout", self._config.timeout_seconds)
        kwargs.setdefault(
            "headers",
            {
                "Authorization": f"Bearer {self._config.api_key.get_secret_value()}",
                "Notion-Version": self._config.api_version,
                "Content-Type": "application/json",
            },
        )
        super().__init__(**kwargs)
        self._base_url = self._config.base_url.rstrip("/")

    @property
    def service_name(self) -> str:
        """Return service identifier."""
        return "notion_api"

    @property
    def database_id(self) -> str:
        return self._config.database_id

    def _page_url(self, page_id: str) -> str:
        return f"{self._base_url}/pages/{page_id}"

    async def query_rows(self, start_cursor: str | None = None) -> NotionQueryResponse:
        """
        Fetch one page of query results (at most 100 rows).

        Args:
            start_cursor: Cursor from the previous page, None for the first page
        """
        body: dict[str, Any] = {}
        if start_cursor is not None:
            body["start_cursor"] = start_cursor

        response = await self._make_request(
            "POST",
            f"{self._base_url}/databases/{self.database_id}/query",
            json=body,
        )
        return self._decode(response, NotionQueryResponse)

    async def get_all_rows(self) -> list[NotionWishlistRow]:
        """
        Fetch every row in the wishlist database.

        Follows next_cursor until Notion reports no further page and
        concatenates the pages in the order they were returned.

        Raises:
            NetworkError, UnexpectedStatusError, DecodeError
        """
        rows: list[NotionWishlistRow] = []
        cursor: str | None = None
        pages = 0

        while True:
            result = await self.query_rows(cursor)
            pages += 1
            rows.extend(NotionWishlistRow.from_page(page) for page in result.results)

            if result.next_cursor is None:
                break
            cursor = result.next_cursor

        self._logger.info("Fetched Notion rows", rows=len(rows), pages=pages)
        return rows

    async def create_row(self, row: NotionWishlistRow) -> None:
        """Create a page for ``row`` in the wishlist database."""
        await self._make_request(
            "POST",
            f"{self._base_url}/pages",
            json={
                "parent": {"database_id": self.database_id},
                "properties": row.properties_payload(),
            },
        )
        self._logger.debug("Created row", app_id=row.app_id, title=row.title)

    async def update_row(self, row: NotionWishlistRow) -> None:
        """Overwrite the properties of an existing page."""
        if row.page_id is None:
            raise ValueError(f"Row for app_id={row.app_id} has no page ID")

        await self._make_request(
            "PATCH",
            self._page_url(row.page_id),
            json={"properties": row.properties_payload()},
        )
        self._logger.debug("Updated row", app_id=row.app_id, page_id=row.page_id)

    async def delete_row(self, page_id: str) -> None:
        """Move a page to the trash (Notion pages are not hard-deleted)."""
        await self._make_request(
            "PATCH",
            self._page_url(page_id),
            json={"in_trash": True},
        )
        self._logger.debug("Trashed row", page_id=page_id)
