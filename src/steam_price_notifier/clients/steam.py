"""
Steam API client.

Fetches the user's wishlist from the Steam Web API and per-game
details (title, price, release date) from the Steam Store API.
"""

import time
from typing import Any

from steam_price_notifier.clients.base import BaseClient
from steam_price_notifier.config import SteamConfig, get_settings
from steam_price_notifier.contracts import (
    AppId,
    SteamAppDetailsEntry,
    SteamGameDetails,
    SteamWishlistResponse,
)
from steam_price_notifier.errors import DecodeError
from steam_price_notifier.utils import RateLimiter, gather_fail_fast


class SteamClient(BaseClient):
    """
    Client for the Steam wishlist and app details endpoints.

    The Store API is unofficial and publishes no rate limit; detail
    requests are paced by the injected limiter (5 req/s by default).

    Example:
        >>> async with SteamClient() as steam:
        ...     details = await steam.get_wishlist_details()
        ...     print(len(details))
    """

    def __init__(
        self,
        config: SteamConfig | None = None,
        *,
        rate_limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize Steam client.

        Args:
            config: Steam configuration (loaded from settings if None)
            rate_limiter: Limiter shared by detail requests (created from config if None)
            **kwargs: Arguments passed to BaseClient
        """
        self._config = config or get_settings().steam
        kwargs.setdefault("timeout", self._config.timeout_seconds)
        super().__init__(**kwargs)
        self._rate_limiter = rate_limiter or RateLimiter.per_second(
            self._config.requests_per_second, name="steam_store"
        )

    @property
    def service_name(self) -> str:
        """Return service identifier."""
        return "steam_store_api"

    async def get_wishlist(self) -> list[AppId]:
        """
        Fetch the app IDs on the user's wishlist.

        Returns:
            list[AppId]: Wishlisted app IDs in the order Steam returns them

        Raises:
            NetworkError, UnexpectedStatusError, DecodeError
        """
        response = await self._make_request(
            "GET",
            self._config.wishlist_url,
            params={"steamid": self._config.user_id},
        )
        wishlist = self._decode(response, SteamWishlistResponse)

        self._logger.info("Fetched wishlist", items=len(wishlist.app_ids))
        return wishlist.app_ids

    async def get_game_details(self, app_id: AppId) -> SteamGameDetails:
        """
        Fetch title, price and release date for one app.

        The response is keyed by the requested app ID, so it is decoded
        in two steps: generic JSON first, then the entry under that key
        against the SteamAppDetailsEntry contract.

        Raises:
            NetworkError, UnexpectedStatusError, DecodeError
        """
        start_time = time.perf_counter()
        response = await self._make_request(
            "GET",
            self._config.app_details_url,
            params={"appids": app_id, "cc": self._config.country_code},
        )

        raw_data = self._json(response)
        if not isinstance(raw_data, dict) or str(app_id) not in raw_data:
            self._logger.error("App missing from details response", app_id=app_id)
            raise DecodeError(
                f"App details response has no entry for app_id={app_id}",
                service=self.service_name,
                endpoint=self._config.app_details_url,
            )

        entry = self._validate(SteamAppDetailsEntry, raw_data[str(app_id)])
        details = SteamGameDetails.from_entry(app_id, entry)

        self._logger.debug(
            "Fetched game details",
            app_id=app_id,
            title=details.title,
            on_sale=details.current_price_raw is not None,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return details

    async def get_game_details_batch(
        self,
        app_ids: list[AppId],
    ) -> dict[AppId, SteamGameDetails]:
        """
        Fetch details for many apps concurrently.

        One task per app, each waiting on the rate limiter first. The
        first failure cancels the remaining requests and is raised.

        Returns:
            dict[AppId, SteamGameDetails]: Details keyed by app ID
        """

        async def fetch(app_id: AppId) -> SteamGameDetails:
            await self._rate_limiter.acquire()
            return await self.get_game_details(app_id)

        self._logger.info("Starting details fetch", total_apps=len(app_ids))
        results = await gather_fail_fast(fetch(app_id) for app_id in app_ids)
        return {details.app_id: details for details in results}

    async def get_wishlist_details(self) -> dict[AppId, SteamGameDetails]:
        """Fetch the wishlist and the details of every game on it."""
        app_ids = await self.get_wishlist()
        return await self.get_game_details_batch(app_ids)
