"""
Discord webhook client.

Posts the price-drop digest and error reports to a webhook.
"""

from collections.abc import Mapping
from typing import Any

from steam_price_notifier.clients.base import BaseClient
from steam_price_notifier.config import DiscordConfig, get_settings
from steam_price_notifier.contracts import (
    AppId,
    DigestEntry,
    DiscordMessage,
    build_digest_messages,
    build_error_message,
)
from steam_price_notifier.utils import RateLimiter

# Webhook executions without ?wait=true answer 204 No Content.
WEBHOOK_SUCCESS_STATUS = 204


class DiscordClient(BaseClient):
    """
    Client for a single Discord webhook.

    Example:
        >>> async with DiscordClient() as discord:
        ...     await discord.notify_price_drops(digest)
    """

    def __init__(
        self,
        config: DiscordConfig | None = None,
        *,
        rate_limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize Discord client.

        Args:
            config: Discord configuration (loaded from settings if None)
            rate_limiter: Limiter for webhook posts (created from config if None)
            **kwargs: Arguments passed to BaseClient
        """
        self._config = config or get_settings().discord
        kwargs.setdefault("timeout", self._config.timeout_seconds)
        super().__init__(**kwargs)
        self._rate_limiter = rate_limiter or RateLimiter.per_second(
            self._config.requests_per_second, name="discord"
        )

    @property
    def service_name(self) -> str:
        """Return service identifier."""
        return "discord_webhook"

    def _redact(self, url: str) -> str:
        token = self._config.webhook_token.get_secret_value()
        return url.replace(token, "***") if token else url

    async def send_message(self, message: DiscordMessage) -> None:
        """Execute the webhook with one message."""
        await self._make_request(
            "POST",
            self._config.webhook_url,
            expected_status=WEBHOOK_SUCCESS_STATUS,
            json=message.model_dump(),
        )

    async def notify_price_drops(self, digest: Mapping[AppId, DigestEntry]) -> int:
        """
        Announce a digest of price drops.

        Messages are sent one after another in chunk order, each after
        a rate limiter token.

        Returns:
            int: Number of messages sent
        """
        messages = build_digest_messages(digest)
        for index, message in enumerate(messages, 1):
            await self._rate_limiter.acquire()
            await self.send_message(message)
            self._logger.debug("Sent digest message", part=f"{index}/{len(messages)}")

        self._logger.info("Digest sent", games=len(digest), messages=len(messages))
        return len(messages)

    async def notify_error(self, error: BaseException) -> None:
        """Report an error to the webhook."""
        await self._rate_limiter.acquire()
        await self.send_message(build_error_message(error))
        self._logger.info("Error report sent", error_type=type(error).__name__)
