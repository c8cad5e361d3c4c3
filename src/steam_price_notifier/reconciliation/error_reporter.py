"""
Best-effort error reporting.

A failed run is announced once on the Discord webhook. The report
itself must never mask the original error, so its own failure is
logged and dropped.
"""

from steam_price_notifier.clients import DiscordClient
from steam_price_notifier.logger import get_logger


class ErrorReporter:
    """Sends a single error report through a DiscordClient."""

    def __init__(self, discord: DiscordClient) -> None:
        self._discord = discord
        self._logger = get_logger(__name__, component="error_reporter")

    async def report(self, error: BaseException) -> bool:
        """
        Report ``error`` on Discord.

        Returns:
            bool: True if the report was delivered
        """
        try:
            await self._discord.notify_error(error)
        except Exception as e:
            self._logger.error(
                "Failed to report error on Discord",
                error=str(e),
                error_type=type(e).__name__,
                original_error=str(error),
            )
            return False
        return True
