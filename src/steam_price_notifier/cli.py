"""
Command-line interface for Steam Price Notifier.

Running without arguments performs one reconciliation. Any error
is reported once on the Discord webhook (best effort) and the
process exits with status 1.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from steam_price_notifier.clients import DiscordClient, NotionClient, SteamClient
from steam_price_notifier.config import DiscordConfig, get_settings
from steam_price_notifier.logger import get_logger, setup_logging
from steam_price_notifier.reconciliation import ErrorReporter, WishlistReconciler
from steam_price_notifier.utils import RateLimiter

logger = get_logger(__name__, component="cli")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(), indent=2, default=str))


async def report_startup_error(error: Exception) -> None:
    """Report a configuration failure if the webhook itself is configured."""
    try:
        discord_config = DiscordConfig()
    except PydanticValidationError:
        logger.error("Discord is not configured, error not reported")
        return

    async with DiscordClient(discord_config) as discord:
        await ErrorReporter(discord).report(error)


async def cmd_run() -> None:
    """Reconcile the Notion wishlist with Steam and announce price drops."""
    try:
        settings = get_settings()
    except PydanticValidationError as e:
        logger.error("Invalid configuration", error=str(e))
        await report_startup_error(e)
        raise

    async with (
        SteamClient(settings.steam) as steam,
        NotionClient(settings.notion) as notion,
        DiscordClient(settings.discord) as discord,
    ):
        reconciler = WishlistReconciler(
            steam=steam,
            notion=notion,
            discord=discord,
            write_limiter=RateLimiter.per_second(
                settings.notion.requests_per_second, name="notion_writes"
            ),
        )
        try:
            result = await reconciler.run()
        except Exception as e:
            logger.error("Reconciliation failed", error=str(e), error_type=type(e).__name__)
            await ErrorReporter(discord).report(e)
            raise

    output = CLIOutput(
        success=True,
        command="run",
        data={
            "run_id": str(result.run_id),
            "duration_seconds": round(result.duration_seconds, 3),
            "created": result.created,
            "updated": result.updated,
            "deleted": result.deleted,
            "price_drops": {
                str(app_id): entry.model_dump() for app_id, entry in result.digest.items()
            },
            "messages_sent": result.messages_sent,
        },
    )
    print_json(output)


async def cmd_test_config() -> None:
    """Test configuration loading."""
    settings = get_settings()

    output = CLIOutput(
        success=True,
        command="test-config",
        data={
            "steam_user_id": settings.steam.user_id,
            "steam_country_code": settings.steam.country_code,
            "steam_requests_per_second": settings.steam.requests_per_second,
            "notion_database_id": settings.notion.database_id,
            "notion_api_version": settings.notion.api_version,
            "notion_requests_per_second": settings.notion.requests_per_second,
            "discord_webhook_id": settings.discord.webhook_id,
            "notion_api_key_configured": bool(settings.notion.api_key.get_secret_value()),
            "discord_token_configured": bool(settings.discord.webhook_token.get_secret_value()),
        },
    )
    print_json(output)


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Steam Price Notifier CLI
========================

Usage: steam-price-notifier [command]

Commands:
  run            Reconcile Notion with the Steam wishlist (default)
  test-config    Test configuration loading
  help           Show this message

Environment:
  STEAM_USER_ID, NOTION_API_KEY, NOTION_DATABASE_ID,
  DISCORD_WEBHOOK_ID, DISCORD_WEBHOOK_TOKEN
"""
    print(usage)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    command = args[0] if args else "run"

    setup_logging()

    try:
        if command == "run":
            asyncio.run(cmd_run())

        elif command == "test-config":
            asyncio.run(cmd_test_config())

        elif command in ("help", "--help", "-h"):
            print_usage()

        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error", error=str(e))
        output = CLIOutput(
            success=False,
            command=command,
            error=str(e),
        )
        print_json(output)
        sys.exit(1)


if __name__ == "__main__":
    main()
