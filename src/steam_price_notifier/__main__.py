"""Allow ``python -m steam_price_notifier``."""

from steam_price_notifier.cli import main

main()
