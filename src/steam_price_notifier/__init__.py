"""
Steam Price Notifier.

Keeps a Notion database in step with a Steam wishlist and
announces genuine price drops on Discord.
"""

from steam_price_notifier.config import Settings, get_settings
from steam_price_notifier.logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
