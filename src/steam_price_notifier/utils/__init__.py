"""
Shared utilities.

Provides rate limiting and fail-fast concurrent fan-out.
"""

from steam_price_notifier.utils.concurrency import gather_fail_fast
from steam_price_notifier.utils.rate_limiter import RateLimiter, RateLimiterConfig

__all__ = [
    "RateLimiter",
    "RateLimiterConfig",
    "gather_fail_fast",
]
