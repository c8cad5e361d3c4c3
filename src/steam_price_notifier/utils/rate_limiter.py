"""
Rate limiter for API requests.

Implements a token bucket algorithm so that concurrent callers
stay within each upstream's request rate (5 req/s for the Steam
Store and Discord, 3 req/s for Notion).
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any

from steam_price_notifier.logger import get_logger


@dataclass
class RateLimiterConfig:
    """Configuration for rate limiter."""

    requests_per_second: float = 5.0
    burst_size: int = 1

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {self.requests_per_second}")
        if self.burst_size < 1:
            raise ValueError(f"burst_size must be >= 1, got {self.burst_size}")


@dataclass
class RateLimiter:
    """
    Token bucket rate limiter for API requests.

    Allows burst traffic up to burst_size, then throttles to
    requests_per_second. One instance is shared by every task
    that targets the same upstream.

    Waiters queue on an internal lock, so a task cancelled while
    waiting leaves without consuming a token.

    Example:
        >>> limiter = RateLimiter(RateLimiterConfig(requests_per_second=3))
        >>> async with limiter:
        ...     await make_request()
    """

    config: RateLimiterConfig = field(default_factory=RateLimiterConfig)
    name: str = "default"
    _tokens: float = field(init=False)
    _last_update: float = field(init=False)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        """Initialize rate limiter state."""
        self._tokens = float(self.config.burst_size)
        self._last_update = time.monotonic()
        self._logger = get_logger(__name__, component="rate_limiter", limiter=self.name)

    @classmethod
    def per_second(cls, rate: float, *, name: str = "default") -> "RateLimiter":
        """Build a burst-of-one limiter refilling at ``rate`` tokens per second."""
        return cls(RateLimiterConfig(requests_per_second=rate, burst_size=1), name=name)

    def _refill_tokens(self) -> None:
        """Refill tokens based on elapsed time."""
        now = time.monotonic()
        elapsed = now - self._last_update
        self._tokens = min(
            float(self.config.burst_size),
            self._tokens + elapsed * self.config.requests_per_second,
        )
        self._last_update = now

    async def acquire(self) -> None:
        """
        Acquire a token, waiting if necessary.

        Raises:
            asyncio.CancelledError: If the calling task is cancelled
                while waiting for a token.
        """
        async with self._lock:
            self._refill_tokens()

            if self._tokens < 1:
                wait_time = (1 - self._tokens) / self.config.requests_per_second
                self._logger.debug(
                    "Rate limit reached, waiting",
                    wait_seconds=round(wait_time, 3),
                    tokens_available=round(self._tokens, 3),
                )
                await asyncio.sleep(wait_time)
                self._refill_tokens()

            self._tokens = max(self._tokens - 1, 0.0)
            self._logger.debug(
                "Token acquired",
                tokens_remaining=round(self._tokens, 3),
            )

    async def __aenter__(self) -> "RateLimiter":
        """Acquire token on context entry."""
        await self.acquire()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """No-op on context exit."""

    @property
    def available_tokens(self) -> float:
        """Get current available tokens (for monitoring)."""
        self._refill_tokens()
        return self._tokens
