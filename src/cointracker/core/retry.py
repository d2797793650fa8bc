"""Bounded exponential-backoff retry for rate-limited requests."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from cointracker.core.exceptions import RateLimitedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY_SECONDS = 1.0


class RetryPolicy:
    """
    Retries one logical request on rate-limit rejection.

    Delay before retry n (1-based) is initial_delay * 2**(n-1): 1s, 2s, 4s by
    default. Other errors propagate on the first occurrence. When retries are
    exhausted the last RateLimitedError is raised.
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._max_retries = max_retries
        self._initial_delay = initial_delay_seconds
        self._sleep = sleep

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def delay_for(self, attempt: int) -> float:
        """Backoff delay in seconds before the given retry attempt (1-based)."""
        return self._initial_delay * (2 ** (attempt - 1))

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Call operation until it succeeds, fails otherwise, or retries run out."""
        attempt = 0
        while True:
            try:
                return await operation()
            except RateLimitedError:
                if attempt >= self._max_retries:
                    logger.error("Rate limit persisted after %d retries", self._max_retries)
                    raise
                attempt += 1
                delay = self.delay_for(attempt)
                logger.warning(
                    "Rate limit hit. Retrying in %.1fs (attempt %d/%d)",
                    delay,
                    attempt,
                    self._max_retries,
                )
                await self._sleep(delay)
