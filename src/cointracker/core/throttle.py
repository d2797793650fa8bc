"""FIFO request throttle enforcing a minimum spacing between outbound calls."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_SECONDS = 1.5


class RequestThrottle:
    """
    Serializes admission of outbound requests with fixed spacing.

    Every acquire() splices a new link onto the queue tail. A link waits for
    the previous link to finish, whatever its outcome, then sleeps the minimum
    interval. N concurrent callers are admitted in call order, at least
    `min_interval_seconds` apart.

    Links are shielded from the caller: cancelling a waiting caller does not
    cancel its link, so later callers keep their spacing.
    """

    def __init__(
        self,
        min_interval_seconds: float = DEFAULT_MIN_INTERVAL_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._min_interval = min_interval_seconds
        self._sleep = sleep
        self._tail: Optional[asyncio.Future] = None

    @property
    def min_interval_seconds(self) -> float:
        return self._min_interval

    async def acquire(self) -> None:
        """Wait until this caller may start its request."""
        # No await between reading and replacing the tail: the splice is atomic.
        previous = self._tail
        turn = asyncio.ensure_future(self._wait_turn(previous))
        self._tail = turn
        await asyncio.shield(turn)

    async def _wait_turn(self, previous: Optional[asyncio.Future]) -> None:
        if previous is not None and not previous.done():
            # A link left behind by a closed event loop can never complete.
            if previous.get_loop() is asyncio.get_running_loop():
                await asyncio.wait({previous})
        logger.debug("Throttle: waiting %.2fs before next request", self._min_interval)
        await self._sleep(self._min_interval)
