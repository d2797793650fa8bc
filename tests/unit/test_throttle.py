"""
Unit tests for RequestThrottle.

Tests cover:
- Spacing between admissions of concurrent callers
- FIFO admission order
- Cancellation of a waiting caller
- Progress after a failed request
"""

import asyncio
import time

import pytest

from cointracker.core.throttle import RequestThrottle

INTERVAL = 0.05
# Event loop timers may fire marginally early
TOLERANCE = 0.01


class RecordingSleep:
    """Sleep stand-in that records requested durations."""

    def __init__(self):
        self.durations: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.durations.append(seconds)
        await asyncio.sleep(0)


async def _admit(throttle: RequestThrottle, label, log: list) -> None:
    await throttle.acquire()
    log.append((label, time.monotonic()))


# =============================================================================
# SPACING TESTS
# =============================================================================


class TestThrottleSpacing:
    """Tests for minimum spacing between admissions."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_are_spaced(self):
        """
        GIVEN a throttle with a 50ms interval
        WHEN 4 callers acquire concurrently
        THEN successive admissions are at least 50ms apart
        """
        throttle = RequestThrottle(min_interval_seconds=INTERVAL)
        log: list = []

        await asyncio.gather(*(_admit(throttle, i, log) for i in range(4)))

        times = [t for _, t in log]
        gaps = [b - a for a, b in zip(times, times[1:])]
        assert len(gaps) == 3
        assert all(gap >= INTERVAL - TOLERANCE for gap in gaps)

    @pytest.mark.asyncio
    async def test_callers_admitted_in_call_order(self):
        throttle = RequestThrottle(min_interval_seconds=0.01)
        log: list = []

        await asyncio.gather(*(_admit(throttle, label, log) for label in "abcde"))

        assert [label for label, _ in log] == list("abcde")

    @pytest.mark.asyncio
    async def test_each_admission_sleeps_the_interval(self):
        sleep = RecordingSleep()
        throttle = RequestThrottle(min_interval_seconds=1.5, sleep=sleep)

        await asyncio.gather(throttle.acquire(), throttle.acquire(), throttle.acquire())

        assert sleep.durations == [1.5, 1.5, 1.5]

    def test_default_interval(self):
        assert RequestThrottle().min_interval_seconds == 1.5


# =============================================================================
# CANCELLATION / FAILURE TESTS
# =============================================================================


class TestThrottleCancellation:
    """Tests for callers that stop waiting."""

    @pytest.mark.asyncio
    async def test_cancelled_caller_keeps_its_slot(self):
        """
        GIVEN three queued callers
        WHEN the second is cancelled while waiting
        THEN the third is still admitted three intervals after the start
        """
        throttle = RequestThrottle(min_interval_seconds=INTERVAL)
        log: list = []
        start = time.monotonic()

        first = asyncio.ensure_future(_admit(throttle, "first", log))
        second = asyncio.ensure_future(_admit(throttle, "second", log))
        third = asyncio.ensure_future(_admit(throttle, "third", log))
        await asyncio.sleep(0)
        second.cancel()

        await asyncio.gather(first, third)
        with pytest.raises(asyncio.CancelledError):
            await second

        admitted = dict(log)
        assert "second" not in admitted
        assert admitted["third"] - start >= 3 * INTERVAL - TOLERANCE

    @pytest.mark.asyncio
    async def test_queue_advances_after_failed_request(self):
        """
        GIVEN a caller whose request fails after admission
        WHEN the next caller acquires
        THEN it is still admitted
        """
        throttle = RequestThrottle(min_interval_seconds=0.01)

        async def failing_request():
            await throttle.acquire()
            raise RuntimeError("boom")

        results = await asyncio.gather(
            failing_request(), throttle.acquire(), return_exceptions=True
        )

        assert isinstance(results[0], RuntimeError)
        assert results[1] is None
