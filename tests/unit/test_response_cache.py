"""
Unit tests for ResponseCache.

Tests cover:
- Reads within and at the TTL boundary
- Replacement on later writes
- Cache key construction
"""

import pytest

from cointracker.core.cache import DEFAULT_TTL_MS, ResponseCache, cache_key


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> ResponseCache:
    return ResponseCache(clock=clock)


# =============================================================================
# TTL TESTS
# =============================================================================


class TestCacheExpiry:
    """Tests for age-based validity."""

    def test_default_ttl_is_five_minutes(self):
        assert DEFAULT_TTL_MS == 300_000
        assert ResponseCache().ttl_ms == 300_000

    def test_value_returned_verbatim_before_ttl(self, cache: ResponseCache, clock: FakeClock):
        """
        GIVEN a value stored at T
        WHEN it is read at T + 299999 ms
        THEN the same object is returned
        """
        value = [{"id": "bitcoin"}]
        cache.set("all_coins", value)
        clock.advance(299_999)

        assert cache.get("all_coins") is value

    def test_value_absent_at_exact_ttl(self, cache: ResponseCache, clock: FakeClock):
        """
        GIVEN a value stored at T
        WHEN it is read at exactly T + 300000 ms
        THEN it is treated as absent
        """
        cache.set("all_coins", ["x"])
        clock.advance(300_000)

        assert cache.get("all_coins") is None
        assert "all_coins" not in cache

    def test_expired_entry_is_kept_until_replaced(self, cache: ResponseCache, clock: FakeClock):
        cache.set("k", 1)
        clock.advance(400_000)

        assert cache.get("k") is None
        assert len(cache) == 1

    def test_custom_ttl(self, clock: FakeClock):
        cache = ResponseCache(ttl_ms=1000, clock=clock)
        cache.set("k", "v")
        clock.advance(999)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None


# =============================================================================
# REPLACEMENT TESTS
# =============================================================================


class TestCacheReplacement:
    """Tests for writes replacing entries."""

    def test_set_replaces_value_and_restarts_age(self, cache: ResponseCache, clock: FakeClock):
        """
        GIVEN an entry stored 200s ago
        WHEN a new value is stored under the same key
        THEN the new value is readable for a full TTL from now
        """
        cache.set("prices:bitcoin:usd", {"bitcoin": {"usd": 1}})
        clock.advance(200_000)
        cache.set("prices:bitcoin:usd", {"bitcoin": {"usd": 2}})
        clock.advance(200_000)

        assert cache.get("prices:bitcoin:usd") == {"bitcoin": {"usd": 2}}

    def test_keys_are_independent(self, cache: ResponseCache):
        cache.set("detail:bitcoin", {"id": "bitcoin"})

        assert cache.get("detail:ethereum") is None
        assert cache.get("detail:bitcoin") == {"id": "bitcoin"}

    def test_empty_collections_are_cache_hits(self, cache: ResponseCache):
        cache.set("market:usd:99:20:market_cap_desc:false", [])

        assert cache.get("market:usd:99:20:market_cap_desc:false") == []


# =============================================================================
# KEY TESTS
# =============================================================================


class TestCacheKey:
    """Tests for cache_key."""

    def test_operation_only(self):
        assert cache_key("all_coins") == "all_coins"

    def test_parts_joined_with_colon(self):
        key = cache_key("market", "usd", 1, 20, "market_cap_desc", False)

        assert key == "market:usd:1:20:market_cap_desc:false"

    def test_list_parts_joined_with_underscore(self):
        key = cache_key("prices", ["bitcoin", "ethereum"], ["eur", "usd"])

        assert key == "prices:bitcoin_ethereum:eur_usd"
