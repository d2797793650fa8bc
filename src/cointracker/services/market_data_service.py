"""Market data service: cache-first access to the market data provider."""

import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar, Union

from cointracker.core.cache import ResponseCache, cache_key
from cointracker.core.exceptions import ValidationError
from cointracker.domain.models import CHART_WINDOWS, ChartData, Coin, SimplePrice
from cointracker.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_SEARCH_LENGTH = 50

MARKET_SORTS: dict[str, tuple[str, bool]] = {
    "price_asc": ("current_price", False),
    "price_desc": ("current_price", True),
    "market_cap_asc": ("market_cap", False),
    "market_cap_desc": ("market_cap", True),
    "volume_desc": ("total_volume", True),
    "change_asc": ("price_change_percentage_24h", False),
    "change_desc": ("price_change_percentage_24h", True),
    "name_asc": ("name", False),
}


def _normalize_ids(values: Sequence[str]) -> list[str]:
    """Trim, lower-case, de-duplicate and sort ids for stable cache keys."""
    return sorted({v.strip().lower() for v in values if v and v.strip()})


class MarketDataService:
    """
    Service for fetching market data (coin list, markets, details, history, prices).

    Wraps a provider with the shared response cache. Cache misses go to the
    provider; provider errors propagate unchanged and nothing is cached for a
    failed or cancelled call.
    """

    def __init__(self, provider: MarketDataProvider, cache: ResponseCache):
        self._provider = provider
        self._cache = cache

    async def list_coins(self) -> list[Coin]:
        """All known coins (id, symbol, name)."""
        return await self._cached(cache_key("all_coins"), self._provider.list_coins)

    async def get_markets(
        self,
        vs_currency: str = "usd",
        page: int = 1,
        per_page: int = 20,
        order: str = "market_cap_desc",
        sparkline: bool = False,
    ) -> list[dict[str, Any]]:
        """One page of the market snapshot."""
        if page < 1 or per_page < 1:
            raise ValidationError("page and per_page must be positive")
        vs_currency = vs_currency.lower()
        key = cache_key("market", vs_currency, page, per_page, order, sparkline)
        return await self._cached(
            key,
            lambda: self._provider.get_markets(vs_currency, page, per_page, order, sparkline),
        )

    async def get_coin_detail(self, coin_id: str) -> dict[str, Any]:
        """Description, links and market data for one coin."""
        coin_id = coin_id.strip().lower()
        if not coin_id:
            raise ValidationError("coin_id is required")
        return await self._cached(
            cache_key("detail", coin_id),
            lambda: self._provider.get_coin_detail(coin_id),
        )

    async def get_price_history(
        self,
        coin_id: str,
        days: Union[int, str] = 7,
        vs_currency: str = "usd",
    ) -> ChartData:
        """Price history over a day-count window. Not cached."""
        window = str(days).strip().lower()
        if window not in CHART_WINDOWS:
            raise ValidationError(
                f"days must be one of {', '.join(CHART_WINDOWS)}; got {days!r}"
            )
        coin_id = coin_id.strip().lower()
        if not coin_id:
            raise ValidationError("coin_id is required")
        return await self._provider.get_market_chart(coin_id, window, vs_currency.lower())

    async def get_simple_prices(
        self,
        ids: Sequence[str],
        vs_currencies: Sequence[str] = ("usd",),
    ) -> SimplePrice:
        """
        Current prices for several coins in several quote currencies.

        The cache key uses the sorted id and currency lists so call order
        does not fragment the cache. An empty id list makes no request.
        """
        coin_ids = _normalize_ids(ids)
        currencies = _normalize_ids(vs_currencies)
        if not coin_ids:
            return {}
        if not currencies:
            raise ValidationError("At least one quote currency is required")
        return await self._cached(
            cache_key("prices", coin_ids, currencies),
            lambda: self._provider.get_simple_prices(coin_ids, currencies),
        )

    async def _cached(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached
        value = await fetch()
        self._cache.set(key, value)
        return value


def filter_markets(
    markets: list[dict[str, Any]],
    query: str = "",
    movement: str = "all",
) -> list[dict[str, Any]]:
    """
    Filter a market snapshot by name/symbol substring and 24h direction.

    movement: "all", "gainers" (24h change > 0) or "losers" (< 0).
    """
    query = (query or "").strip()[:MAX_SEARCH_LENGTH].lower()
    filtered = markets
    if query:
        filtered = [
            coin
            for coin in filtered
            if query in str(coin.get("name", "")).lower()
            or query in str(coin.get("symbol", "")).lower()
        ]
    if movement == "gainers":
        filtered = [c for c in filtered if (c.get("price_change_percentage_24h") or 0) > 0]
    elif movement == "losers":
        filtered = [c for c in filtered if (c.get("price_change_percentage_24h") or 0) < 0]
    return filtered


def sort_markets(markets: list[dict[str, Any]], sort_by: str) -> list[dict[str, Any]]:
    """Sort a market snapshot; unknown sort keys keep the input order."""
    if sort_by not in MARKET_SORTS:
        return list(markets)
    field_name, descending = MARKET_SORTS[sort_by]
    if field_name == "name":
        return sorted(markets, key=lambda c: str(c.get("name", "")).lower(), reverse=descending)
    return sorted(markets, key=lambda c: c.get(field_name) or 0, reverse=descending)
