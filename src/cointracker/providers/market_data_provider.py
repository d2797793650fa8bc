"""Market data provider protocol."""

from typing import Any, Protocol, Sequence

from cointracker.domain.models import Coin, ChartData, SimplePrice


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations perform the network call for each operation and raise a
    classified MarketDataError (or NotFoundError) on failure. They never
    substitute fallback data; caching is layered on top by MarketDataService.
    """

    async def list_coins(self) -> list[Coin]:
        """Fetch the full list of known coins (id, symbol, name)."""
        ...

    async def get_markets(
        self,
        vs_currency: str,
        page: int,
        per_page: int,
        order: str,
        sparkline: bool,
    ) -> list[dict[str, Any]]:
        """Fetch one page of the market snapshot."""
        ...

    async def get_coin_detail(self, coin_id: str) -> dict[str, Any]:
        """Fetch description, links and market data for one coin."""
        ...

    async def get_market_chart(self, coin_id: str, days: str, vs_currency: str) -> ChartData:
        """Fetch price history over a day-count window."""
        ...

    async def get_simple_prices(
        self,
        ids: Sequence[str],
        vs_currencies: Sequence[str],
    ) -> SimplePrice:
        """Fetch current prices for several coins in several currencies."""
        ...
