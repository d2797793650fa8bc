"""Market data providers module."""

from cointracker.providers.market_data_provider import MarketDataProvider
from cointracker.providers.coingecko_provider import CoinGeckoProvider, create_http_client

__all__ = [
    "MarketDataProvider",
    "CoinGeckoProvider",
    "create_http_client",
]
