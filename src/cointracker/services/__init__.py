"""Service layer - business logic orchestration."""

from cointracker.services.market_data_service import (
    MarketDataService,
    filter_markets,
    sort_markets,
)
from cointracker.services.portfolio_service import (
    PortfolioService,
    summarize,
    filter_holdings,
    sort_holdings,
)

__all__ = [
    "MarketDataService",
    "filter_markets",
    "sort_markets",
    "PortfolioService",
    "summarize",
    "filter_holdings",
    "sort_holdings",
]
