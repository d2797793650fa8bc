"""API routers package."""

from cointracker.api.routers.holdings import router as holdings_router
from cointracker.api.routers.market import router as market_router

__all__ = [
    "holdings_router",
    "market_router",
]
