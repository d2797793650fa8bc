"""Repository protocol definitions (interfaces)."""

from cointracker.repositories.protocols.holding_store import LocalHoldingStore, StoreResult
from cointracker.repositories.protocols.portfolio_api import RemotePortfolioApi

__all__ = [
    "LocalHoldingStore",
    "StoreResult",
    "RemotePortfolioApi",
]
