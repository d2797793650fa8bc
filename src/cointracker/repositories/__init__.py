"""Repository layer - data access abstractions and implementations."""

from cointracker.repositories.protocols import (
    LocalHoldingStore,
    RemotePortfolioApi,
    StoreResult,
)
from cointracker.repositories.portfolio_repository import (
    PortfolioRepository,
    validate_holding_fields,
)

__all__ = [
    "LocalHoldingStore",
    "RemotePortfolioApi",
    "StoreResult",
    "PortfolioRepository",
    "validate_holding_fields",
]
