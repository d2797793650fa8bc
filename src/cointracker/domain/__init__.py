"""Domain layer - pure business models with no external dependencies."""

from cointracker.domain.models import (
    HoldingRecord,
    HoldingCreate,
    HoldingUpdate,
    Coin,
    ChartData,
    PricePoint,
    SimplePrice,
)

__all__ = [
    "HoldingRecord",
    "HoldingCreate",
    "HoldingUpdate",
    "Coin",
    "ChartData",
    "PricePoint",
    "SimplePrice",
]
