"""Domain models package."""

from cointracker.domain.models.holding import (
    HoldingRecord,
    HoldingCreate,
    HoldingUpdate,
    WIRE_FIELDS,
)
from cointracker.domain.models.market import (
    Coin,
    ChartData,
    PricePoint,
    SimplePrice,
    CHART_WINDOWS,
)

__all__ = [
    "HoldingRecord",
    "HoldingCreate",
    "HoldingUpdate",
    "WIRE_FIELDS",
    "Coin",
    "ChartData",
    "PricePoint",
    "SimplePrice",
    "CHART_WINDOWS",
]
