"""Pydantic schemas for API request/response."""

from cointracker.api.schemas.holding import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    ValuedHoldingResponse,
    AllocationItemResponse,
    PortfolioSummaryResponse,
)
from cointracker.api.schemas.market import (
    CoinResponse,
    ChartResponse,
)

__all__ = [
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "ValuedHoldingResponse",
    "AllocationItemResponse",
    "PortfolioSummaryResponse",
    "CoinResponse",
    "ChartResponse",
]
