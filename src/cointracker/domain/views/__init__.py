"""View models for service outputs."""

from cointracker.domain.views.portfolio import (
    EnrichedHolding,
    AllocationItem,
    PortfolioSummary,
)

__all__ = [
    "EnrichedHolding",
    "AllocationItem",
    "PortfolioSummary",
]
