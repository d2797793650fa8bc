"""View models for portfolio valuation outputs."""

from dataclasses import dataclass, field
from typing import Any, Optional

from cointracker.domain.models import HoldingRecord


@dataclass
class EnrichedHolding:
    """A holding joined with a live price. Derived fields are never persisted."""

    holding: HoldingRecord
    current_price: float = 0.0
    total_value: float = 0.0
    profit: float = 0.0
    profit_percentage: float = 0.0

    @classmethod
    def from_price(cls, holding: HoldingRecord, current_price: float) -> "EnrichedHolding":
        """Value a holding at the given price."""
        total_value = current_price * holding.amount
        cost = holding.cost_basis
        profit = total_value - cost
        profit_percentage = (profit / cost) * 100 if cost > 0 else 0.0
        return cls(
            holding=holding,
            current_price=current_price,
            total_value=total_value,
            profit=profit,
            profit_percentage=profit_percentage,
        )

    @classmethod
    def unpriced(cls, holding: HoldingRecord) -> "EnrichedHolding":
        """Zero valuation used when prices could not be fetched."""
        return cls(holding=holding)

    # Convenience accessors so views can sort/filter on record fields directly
    @property
    def id(self) -> str:
        return self.holding.id

    @property
    def coin_id(self) -> str:
        return self.holding.coin_id

    @property
    def name(self) -> str:
        return self.holding.name

    @property
    def symbol(self) -> str:
        return self.holding.symbol

    def to_dict(self) -> dict[str, Any]:
        data = self.holding.to_dict()
        data.update(
            {
                "currentPrice": self.current_price,
                "totalValue": self.total_value,
                "profit": self.profit,
                "profitPercentage": self.profit_percentage,
            }
        )
        return data


@dataclass
class AllocationItem:
    """Single item in allocation breakdown."""

    coin_id: str
    name: str
    value: float
    percentage: float


@dataclass
class PortfolioSummary:
    """Portfolio totals, best/worst performers and allocation."""

    total_value: float = 0.0
    total_cost: float = 0.0
    total_profit: float = 0.0
    total_profit_percentage: float = 0.0
    best_performer: Optional[EnrichedHolding] = None
    worst_performer: Optional[EnrichedHolding] = None
    allocation: list[AllocationItem] = field(default_factory=list)
    holdings_count: int = 0
