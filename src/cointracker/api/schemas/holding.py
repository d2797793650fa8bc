"""Pydantic schemas for holding endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cointracker.domain.models import HoldingCreate, HoldingUpdate
from cointracker.domain.views import PortfolioSummary


class CamelModel(BaseModel):
    """Base schema using the camelCase wire names, accepting either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HoldingCreateRequest(CamelModel):
    """Request schema for recording a holding. Business rules are checked by the repository."""

    coin_id: str = Field(..., description="CoinGecko coin id, e.g. 'bitcoin'")
    amount: float
    purchase_price: float
    purchase_date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    name: str = ""
    symbol: str = ""
    image: str = ""
    notes: Optional[str] = None

    def to_domain(self) -> HoldingCreate:
        return HoldingCreate(**self.model_dump())


class HoldingUpdateRequest(CamelModel):
    """Request schema for a partial update. Omitted fields are left unchanged."""

    coin_id: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    image: Optional[str] = None
    amount: Optional[float] = None
    purchase_price: Optional[float] = None
    purchase_date: Optional[str] = None
    notes: Optional[str] = None

    def to_domain(self) -> HoldingUpdate:
        return HoldingUpdate(**self.model_dump(exclude_unset=True, exclude_none=True))


class HoldingResponse(CamelModel):
    """Response schema for a stored holding."""

    id: str
    coin_id: str
    name: str = ""
    symbol: str = ""
    image: str = ""
    amount: float
    purchase_price: float
    purchase_date: str
    notes: Optional[str] = None
    added_date: Optional[str] = None


class ValuedHoldingResponse(HoldingResponse):
    """A holding with its current valuation."""

    current_price: float
    total_value: float
    profit: float
    profit_percentage: float


class AllocationItemResponse(CamelModel):
    coin_id: str
    name: str
    value: float
    percentage: float


class PortfolioSummaryResponse(CamelModel):
    """Portfolio totals, best/worst performers and allocation by coin."""

    total_value: float
    total_cost: float
    total_profit: float
    total_profit_percentage: float
    best_performer: Optional[ValuedHoldingResponse] = None
    worst_performer: Optional[ValuedHoldingResponse] = None
    allocation: list[AllocationItemResponse]
    holdings_count: int

    @classmethod
    def from_summary(cls, summary: PortfolioSummary) -> "PortfolioSummaryResponse":
        return cls(
            total_value=summary.total_value,
            total_cost=summary.total_cost,
            total_profit=summary.total_profit,
            total_profit_percentage=summary.total_profit_percentage,
            best_performer=summary.best_performer.to_dict() if summary.best_performer else None,
            worst_performer=summary.worst_performer.to_dict() if summary.worst_performer else None,
            allocation=[
                AllocationItemResponse(
                    coin_id=a.coin_id, name=a.name, value=a.value, percentage=a.percentage
                )
                for a in summary.allocation
            ],
            holdings_count=summary.holdings_count,
        )
