"""Holdings API: CRUD over recorded lots plus valuation views."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from cointracker.api.deps import get_portfolio_repository, get_portfolio_service
from cointracker.api.schemas.holding import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    ValuedHoldingResponse,
    PortfolioSummaryResponse,
)
from cointracker.core.exceptions import NotFoundError
from cointracker.repositories import PortfolioRepository
from cointracker.services import PortfolioService, filter_holdings, sort_holdings

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.get("", response_model=list[HoldingResponse])
async def list_holdings(repository: PortfolioRepository = Depends(get_portfolio_repository)):
    """List all holdings (remote when reachable, local copy otherwise)."""
    return [h.to_dict() for h in await repository.list_holdings()]


@router.post("", response_model=HoldingResponse, status_code=201)
async def create_holding(
    data: HoldingCreateRequest,
    repository: PortfolioRepository = Depends(get_portfolio_repository),
):
    """Record a new holding."""
    record = await repository.add_holding(data.to_domain())
    return record.to_dict()


@router.get("/valued", response_model=list[ValuedHoldingResponse])
async def list_valued_holdings(
    search: Optional[str] = Query(None, description="Name or symbol substring"),
    sort_by: Optional[str] = Query(None, description="e.g. total_value, profit_percentage, name"),
    descending: bool = Query(False),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Holdings valued at current prices.

    Valuations are zero when prices could not be fetched; this endpoint does
    not fail on market data errors.
    """
    items = filter_holdings(await service.sync_with_prices(), search)
    if sort_by:
        items = sort_holdings(items, sort_by, descending)
    return [item.to_dict() for item in items]


@router.get("/summary", response_model=PortfolioSummaryResponse)
async def get_summary(service: PortfolioService = Depends(get_portfolio_service)):
    """Portfolio totals, best/worst performer and allocation by coin."""
    return PortfolioSummaryResponse.from_summary(await service.get_summary())


@router.get("/{holding_id}", response_model=HoldingResponse)
async def get_holding(
    holding_id: str,
    repository: PortfolioRepository = Depends(get_portfolio_repository),
):
    record = await repository.get_holding(holding_id)
    if record is None:
        raise NotFoundError("Holding", holding_id)
    return record.to_dict()


@router.patch("/{holding_id}", response_model=HoldingResponse)
async def update_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    repository: PortfolioRepository = Depends(get_portfolio_repository),
):
    """Apply a partial update. The id cannot be changed."""
    record = await repository.update_holding(holding_id, data.to_domain())
    return record.to_dict()


@router.delete("/{holding_id}", status_code=204)
async def delete_holding(
    holding_id: str,
    repository: PortfolioRepository = Depends(get_portfolio_repository),
):
    """Delete a holding. Deleting an unknown id succeeds."""
    await repository.delete_holding(holding_id)
    return Response(status_code=204)
