"""Market data API: coin list, market snapshot, coin detail, history and prices."""

from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, Query

from cointracker.api.deps import get_market_data_service
from cointracker.api.schemas.market import CoinResponse, ChartResponse
from cointracker.services import MarketDataService, filter_markets, sort_markets

router = APIRouter(tags=["market"])


def _split(value: str) -> list[str]:
    return [part for part in value.split(",") if part.strip()]


@router.get("/coins", response_model=list[CoinResponse])
async def list_coins(market: MarketDataService = Depends(get_market_data_service)):
    """Full coin list (cached)."""
    return await market.list_coins()


@router.get("/coins/markets", response_model=list[dict[str, Any]])
async def get_markets(
    vs_currency: str = Query("usd"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=250),
    order: str = Query("market_cap_desc"),
    sparkline: bool = Query(False),
    search: Optional[str] = Query(None, description="Name or symbol substring"),
    movement: Literal["all", "gainers", "losers"] = Query("all"),
    sort_by: Optional[str] = Query(None, description="e.g. price_desc, change_asc, name_asc"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """
    One page of the market snapshot.

    search/movement/sort_by are applied to the fetched page only.
    """
    markets = await market.get_markets(vs_currency, page, per_page, order, sparkline)
    markets = filter_markets(markets, search or "", movement)
    if sort_by:
        markets = sort_markets(markets, sort_by)
    return markets


@router.get("/coins/{coin_id}", response_model=dict[str, Any])
async def get_coin_detail(
    coin_id: str,
    market: MarketDataService = Depends(get_market_data_service),
):
    return await market.get_coin_detail(coin_id)


@router.get("/coins/{coin_id}/chart", response_model=ChartResponse)
async def get_coin_chart(
    coin_id: str,
    days: str = Query("7", description="1, 7, 14, 30, 90, 180, 365 or max"),
    vs_currency: str = Query("usd"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Price, market cap and volume history. Not cached."""
    return await market.get_price_history(coin_id, days, vs_currency)


@router.get("/prices", response_model=dict[str, dict[str, float]])
async def get_prices(
    ids: str = Query(..., description="Comma-separated coin ids"),
    vs_currencies: str = Query("usd", description="Comma-separated quote currencies"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Current prices keyed by coin id, then currency."""
    return await market.get_simple_prices(_split(ids), _split(vs_currencies))
