"""Pydantic schemas for market data endpoints."""

from pydantic import BaseModel


class CoinResponse(BaseModel):
    """Entry of the coin list."""

    id: str
    symbol: str
    name: str


class ChartResponse(BaseModel):
    """Price history series as [timestamp_ms, value] pairs."""

    prices: list[tuple[int, float]]
    market_caps: list[tuple[int, float]]
    total_volumes: list[tuple[int, float]]
