"""Market data models."""

from dataclasses import dataclass, field
from typing import Any

# (timestamp_ms, value) in upstream order
PricePoint = tuple[int, float]

# {coin_id: {currency: price}}
SimplePrice = dict[str, dict[str, float]]

# Day-count windows accepted by the chart history endpoint
CHART_WINDOWS: tuple[str, ...] = ("1", "7", "14", "30", "90", "180", "365", "max")


@dataclass(frozen=True)
class Coin:
    """Entry of the full coin list."""

    id: str
    symbol: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coin":
        return cls(
            id=str(data["id"]),
            symbol=str(data.get("symbol") or ""),
            name=str(data.get("name") or ""),
        )


def _points(raw: Any) -> list[PricePoint]:
    return [(int(ts), float(value)) for ts, value in raw or []]


@dataclass
class ChartData:
    """Price, market cap and volume history for one coin."""

    prices: list[PricePoint] = field(default_factory=list)
    market_caps: list[PricePoint] = field(default_factory=list)
    total_volumes: list[PricePoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartData":
        return cls(
            prices=_points(data.get("prices")),
            market_caps=_points(data.get("market_caps")),
            total_volumes=_points(data.get("total_volumes")),
        )
