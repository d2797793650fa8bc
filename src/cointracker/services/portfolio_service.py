"""Portfolio valuation: joins holdings with live prices and computes analytics."""

import logging
from typing import Any, Optional

from cointracker.domain.models import HoldingRecord, SimplePrice
from cointracker.domain.views import AllocationItem, EnrichedHolding, PortfolioSummary
from cointracker.repositories.portfolio_repository import PortfolioRepository
from cointracker.services.market_data_service import MAX_SEARCH_LENGTH, MarketDataService

logger = logging.getLogger(__name__)

VALUATION_FIELDS = ("current_price", "total_value", "profit", "profit_percentage")
HOLDING_FIELDS = ("name", "symbol", "coin_id", "amount", "purchase_price", "purchase_date")
SORTABLE_FIELDS = VALUATION_FIELDS + HOLDING_FIELDS


class PortfolioService:
    """
    Service for valuing the portfolio against live prices.

    Price lookup failures never propagate: holdings are returned with zero
    valuations instead.
    """

    def __init__(
        self,
        repository: PortfolioRepository,
        market_data: MarketDataService,
        quote_currency: str = "usd",
    ):
        self._repository = repository
        self._market = market_data
        self._currency = quote_currency.lower()

    @property
    def quote_currency(self) -> str:
        return self._currency

    async def sync_with_prices(self) -> list[EnrichedHolding]:
        """
        All holdings valued at the current price in the quote currency.

        A coin missing from the price response is valued at 0. If the price
        lookup itself fails, every holding gets a zero valuation.
        """
        holdings = await self._repository.list_holdings()
        if not holdings:
            return []

        coin_ids = list(dict.fromkeys(h.coin_id for h in holdings))
        try:
            prices = await self._market.get_simple_prices(coin_ids, [self._currency])
        except Exception as exc:
            logger.error("Error fetching prices for portfolio sync: %s", exc)
            return [EnrichedHolding.unpriced(h) for h in holdings]

        return [EnrichedHolding.from_price(h, self._price_of(prices, h)) for h in holdings]

    async def get_summary(self) -> PortfolioSummary:
        """Totals, best/worst performers and allocation for the current portfolio."""
        return summarize(await self.sync_with_prices())

    def _price_of(self, prices: SimplePrice, holding: HoldingRecord) -> float:
        quote = prices.get(holding.coin_id) or prices.get(holding.coin_id.lower()) or {}
        price = quote.get(self._currency)
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return 0.0
        return float(price)


def summarize(items: list[EnrichedHolding]) -> PortfolioSummary:
    """Aggregate enriched holdings into a PortfolioSummary."""
    if not items:
        return PortfolioSummary()

    total_value = sum(item.total_value for item in items)
    total_cost = sum(item.holding.cost_basis for item in items)
    total_profit = total_value - total_cost
    total_profit_percentage = (total_profit / total_cost) * 100 if total_cost > 0 else 0.0

    by_coin: dict[str, AllocationItem] = {}
    for item in items:
        entry = by_coin.get(item.coin_id)
        if entry is None:
            by_coin[item.coin_id] = AllocationItem(
                coin_id=item.coin_id,
                name=item.name or item.coin_id,
                value=item.total_value,
                percentage=0.0,
            )
        else:
            entry.value += item.total_value
    allocation = sorted(by_coin.values(), key=lambda a: a.value, reverse=True)
    for entry in allocation:
        entry.percentage = (entry.value / total_value) * 100 if total_value > 0 else 0.0

    return PortfolioSummary(
        total_value=total_value,
        total_cost=total_cost,
        total_profit=total_profit,
        total_profit_percentage=total_profit_percentage,
        best_performer=max(items, key=lambda i: i.profit_percentage),
        worst_performer=min(items, key=lambda i: i.profit_percentage),
        allocation=allocation,
        holdings_count=len(items),
    )


def filter_holdings(items: list[EnrichedHolding], query: Optional[str]) -> list[EnrichedHolding]:
    """Case-insensitive name/symbol substring filter; blank query keeps everything."""
    needle = (query or "").strip()[:MAX_SEARCH_LENGTH].lower()
    if not needle:
        return list(items)
    return [
        item
        for item in items
        if needle in item.name.lower() or needle in item.symbol.lower()
    ]


def _sort_value(item: EnrichedHolding, field_name: str) -> Any:
    if field_name in VALUATION_FIELDS:
        return getattr(item, field_name)
    value = getattr(item.holding, field_name)
    return value.lower() if isinstance(value, str) else value


def sort_holdings(
    items: list[EnrichedHolding],
    sort_by: str,
    descending: bool = False,
) -> list[EnrichedHolding]:
    """Stable sort by a valuation or holding field; unknown fields keep input order."""
    if sort_by not in SORTABLE_FIELDS:
        return list(items)
    return sorted(items, key=lambda i: _sort_value(i, sort_by), reverse=descending)
