"""
CoinGecko market data provider.

Every request is admitted through the shared RequestThrottle and wrapped in
the RetryPolicy, so each retry is throttled like a fresh request. Failures are
classified into the AppError taxonomy; bodies get a basic structural check.
"""

import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from cointracker.core.exceptions import (
    InvalidResponseShapeError,
    MarketDataError,
    NetworkUnavailableError,
    NotFoundError,
    RateLimitedError,
    RequestTimeoutError,
)
from cointracker.core.retry import RetryPolicy
from cointracker.core.throttle import RequestThrottle
from cointracker.domain.models import Coin, ChartData, SimplePrice

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 10.0


def create_http_client(
    base_url: str = DEFAULT_BASE_URL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build the AsyncClient used for all market data calls."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout_seconds,
        headers={"Accept": "application/json"},
        transport=transport,
    )


class CoinGeckoProvider:
    """Throttled, retrying client for the CoinGecko v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        throttle: RequestThrottle,
        retry_policy: RetryPolicy,
    ):
        self._client = client
        self._throttle = throttle
        self._retry = retry_policy

    async def list_coins(self) -> list[Coin]:
        data = await self._get_json("/coins/list")
        if not isinstance(data, list):
            raise InvalidResponseShapeError("Coin list response is not an array")
        try:
            return [Coin.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as exc:
            raise InvalidResponseShapeError(f"Malformed coin list entry: {exc}") from exc

    async def get_markets(
        self,
        vs_currency: str = "usd",
        page: int = 1,
        per_page: int = 20,
        order: str = "market_cap_desc",
        sparkline: bool = False,
    ) -> list[dict[str, Any]]:
        data = await self._get_json(
            "/coins/markets",
            params={
                "vs_currency": vs_currency,
                "page": page,
                "per_page": per_page,
                "order": order,
                "sparkline": sparkline,
            },
        )
        if not isinstance(data, list):
            raise InvalidResponseShapeError("Market data response is not an array")
        return data

    async def get_coin_detail(self, coin_id: str) -> dict[str, Any]:
        data = await self._get_json(
            f"/coins/{quote(coin_id, safe='')}",
            params={
                "localization": False,
                "tickers": False,
                "market_data": True,
                "community_data": False,
                "developer_data": False,
                "sparkline": False,
            },
        )
        if not isinstance(data, dict) or "id" not in data:
            raise InvalidResponseShapeError(f"Coin detail response for {coin_id} is not a coin object")
        return data

    async def get_market_chart(
        self,
        coin_id: str,
        days: str = "7",
        vs_currency: str = "usd",
    ) -> ChartData:
        data = await self._get_json(
            f"/coins/{quote(coin_id, safe='')}/market_chart",
            params={"vs_currency": vs_currency, "days": days},
        )
        if not isinstance(data, dict) or not isinstance(data.get("prices"), list):
            raise InvalidResponseShapeError(f"Chart response for {coin_id} has no price series")
        try:
            return ChartData.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise InvalidResponseShapeError(f"Malformed chart series for {coin_id}: {exc}") from exc

    async def get_simple_prices(
        self,
        ids: Sequence[str],
        vs_currencies: Sequence[str] = ("usd",),
    ) -> SimplePrice:
        data = await self._get_json(
            "/simple/price",
            params={"ids": ",".join(ids), "vs_currencies": ",".join(vs_currencies)},
        )
        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise InvalidResponseShapeError("Simple price response is not a mapping of coin prices")
        return data

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._retry.run(lambda: self._attempt(path, params))

    async def _attempt(self, path: str, params: Optional[dict[str, Any]]) -> Any:
        """One throttled GET, with the outcome mapped onto the error taxonomy."""
        await self._throttle.acquire()
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            logger.error("CoinGecko request timed out: %s", path)
            raise RequestTimeoutError(f"CoinGecko request timed out: {path}") from exc
        except httpx.RequestError as exc:
            logger.error("CoinGecko API no response for %s: %s", path, exc)
            raise NetworkUnavailableError(
                "No response received from CoinGecko API. Check your internet connection."
            ) from exc

        status = response.status_code
        if status == 429:
            logger.debug("CoinGecko 429 for %s", path)
            raise RateLimitedError()
        if status == 404:
            raise NotFoundError("Resource", path)
        if response.is_error:
            logger.error("CoinGecko API error %s for %s: %s", status, path, response.text[:200])
            raise MarketDataError(
                f"CoinGecko API error {status}: {response.text[:200]}",
                status_code=status,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseShapeError(f"CoinGecko returned a non-JSON body for {path}") from exc
