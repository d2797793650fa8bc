"""Application context for process-wide service management.

Owns the market data plumbing (one throttle, one response cache, one HTTP
client per upstream) so that every request shares the same request budget
and cache.
"""

from typing import Optional

import httpx

from cointracker.config.settings import Settings, get_settings
from cointracker.core import RequestThrottle, ResponseCache, RetryPolicy
from cointracker.repositories.http import HttpPortfolioApi, create_portfolio_client
from cointracker.providers import CoinGeckoProvider, create_http_client
from cointracker.services import MarketDataService


class AppContext:
    """
    Lazily built, long-lived services shared by all API requests.

    Per-request objects (database session, holding store, repository) are
    provided by api.deps instead.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

        self._throttle: Optional[RequestThrottle] = None
        self._cache: Optional[ResponseCache] = None
        self._market_client: Optional[httpx.AsyncClient] = None
        self._portfolio_client: Optional[httpx.AsyncClient] = None
        self._provider: Optional[CoinGeckoProvider] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._portfolio_api: Optional[HttpPortfolioApi] = None

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def throttle(self) -> RequestThrottle:
        if self._throttle is None:
            self._throttle = RequestThrottle(self.settings.min_request_interval_seconds)
        return self._throttle

    @property
    def cache(self) -> ResponseCache:
        if self._cache is None:
            self._cache = ResponseCache(ttl_ms=self.settings.cache_ttl_ms)
        return self._cache

    @property
    def provider(self) -> CoinGeckoProvider:
        if self._provider is None:
            settings = self.settings
            self._market_client = create_http_client(
                settings.market_data_base_url,
                timeout_seconds=settings.request_timeout_seconds,
            )
            self._provider = CoinGeckoProvider(
                client=self._market_client,
                throttle=self.throttle,
                retry_policy=RetryPolicy(
                    max_retries=settings.max_rate_limit_retries,
                    initial_delay_seconds=settings.initial_retry_delay_seconds,
                ),
            )
        return self._provider

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            self._market_data_service = MarketDataService(
                provider=self.provider,
                cache=self.cache,
            )
        return self._market_data_service

    @property
    def portfolio_api(self) -> Optional[HttpPortfolioApi]:
        """The remote persistence API, or None when running local-only."""
        url = self.settings.portfolio_api_url
        if not url:
            return None
        if self._portfolio_api is None:
            self._portfolio_client = create_portfolio_client(
                url, timeout_seconds=self.settings.request_timeout_seconds
            )
            self._portfolio_api = HttpPortfolioApi(self._portfolio_client)
        return self._portfolio_api

    async def aclose(self) -> None:
        """Close HTTP clients; the next access rebuilds them."""
        for client in (self._market_client, self._portfolio_client):
            if client is not None:
                await client.aclose()
        self._market_client = None
        self._portfolio_client = None
        self._provider = None
        self._market_data_service = None
        self._portfolio_api = None


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
