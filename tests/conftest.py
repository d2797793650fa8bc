"""
Pytest configuration and fixtures for crypto portfolio tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Fake remote persistence APIs (working and unreachable)
- Deterministic and failing market data providers
- Repository and service fixtures
- FastAPI test client with dependency overrides
"""

import copy
import itertools
from typing import Any, Callable, Optional, Sequence

import httpx
import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from cointracker.main import app
from cointracker.api import deps
from cointracker.config.settings import Settings, set_settings, reset_settings
from cointracker.core import NetworkUnavailableError, NotFoundError, ResponseCache
from cointracker.domain.models import ChartData, Coin, HoldingCreate, SimplePrice
from cointracker.repositories import PortfolioRepository
from cointracker.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from cointracker.repositories.sqlalchemy import orm_models  # noqa: F401
from cointracker.repositories.sqlalchemy import SqlAlchemyHoldingStore
from cointracker.services import MarketDataService, PortfolioService


# =============================================================================
# DATA HELPERS
# =============================================================================


def holding_create(
    coin_id: str = "bitcoin",
    amount: float = 2.0,
    purchase_price: float = 40000.0,
    purchase_date: str = "2024-01-15",
    **extra: Any,
) -> HoldingCreate:
    """Build a valid HoldingCreate with sensible defaults."""
    defaults = {
        "bitcoin": ("Bitcoin", "btc"),
        "ethereum": ("Ethereum", "eth"),
        "solana": ("Solana", "sol"),
    }
    name, symbol = defaults.get(coin_id, (coin_id.title(), coin_id[:3]))
    extra.setdefault("name", name)
    extra.setdefault("symbol", symbol)
    return HoldingCreate(
        coin_id=coin_id,
        amount=amount,
        purchase_price=purchase_price,
        purchase_date=purchase_date,
        **extra,
    )


def wire_holding(holding_id: str = "h-1", coin_id: str = "bitcoin", **overrides: Any) -> dict:
    """A holding in camelCase wire format."""
    data = {
        "id": holding_id,
        "coinId": coin_id,
        "name": coin_id.title(),
        "symbol": coin_id[:3],
        "image": "",
        "amount": 1.0,
        "purchasePrice": 100.0,
        "purchaseDate": "2024-01-15",
    }
    data.update(overrides)
    return data


def sequential_ids(prefix: str = "id") -> Callable[[], str]:
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def holding_store(test_session) -> SqlAlchemyHoldingStore:
    """Provide test local holding store."""
    return SqlAlchemyHoldingStore(test_session)


# =============================================================================
# REMOTE API FIXTURES
# =============================================================================


class FakeRemoteApi:
    """
    In-memory stand-in for the json-server persistence API.

    Records every call in `calls` as (method, args).
    """

    def __init__(self, items: Optional[list[dict]] = None):
        self.items: list[dict] = [copy.deepcopy(i) for i in items or []]
        self.calls: list[tuple[str, tuple]] = []

    def _find(self, holding_id: str) -> dict:
        for item in self.items:
            if item["id"] == holding_id:
                return item
        request = httpx.Request("GET", f"http://remote/portfolio/{holding_id}")
        raise httpx.HTTPStatusError(
            "404 Not Found", request=request, response=httpx.Response(404, request=request)
        )

    async def list_holdings(self) -> Any:
        self.calls.append(("list", ()))
        return copy.deepcopy(self.items)

    async def get_holding(self, holding_id: str) -> Any:
        self.calls.append(("get", (holding_id,)))
        return copy.deepcopy(self._find(holding_id))

    async def create_holding(self, record: dict) -> Any:
        self.calls.append(("create", (record,)))
        self.items.append(copy.deepcopy(record))
        return copy.deepcopy(record)

    async def update_holding(self, holding_id: str, changes: dict) -> Any:
        self.calls.append(("update", (holding_id, changes)))
        item = self._find(holding_id)
        item.update(changes)
        return copy.deepcopy(item)

    async def delete_holding(self, holding_id: str) -> None:
        self.calls.append(("delete", (holding_id,)))
        self.items = [i for i in self.items if i["id"] != holding_id]


class FailingRemoteApi:
    """Remote API whose server is unreachable."""

    def __init__(self):
        self.calls = 0

    def _fail(self):
        self.calls += 1
        raise httpx.ConnectError("Connection refused")

    async def list_holdings(self) -> Any:
        self._fail()

    async def get_holding(self, holding_id: str) -> Any:
        self._fail()

    async def create_holding(self, record: dict) -> Any:
        self._fail()

    async def update_holding(self, holding_id: str, changes: dict) -> Any:
        self._fail()

    async def delete_holding(self, holding_id: str) -> None:
        self._fail()


@pytest.fixture
def fake_remote() -> FakeRemoteApi:
    return FakeRemoteApi()


@pytest.fixture
def failing_remote() -> FailingRemoteApi:
    return FailingRemoteApi()


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicPriceProvider:
    """
    Deterministic market data provider for testing.

    Counts calls per operation in `calls`.
    """

    FIXED_PRICES: SimplePrice = {
        "bitcoin": {"usd": 50000.0, "eur": 46000.0},
        "ethereum": {"usd": 3000.0, "eur": 2760.0},
        "solana": {"usd": 100.0, "eur": 92.0},
    }

    FIXED_MARKETS = [
        {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin", "current_price": 50000.0,
         "market_cap": 980_000_000_000, "total_volume": 30_000_000_000,
         "price_change_percentage_24h": 2.5},
        {"id": "ethereum", "symbol": "eth", "name": "Ethereum", "current_price": 3000.0,
         "market_cap": 360_000_000_000, "total_volume": 15_000_000_000,
         "price_change_percentage_24h": -1.2},
        {"id": "solana", "symbol": "sol", "name": "Solana", "current_price": 100.0,
         "market_cap": 44_000_000_000, "total_volume": 2_000_000_000,
         "price_change_percentage_24h": 7.8},
    ]

    def __init__(self):
        self.calls: dict[str, int] = {}

    def _count(self, operation: str) -> None:
        self.calls[operation] = self.calls.get(operation, 0) + 1

    async def list_coins(self) -> list[Coin]:
        self._count("list_coins")
        return [Coin(id=m["id"], symbol=m["symbol"], name=m["name"]) for m in self.FIXED_MARKETS]

    async def get_markets(
        self,
        vs_currency: str = "usd",
        page: int = 1,
        per_page: int = 20,
        order: str = "market_cap_desc",
        sparkline: bool = False,
    ) -> list[dict[str, Any]]:
        self._count("get_markets")
        start = (page - 1) * per_page
        return copy.deepcopy(self.FIXED_MARKETS[start:start + per_page])

    async def get_coin_detail(self, coin_id: str) -> dict[str, Any]:
        self._count("get_coin_detail")
        for market in self.FIXED_MARKETS:
            if market["id"] == coin_id:
                return {"id": coin_id, "name": market["name"], "description": {"en": ""}}
        raise NotFoundError("Resource", f"/coins/{coin_id}")

    async def get_market_chart(
        self,
        coin_id: str,
        days: str = "7",
        vs_currency: str = "usd",
    ) -> ChartData:
        self._count("get_market_chart")
        return ChartData(
            prices=[(1704067200000, 42000.0), (1704153600000, 43000.0)],
            market_caps=[(1704067200000, 8.2e11), (1704153600000, 8.4e11)],
            total_volumes=[(1704067200000, 2.1e10), (1704153600000, 2.3e10)],
        )

    async def get_simple_prices(
        self,
        ids: Sequence[str],
        vs_currencies: Sequence[str] = ("usd",),
    ) -> SimplePrice:
        self._count("get_simple_prices")
        return {
            coin_id: {cur: self.FIXED_PRICES[coin_id][cur] for cur in vs_currencies
                      if cur in self.FIXED_PRICES[coin_id]}
            for coin_id in ids
            if coin_id in self.FIXED_PRICES
        }


class FailingPriceProvider(DeterministicPriceProvider):
    """Market provider whose upstream is unreachable."""

    async def get_simple_prices(self, ids, vs_currencies=("usd",)) -> SimplePrice:
        self._count("get_simple_prices")
        raise NetworkUnavailableError("No response received from CoinGecko API.")

    async def get_markets(self, *args, **kwargs) -> list[dict[str, Any]]:
        self._count("get_markets")
        raise NetworkUnavailableError("No response received from CoinGecko API.")


@pytest.fixture
def price_provider() -> DeterministicPriceProvider:
    return DeterministicPriceProvider()


@pytest.fixture
def failing_price_provider() -> FailingPriceProvider:
    return FailingPriceProvider()


@pytest.fixture
def market_data_service(price_provider) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(provider=price_provider, cache=ResponseCache())


# =============================================================================
# REPOSITORY / SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def local_repository(holding_store) -> PortfolioRepository:
    """Repository with no remote API."""
    return PortfolioRepository(holding_store, remote=None, id_factory=sequential_ids("h"))


@pytest.fixture
def remote_repository(holding_store, fake_remote) -> PortfolioRepository:
    """Repository backed by a working remote API."""
    return PortfolioRepository(holding_store, remote=fake_remote, id_factory=sequential_ids("h"))


@pytest.fixture
def offline_repository(holding_store, failing_remote) -> PortfolioRepository:
    """Repository whose remote API is unreachable."""
    return PortfolioRepository(holding_store, remote=failing_remote, id_factory=sequential_ids("h"))


@pytest.fixture
def portfolio_service(local_repository, market_data_service) -> PortfolioService:
    return PortfolioService(repository=local_repository, market_data=market_data_service)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_market_service() -> MarketDataService:
    """Market data service used by the API client; tests may replace its provider."""
    return MarketDataService(provider=DeterministicPriceProvider(), cache=ResponseCache())


@pytest.fixture
def client(test_engine, tmp_path, api_market_service) -> TestClient:
    """Provide FastAPI test client with test database and deterministic market data."""
    set_settings(Settings(data_dir=tmp_path, portfolio_api_url=None))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_portfolio_api] = lambda: None
    app.dependency_overrides[deps.get_market_data_service] = lambda: api_market_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()
