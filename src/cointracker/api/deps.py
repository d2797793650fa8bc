"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from cointracker.app_context import get_app_context
from cointracker.config.settings import get_settings
from cointracker.repositories import PortfolioRepository, RemotePortfolioApi
from cointracker.repositories.sqlalchemy import SqlAlchemyHoldingStore
from cointracker.repositories.sqlalchemy.database import get_db
from cointracker.services import MarketDataService, PortfolioService


def get_holding_store(db: Session = Depends(get_db)) -> SqlAlchemyHoldingStore:
    """Provide the local holding store bound to the request session."""
    return SqlAlchemyHoldingStore(db, storage_key=get_settings().storage_key)


def get_portfolio_api() -> Optional[RemotePortfolioApi]:
    """Provide the remote persistence API, or None when running local-only."""
    return get_app_context().portfolio_api


def get_portfolio_repository(
    store: SqlAlchemyHoldingStore = Depends(get_holding_store),
    remote: Optional[RemotePortfolioApi] = Depends(get_portfolio_api),
) -> PortfolioRepository:
    """Provide PortfolioRepository instance."""
    return PortfolioRepository(local_store=store, remote=remote)


def get_market_data_service() -> MarketDataService:
    """Provide the process-wide MarketDataService (shared throttle and cache)."""
    return get_app_context().market_data


def get_portfolio_service(
    repository: PortfolioRepository = Depends(get_portfolio_repository),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        repository=repository,
        market_data=market_data,
        quote_currency=get_settings().quote_currency,
    )
