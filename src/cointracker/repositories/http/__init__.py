"""HTTP repository implementations."""

from cointracker.repositories.http.portfolio_api import HttpPortfolioApi, create_portfolio_client

__all__ = [
    "HttpPortfolioApi",
    "create_portfolio_client",
]
