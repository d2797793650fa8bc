"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cointracker.app_context import get_app_context
from cointracker.config.settings import get_settings
from cointracker.config.logging_config import setup_logging
from cointracker.repositories.sqlalchemy.database import init_db
from cointracker.api.routers import holdings_router, market_router
from cointracker.core.exceptions import (
    AppError,
    InvalidResponseShapeError,
    NetworkUnavailableError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)

# First match wins, so subclasses come before their bases
ERROR_STATUS: list[tuple[type[AppError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 400),
    (RateLimitedError, 429),
    (NetworkUnavailableError, 503),
    (InvalidResponseShapeError, 502),
]


def status_for(exc: AppError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown
    await get_app_context().aclose()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Crypto portfolio tracking with live CoinGecko market data",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(market_router)
app.include_router(holdings_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
