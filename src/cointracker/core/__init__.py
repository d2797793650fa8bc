"""Core utilities and shared functionality."""

from cointracker.core.clock import (
    now_utc,
    today_utc,
    epoch_ms,
    to_utc,
    parse_date,
    isoformat_utc,
    UTC,
)
from cointracker.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    MarketDataError,
    RateLimitedError,
    NetworkUnavailableError,
    RequestTimeoutError,
    InvalidResponseShapeError,
)
from cointracker.core.cache import ResponseCache, CachedEntry, cache_key
from cointracker.core.throttle import RequestThrottle
from cointracker.core.retry import RetryPolicy

__all__ = [
    "now_utc",
    "today_utc",
    "epoch_ms",
    "to_utc",
    "parse_date",
    "isoformat_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "MarketDataError",
    "RateLimitedError",
    "NetworkUnavailableError",
    "RequestTimeoutError",
    "InvalidResponseShapeError",
    "ResponseCache",
    "CachedEntry",
    "cache_key",
    "RequestThrottle",
    "RetryPolicy",
]
