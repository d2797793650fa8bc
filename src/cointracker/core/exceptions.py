"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class MarketDataError(AppError):
    """
    Upstream market data failure that fits no narrower category.

    The upstream HTTP status, when one was received, is kept on `status_code`.
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN",
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, code=code)


class RateLimitedError(MarketDataError):
    """Raised when the upstream rejects a request with HTTP 429."""

    def __init__(self, message: str = "Rate limit exceeded. Please try again later."):
        super().__init__(message, code="RATE_LIMITED", status_code=429)


class NetworkUnavailableError(MarketDataError):
    """Raised when a request was sent but no response was received."""

    def __init__(self, message: str, code: str = "NETWORK_UNAVAILABLE"):
        super().__init__(message, code=code)


class RequestTimeoutError(NetworkUnavailableError):
    """Raised when the upstream did not answer within the request timeout."""

    def __init__(self, message: str):
        super().__init__(message, code="TIMEOUT")


class InvalidResponseShapeError(MarketDataError):
    """Raised when a 2xx response body is not the structure we expect."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_RESPONSE")
