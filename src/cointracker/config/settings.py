"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / ".cointracker"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Crypto Portfolio Tracker"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Data directory (local store lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    # Market data (CoinGecko v3)
    market_data_base_url: str = "https://api.coingecko.com/api/v3"
    request_timeout_seconds: float = 10.0
    min_request_interval_seconds: float = 1.5
    max_rate_limit_retries: int = 3
    initial_retry_delay_seconds: float = 1.0
    market_data_cache_ttl_seconds: int = 300

    # Portfolio persistence API; unset means local-only
    portfolio_api_url: Optional[str] = None

    # Local store
    storage_key: str = "crypto_portfolio"

    quote_currency: str = "usd"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "portfolio.db"
        return f"sqlite:///{db_path}"

    @property
    def cache_ttl_ms(self) -> int:
        return self.market_data_cache_ttl_seconds * 1000


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
