"""SQLAlchemy repository implementations."""

from cointracker.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from cointracker.repositories.sqlalchemy.holding_store import SqlAlchemyHoldingStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyHoldingStore",
]
