"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, DateTime, String, Text

from cointracker.core.clock import now_utc
from cointracker.repositories.sqlalchemy.database import Base


class KeyValueORM(Base):
    """SQLAlchemy model for a serialized blob stored under a fixed key."""

    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=now_utc, onupdate=now_utc)
