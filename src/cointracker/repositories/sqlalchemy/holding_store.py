"""SQLAlchemy implementation of LocalHoldingStore."""

import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cointracker.domain.models import HoldingRecord
from cointracker.repositories.protocols.holding_store import StoreResult
from cointracker.repositories.sqlalchemy.orm_models import KeyValueORM

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "crypto_portfolio"


class SqlAlchemyHoldingStore:
    """
    Durable local copy of the holdings collection.

    The whole collection is one JSON array stored under a single key. Reads
    never raise; writes report failure through StoreResult.
    """

    def __init__(self, db: Session, storage_key: str = DEFAULT_STORAGE_KEY):
        self._db = db
        self._key = storage_key

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> list[HoldingRecord]:
        """Read all holdings; unreadable or non-array data yields an empty list."""
        try:
            row = self._db.get(KeyValueORM, self._key)
            raw = row.value if row else None
        except SQLAlchemyError as exc:
            logger.error("Error reading local holdings: %s", exc)
            self._db.rollback()
            return []

        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError as exc:
            logger.error("Local holdings blob is not valid JSON: %s", exc)
            return []
        if not isinstance(parsed, list):
            logger.error("Local holdings blob is not an array; ignoring it")
            return []

        holdings: list[HoldingRecord] = []
        for item in parsed:
            try:
                holdings.append(HoldingRecord.from_dict(item))
            except ValueError as exc:
                logger.warning("Skipping invalid local holding: %s", exc)
        return holdings

    def save(self, holdings: list[HoldingRecord]) -> StoreResult:
        """Replace the stored collection."""
        payload = json.dumps([h.to_dict() for h in holdings])
        try:
            row = self._db.get(KeyValueORM, self._key)
            if row:
                row.value = payload
            else:
                self._db.add(KeyValueORM(key=self._key, value=payload))
            self._db.commit()
        except SQLAlchemyError as exc:
            logger.error("Error writing local holdings: %s", exc)
            self._db.rollback()
            return StoreResult(ok=False, error=str(exc))
        return StoreResult(ok=True)
