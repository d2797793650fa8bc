"""
Offline-first portfolio repository.

Every operation prefers the remote persistence API, falls back to the local
store when the remote call fails, and mirrors successful remote results into
the local store. The remote API is optional; without one, the local store is
the only backend.
"""

import logging
import math
import uuid
from dataclasses import asdict
from typing import Any, Callable, Optional

from cointracker.core.clock import isoformat_utc, parse_date, today_utc
from cointracker.core.exceptions import InvalidResponseShapeError, NotFoundError, ValidationError
from cointracker.domain.models import HoldingCreate, HoldingRecord, HoldingUpdate
from cointracker.repositories.protocols.holding_store import LocalHoldingStore
from cointracker.repositories.protocols.portfolio_api import RemotePortfolioApi

logger = logging.getLogger(__name__)


def validate_holding_fields(values: dict[str, Any]) -> None:
    """
    Validate holding attributes that are present in values.

    Raises ValidationError listing every problem found.
    """
    errors: list[str] = []

    if "coin_id" in values and not str(values["coin_id"] or "").strip():
        errors.append("Please select a cryptocurrency.")

    if "amount" in values:
        amount = values["amount"]
        if not _is_number(amount) or amount <= 0:
            errors.append("Amount must be a valid positive number.")

    if "purchase_price" in values:
        price = values["purchase_price"]
        if not _is_number(price) or price < 0:
            errors.append("Price must be a valid non-negative number.")

    if "purchase_date" in values:
        purchased = parse_date(str(values["purchase_date"] or ""))
        if purchased is None:
            errors.append("Purchase date must be an ISO date (YYYY-MM-DD).")
        elif purchased > today_utc():
            errors.append("Purchase date cannot be in the future.")

    if errors:
        raise ValidationError(" ".join(errors))


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _parse_records(items: list[Any]) -> list[HoldingRecord]:
    """Parse remote records, skipping the ones that are not valid holdings."""
    holdings: list[HoldingRecord] = []
    for item in items:
        try:
            holdings.append(HoldingRecord.from_dict(item))
        except ValueError as exc:
            logger.warning("Skipping invalid remote holding: %s", exc)
    return holdings


def _index_of(items: list[HoldingRecord], holding_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == holding_id:
            return index
    return None


class PortfolioRepository:
    """CRUD over holdings with remote-first, local-fallback semantics."""

    def __init__(
        self,
        local_store: LocalHoldingStore,
        remote: Optional[RemotePortfolioApi] = None,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._local = local_store
        self._remote = remote
        self._id_factory = id_factory

    async def list_holdings(self) -> list[HoldingRecord]:
        """
        All holdings.

        The remote collection, when reachable and well-formed, replaces the
        local copy. Otherwise the local copy is returned unmodified.
        """
        if self._remote is not None:
            try:
                data = await self._remote.list_holdings()
                if not isinstance(data, list):
                    raise InvalidResponseShapeError("Invalid API response format")
            except Exception as exc:
                logger.warning("API unavailable/invalid, falling back to local store: %s", exc)
            else:
                holdings = _parse_records(data)
                self._persist(holdings)
                return holdings
        return self._local.load()

    async def get_holding(self, holding_id: str) -> Optional[HoldingRecord]:
        """One holding by id, or None if it exists nowhere."""
        if self._remote is not None:
            try:
                return HoldingRecord.from_dict(await self._remote.get_holding(holding_id))
            except Exception as exc:
                logger.warning("API unavailable, falling back to local store: %s", exc)
        items = self._local.load()
        index = _index_of(items, holding_id)
        return items[index] if index is not None else None

    async def add_holding(self, data: HoldingCreate) -> HoldingRecord:
        """
        Record a new holding.

        The id is assigned locally before any remote call, so the returned
        record always carries a usable id.
        """
        validate_holding_fields(asdict(data))
        record = data.to_record(self._id_factory(), added_date=isoformat_utc())

        if self._remote is not None:
            try:
                created = HoldingRecord.from_dict(
                    await self._remote.create_holding(record.to_dict())
                )
            except Exception as exc:
                logger.warning("API unavailable, saving to local store: %s", exc)
            else:
                self._persist(self._local.load() + [created])
                return created

        self._persist(self._local.load() + [record])
        return record

    async def update_holding(self, holding_id: str, patch: HoldingUpdate) -> HoldingRecord:
        """
        Apply a partial update.

        Raises NotFoundError when the remote update fails and the holding is
        not in the local store either.
        """
        changes = patch.changes()
        validate_holding_fields(changes)

        if self._remote is not None:
            try:
                raw = await self._remote.update_holding(holding_id, patch.to_dict())
                if not isinstance(raw, dict):
                    raise InvalidResponseShapeError("Invalid API response format")
                items = self._local.load()
                index = _index_of(items, holding_id)
                base = items[index].to_dict() if index is not None else {}
                updated = HoldingRecord.from_dict({**base, **raw, "id": holding_id})
            except Exception as exc:
                logger.warning("API unavailable, updating in local store: %s", exc)
            else:
                if index is not None:
                    items[index] = updated
                    self._persist(items)
                return updated

        items = self._local.load()
        index = _index_of(items, holding_id)
        if index is None:
            raise NotFoundError("Holding", holding_id)
        updated = items[index].merged(changes)
        items[index] = updated
        self._persist(items)
        return updated

    async def delete_holding(self, holding_id: str) -> None:
        """Remove a holding. Always honored locally; deleting twice is a no-op."""
        if self._remote is not None:
            try:
                await self._remote.delete_holding(holding_id)
            except Exception as exc:
                logger.warning("API unavailable, deleting from local store: %s", exc)

        items = self._local.load()
        remaining = [item for item in items if item.id != holding_id]
        if len(remaining) != len(items):
            self._persist(remaining)

    def _persist(self, items: list[HoldingRecord]) -> None:
        result = self._local.save(items)
        if not result.ok:
            # The in-memory result is still returned to the caller.
            logger.warning("Local store write failed, continuing: %s", result.error)
