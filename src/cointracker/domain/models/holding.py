"""Holding domain models."""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

# Python attribute -> JSON wire/storage key
WIRE_FIELDS: dict[str, str] = {
    "id": "id",
    "coin_id": "coinId",
    "name": "name",
    "symbol": "symbol",
    "image": "image",
    "amount": "amount",
    "purchase_price": "purchasePrice",
    "purchase_date": "purchaseDate",
    "notes": "notes",
    "added_date": "addedDate",
}


def _to_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass
class HoldingRecord:
    """
    One recorded purchase lot of a cryptocurrency.

    `id` is assigned when the lot is created and never changes. Several lots
    of the same coin are separate records.
    """

    id: str
    coin_id: str
    name: str = ""
    symbol: str = ""
    image: str = ""
    amount: float = 0.0
    purchase_price: float = 0.0
    purchase_date: str = ""
    notes: Optional[str] = None
    added_date: Optional[str] = None

    @property
    def cost_basis(self) -> float:
        """Total amount paid for this lot."""
        return self.purchase_price * self.amount

    def merged(self, changes: dict[str, Any]) -> "HoldingRecord":
        """Return a copy with the given attribute changes applied; id is kept."""
        allowed = {k: v for k, v in changes.items() if k in WIRE_FIELDS and k != "id"}
        return replace(self, **allowed)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire format, omitting unset optionals."""
        data: dict[str, Any] = {}
        for attr, key in WIRE_FIELDS.items():
            value = getattr(self, attr)
            if value is None and attr in ("notes", "added_date"):
                continue
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "HoldingRecord":
        """
        Parse a record from its camelCase wire format.

        Raises ValueError when required keys are missing or numbers are invalid.
        Unknown keys are ignored.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Holding must be an object, got {type(data).__name__}")
        holding_id = data.get("id")
        coin_id = data.get("coinId")
        if holding_id in (None, "") or coin_id in (None, ""):
            raise ValueError("Holding requires 'id' and 'coinId'")
        return cls(
            id=str(holding_id),
            coin_id=str(coin_id),
            name=str(data.get("name") or ""),
            symbol=str(data.get("symbol") or ""),
            image=str(data.get("image") or ""),
            amount=_to_float(data.get("amount", 0), "amount"),
            purchase_price=_to_float(data.get("purchasePrice", 0), "purchasePrice"),
            purchase_date=str(data.get("purchaseDate") or ""),
            notes=data.get("notes"),
            added_date=data.get("addedDate"),
        )


@dataclass
class HoldingCreate:
    """Input data for recording a new holding."""

    coin_id: str
    amount: float
    purchase_price: float
    purchase_date: str
    name: str = ""
    symbol: str = ""
    image: str = ""
    notes: Optional[str] = None

    def to_record(self, holding_id: str, added_date: Optional[str] = None) -> HoldingRecord:
        return HoldingRecord(
            id=holding_id,
            coin_id=self.coin_id.strip(),
            name=self.name,
            symbol=self.symbol,
            image=self.image,
            amount=float(self.amount),
            purchase_price=float(self.purchase_price),
            purchase_date=self.purchase_date,
            notes=self.notes,
            added_date=added_date,
        )


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding. None means "leave unchanged"."""

    coin_id: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    image: Optional[str] = None
    amount: Optional[float] = None
    purchase_price: Optional[float] = None
    purchase_date: Optional[str] = None
    notes: Optional[str] = None

    def changes(self) -> dict[str, Any]:
        """Attribute changes that were explicitly provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def to_dict(self) -> dict[str, Any]:
        """Provided changes in camelCase wire format."""
        return {WIRE_FIELDS[k]: v for k, v in self.changes().items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HoldingUpdate":
        """Build from wire-format keys; unknown keys (including id) are dropped."""
        by_wire = {wire: attr for attr, wire in WIRE_FIELDS.items() if attr != "id"}
        kwargs = {by_wire[k]: v for k, v in data.items() if k in by_wire}
        kwargs.pop("added_date", None)
        return cls(**kwargs)
