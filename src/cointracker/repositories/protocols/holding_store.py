"""Local holding store protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol

from cointracker.domain.models import HoldingRecord


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a local write. Callers decide whether a failure matters."""

    ok: bool
    error: Optional[str] = None


class LocalHoldingStore(Protocol):
    """Interface for the durable local copy of the holdings collection."""

    def load(self) -> list[HoldingRecord]:
        """Read the full collection. Never raises; degrades to []."""
        ...

    def save(self, holdings: list[HoldingRecord]) -> StoreResult:
        """Replace the full collection."""
        ...
