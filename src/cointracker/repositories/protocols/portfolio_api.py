"""Remote portfolio persistence API protocol."""

from typing import Any, Protocol


class RemotePortfolioApi(Protocol):
    """
    Interface for the optional remote holdings resource.

    Methods return decoded JSON and raise on any failure; callers treat every
    failure as "remote unavailable".
    """

    async def list_holdings(self) -> Any:
        """GET the full collection."""
        ...

    async def get_holding(self, holding_id: str) -> Any:
        """GET one record."""
        ...

    async def create_holding(self, record: dict[str, Any]) -> Any:
        """POST a new record (id already assigned)."""
        ...

    async def update_holding(self, holding_id: str, changes: dict[str, Any]) -> Any:
        """PATCH a record with partial fields."""
        ...

    async def delete_holding(self, holding_id: str) -> None:
        """DELETE a record."""
        ...
