"""httpx implementation of RemotePortfolioApi."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

DEFAULT_TIMEOUT_SECONDS = 10.0


def create_portfolio_client(
    base_url: str,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build the AsyncClient for the persistence API."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout_seconds,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        transport=transport,
    )


class HttpPortfolioApi:
    """
    Client for the `/portfolio` REST resource (json-server style).

    Non-2xx responses raise httpx.HTTPStatusError; transport failures raise
    httpx.RequestError.
    """

    def __init__(self, client: httpx.AsyncClient, resource: str = "/portfolio"):
        self._client = client
        self._resource = resource.rstrip("/")

    def _item_path(self, holding_id: str) -> str:
        return f"{self._resource}/{quote(holding_id, safe='')}"

    async def list_holdings(self) -> Any:
        response = await self._client.get(self._resource)
        response.raise_for_status()
        return response.json()

    async def get_holding(self, holding_id: str) -> Any:
        response = await self._client.get(self._item_path(holding_id))
        response.raise_for_status()
        return response.json()

    async def create_holding(self, record: dict[str, Any]) -> Any:
        response = await self._client.post(self._resource, json=record)
        response.raise_for_status()
        return response.json()

    async def update_holding(self, holding_id: str, changes: dict[str, Any]) -> Any:
        response = await self._client.patch(self._item_path(holding_id), json=changes)
        response.raise_for_status()
        return response.json()

    async def delete_holding(self, holding_id: str) -> None:
        response = await self._client.delete(self._item_path(holding_id))
        response.raise_for_status()
