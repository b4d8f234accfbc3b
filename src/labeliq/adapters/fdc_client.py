"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_TIMEOUT_SECONDS = 15.0


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """Search foods by query and return the raw search payload."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch one food by FDC id and return the raw payload."""


@dataclass
class HttpxFdcClient(FdcClient):
    """FDC client over a shared ``httpx.AsyncClient``."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create a client that owns its HTTP session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """Search foods, including ``gtinUpc:`` barcode queries."""
        return await self._get(
            "/foods/search", {"query": query, "pageSize": page_size}
        )

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch full details for a food."""
        return await self._get(f"/food/{fdc_id}", {})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str, params: dict[str, object]) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            params={**params, "api_key": self.api_key},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
