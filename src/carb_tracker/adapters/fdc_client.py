"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

CARBOHYDRATE_NUTRIENT_ID = 1005
SEARCH_DATA_TYPES = ["Foundation"]


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    api_key: str

    async def search_foods(self, query: str) -> dict[str, object]:
        """Search foods by query and return raw API data."""

    async def get_food(self, fdc_id: int) -> dict[str, object] | None:
        """Fetch a food's carbohydrate data, or None if it does not exist."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    def _headers(self) -> dict[str, str]:
        return {
            "X-Api-Key": self.api_key,
            "Content-Type": "application/json; charset=utf-8",
        }

    async def search_foods(self, query: str) -> dict[str, object]:
        """Search Foundation foods by query."""
        response = await self.http_client.post(
            f"{self.base_url}/foods/search",
            headers=self._headers(),
            json={"query": query, "dataType": SEARCH_DATA_TYPES},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def get_food(self, fdc_id: int) -> dict[str, object] | None:
        """Fetch a food's carbohydrate nutrient by FDC id."""
        response = await self.http_client.get(
            f"{self.base_url}/food/{fdc_id}",
            headers=self._headers(),
            params={"nutrients": CARBOHYDRATE_NUTRIENT_ID},
            timeout=self.timeout_seconds,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
