"""Item source for a hosted PostgREST-style items table."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.config import settings
from app.models import ItemListing
from .base import ItemSource

logger = logging.getLogger(__name__)


class RestItemSource(ItemSource):
    """Read and update items through a REST API over the marketplace's `items` table."""

    name = "rest"
    TABLE_PATH = "/rest/v1/items"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.items_api_url).rstrip("/")
        self.api_key = api_key or settings.items_api_key
        self._transport = transport

        if not self.base_url:
            raise ValueError("ITEMS_API_URL not configured")

    def _client(self) -> httpx.AsyncClient:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"

        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(settings.read_timeout, connect=settings.connect_timeout),
            transport=self._transport,
        )

    async def get_items(self, item_ids: list[str]) -> dict[str, ItemListing]:
        """Fetch the rows whose id is in item_ids."""
        if not item_ids:
            return {}

        params = {"select": "*", "id": f"in.({','.join(item_ids)})"}

        async with self._client() as client:
            try:
                response = await client.get(self.TABLE_PATH, params=params)
            except httpx.TimeoutException:
                logger.warning("Item lookup timed out")
                return {}

        if response.status_code != 200:
            logger.warning(f"Item lookup returned {response.status_code}")
            return {}

        items = {}
        for row in response.json():
            listing = self._parse_item(row)
            if listing:
                items[listing.id] = listing
        return items

    async def update_estimated_value(self, item_id: str, value: float) -> bool:
        """PATCH the estimated_value column of one row."""
        async with self._client() as client:
            try:
                response = await client.patch(
                    self.TABLE_PATH,
                    params={"id": f"eq.{item_id}"},
                    json={"estimated_value": value},
                )
            except httpx.TimeoutException:
                logger.warning(f"Updating item {item_id} timed out")
                return False

        if response.status_code not in (200, 204):
            logger.warning(f"Updating item {item_id} returned {response.status_code}")
            return False
        return True

    def _parse_item(self, data: dict) -> Optional[ItemListing]:
        """Parse a table row into a listing, skipping rows that do not validate."""
        try:
            return ItemListing(
                id=str(data["id"]),
                title=data.get("title") or "Untitled",
                category=data.get("category"),
                description=data.get("description"),
                price=data.get("price"),
                is_donation=bool(data.get("is_donation")),
                estimated_value=data.get("estimated_value"),
                owner_id=data.get("user_id") or data.get("owner_id"),
                **({"created_at": data["created_at"]} if data.get("created_at") else {}),
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Skipping malformed item row: {e}")
            return None
