"""Abstract base class for item sources."""

from abc import ABC, abstractmethod
from typing import Optional

from app.errors import ItemNotFoundError
from app.models import ItemListing


class ItemSource(ABC):
    """Abstract interface for looking up marketplace items."""

    name: str = "base"

    @abstractmethod
    async def get_items(self, item_ids: list[str]) -> dict[str, ItemListing]:
        """
        Look up several items at once.

        Args:
            item_ids: Identifiers to resolve

        Returns:
            Mapping of identifier to listing; ids that were not found are absent
        """
        pass

    @abstractmethod
    async def update_estimated_value(self, item_id: str, value: float) -> bool:
        """
        Store a new estimated value for an item.

        Args:
            item_id: Identifier of the item to update
            value: The estimated value

        Returns:
            True if the item was updated
        """
        pass

    async def add_item(self, listing: ItemListing) -> ItemListing:
        """Store a new listing. Read-only sources do not support this."""
        raise NotImplementedError(f"{self.name} source does not accept new items")

    async def record_estimate(
        self,
        item_id: str,
        model: str,
        raw_response: Optional[str],
        estimated_value: Optional[float],
        error_message: Optional[str] = None,
    ):
        """Keep a history row for an estimation attempt. Most sources keep none."""
        return None

    async def get_item(self, item_id: str) -> Optional[ItemListing]:
        """Look up a single item, returning None if it does not exist."""
        items = await self.get_items([item_id])
        return items.get(item_id)

    async def require_items(self, *item_ids: str) -> list[ItemListing]:
        """Look up items in the given order, raising if any is missing."""
        found = await self.get_items(list(item_ids))
        missing = [item_id for item_id in item_ids if item_id not in found]
        if missing:
            raise ItemNotFoundError(missing)
        return [found[item_id] for item_id in item_ids]
