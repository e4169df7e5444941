"""Mock item source for testing."""

from datetime import datetime
from typing import Optional

from app.errors import DuplicateItemError
from app.models import ItemListing
from .base import ItemSource


class MockItemSource(ItemSource):
    """In-memory item source seeded with predefined listings."""

    name = "mock"

    def __init__(self, items: Optional[list[ItemListing]] = None):
        listings = self._default_items() if items is None else items
        self._items = {item.id: item for item in listings}

    async def get_items(self, item_ids: list[str]) -> dict[str, ItemListing]:
        """Return stored listings for the given ids."""
        return {item_id: self._items[item_id] for item_id in item_ids if item_id in self._items}

    async def update_estimated_value(self, item_id: str, value: float) -> bool:
        if item_id not in self._items:
            return False
        self._items[item_id] = self._items[item_id].model_copy(update={"estimated_value": value})
        return True

    async def add_item(self, listing: ItemListing) -> ItemListing:
        if listing.id in self._items:
            raise DuplicateItemError(listing.id)
        self._items[listing.id] = listing
        return listing

    def _default_items(self) -> list[ItemListing]:
        """Generate default test listings."""
        return [
            ItemListing(
                id="item-bike",
                title="Hero Sprint Road Bike",
                category="Sports",
                description="21-speed road bike, lightly used, new tyres",
                price=8500,
                estimated_value=8000,
                owner_id="user-1",
                created_at=datetime.utcnow(),
            ),
            ItemListing(
                id="item-guitar",
                title="Yamaha F310 Acoustic Guitar",
                category="Music",
                description="Acoustic guitar with gig bag",
                price=7500,
                estimated_value=7200,
                owner_id="user-2",
                created_at=datetime.utcnow(),
            ),
            ItemListing(
                id="item-phone",
                title="Redmi Note 12",
                category="Electronics",
                description="6GB/128GB, minor scratches on the back",
                price=11000,
                estimated_value=12000,
                owner_id="user-3",
                created_at=datetime.utcnow(),
            ),
            ItemListing(
                id="item-books",
                title="Harry Potter Box Set",
                category="Books",
                description="Complete 7-book paperback set",
                is_donation=True,
                estimated_value=2500,
                owner_id="user-4",
                created_at=datetime.utcnow(),
            ),
            ItemListing(
                id="item-lamp",
                title="Desk Lamp",
                category="Home",
                description="LED desk lamp, not yet valued",
                owner_id="user-5",
                created_at=datetime.utcnow(),
            ),
        ]
