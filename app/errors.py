"""Exceptions raised by the trade fairness service."""


class TradeFairnessError(Exception):
    """Base class for service errors."""


class ItemNotFoundError(TradeFairnessError):
    """One or more requested items do not exist in the item source."""

    def __init__(self, item_ids: list[str]):
        self.item_ids = item_ids
        noun = "Item" if len(item_ids) == 1 else "Items"
        super().__init__(f"{noun} not found: {', '.join(item_ids)}")


class DuplicateItemError(TradeFairnessError):
    """An item with the same id is already stored."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item already exists: {item_id}")


class EstimationError(TradeFairnessError):
    """The value estimation call failed or returned an unusable reply."""
