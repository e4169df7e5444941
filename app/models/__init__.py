"""Data models for the Trade Fairness service."""

from .item import ItemSnapshot, ItemListing
from .comparison import FairnessLevel, ComparisonResult

__all__ = [
    "ItemSnapshot",
    "ItemListing",
    "FairnessLevel",
    "ComparisonResult",
]
