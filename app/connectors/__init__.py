"""Item sources for looking up marketplace listings."""

from .base import ItemSource
from .database import DatabaseItemSource
from .rest import RestItemSource
from .mock import MockItemSource

__all__ = [
    "ItemSource",
    "DatabaseItemSource",
    "RestItemSource",
    "MockItemSource",
]
