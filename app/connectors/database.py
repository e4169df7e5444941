"""Item source backed by the local SQLite database."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.errors import DuplicateItemError
from app.models import ItemListing
from app.models.database import DBItem, DBValueEstimate, init_db
from .base import ItemSource

logger = logging.getLogger(__name__)


class DatabaseItemSource(ItemSource):
    """Look up and update items stored through SQLAlchemy."""

    name = "database"

    def __init__(self, db_url: Optional[str] = None):
        self._session_factory: sessionmaker = init_db(db_url)

    async def get_items(self, item_ids: list[str]) -> dict[str, ItemListing]:
        session = self._session_factory()
        try:
            rows = session.query(DBItem).filter(DBItem.id.in_(item_ids)).all()
            return {row.id: row.to_listing() for row in rows}
        finally:
            session.close()

    async def update_estimated_value(self, item_id: str, value: float) -> bool:
        session = self._session_factory()
        try:
            item = session.query(DBItem).filter_by(id=item_id).first()
            if not item:
                return False
            item.estimated_value = value
            session.commit()
            return True
        finally:
            session.close()

    async def add_item(self, listing: ItemListing) -> ItemListing:
        session = self._session_factory()
        try:
            session.add(DBItem.from_listing(listing))
            session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.warning(f"Could not store item {listing.id}: {e.orig}")
            raise DuplicateItemError(listing.id) from e
        finally:
            session.close()

        logger.info(f"Stored item {listing.id} ({listing.title})")
        return listing

    async def record_estimate(
        self,
        item_id: str,
        model: str,
        raw_response: Optional[str],
        estimated_value: Optional[float],
        error_message: Optional[str] = None,
    ):
        """Keep a history row for an estimation attempt."""
        session = self._session_factory()
        try:
            session.add(DBValueEstimate(
                item_id=item_id,
                model=model,
                raw_response=raw_response,
                estimated_value=estimated_value,
                success=error_message is None,
                error_message=error_message,
            ))
            session.commit()
        finally:
            session.close()
