"""SQLAlchemy database models and setup."""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    Text,
    ForeignKey,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from app.config import settings
from .item import ItemListing

Base = declarative_base()


class DBItem(Base):
    """Stored marketplace item."""

    __tablename__ = "items"

    id = Column(String(36), primary_key=True)
    title = Column(String(500), nullable=False)
    category = Column(String(100))
    description = Column(Text)
    price = Column(Float)
    is_donation = Column(Boolean, default=False)
    estimated_value = Column(Float)
    owner_id = Column(String(36), index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    estimates = relationship("DBValueEstimate", back_populates="item")

    __table_args__ = (Index("idx_item_category", "category"),)

    def to_listing(self) -> ItemListing:
        return ItemListing(
            id=self.id,
            title=self.title,
            category=self.category,
            description=self.description,
            price=self.price,
            is_donation=bool(self.is_donation),
            estimated_value=self.estimated_value,
            owner_id=self.owner_id,
            created_at=self.created_at or datetime.utcnow(),
        )

    @classmethod
    def from_listing(cls, listing: ItemListing) -> "DBItem":
        return cls(**listing.model_dump())


class DBValueEstimate(Base):
    """History of value estimation attempts for an item."""

    __tablename__ = "value_estimates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(String(36), ForeignKey("items.id"), nullable=False)
    model = Column(String(100))
    raw_response = Column(Text)
    estimated_value = Column(Float)
    success = Column(Boolean, default=True)
    error_message = Column(Text)
    estimated_at = Column(DateTime, default=datetime.utcnow)

    item = relationship("DBItem", back_populates="estimates")

    __table_args__ = (Index("idx_estimate_item", "item_id"),)


# Database initialization
def init_db(db_url: Optional[str] = None) -> sessionmaker:
    """Initialize database and return session maker."""
    url = db_url or settings.database_url
    engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def get_session(db_url: Optional[str] = None) -> Session:
    """Get a new database session."""
    SessionLocal = init_db(db_url)
    return SessionLocal()
