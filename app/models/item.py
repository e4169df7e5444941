"""Item models: marketplace listings and the snapshots compared for fairness."""

import math
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemSnapshot(BaseModel):
    """Read-only view of an item as seen by the fairness evaluator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(description="Item title")
    estimated_value: Optional[float] = Field(
        default=None,
        alias="estimatedValue",
        ge=0,
        description="Estimated monetary value, absent if never estimated",
    )

    @field_validator("estimated_value", mode="before")
    @classmethod
    def reject_non_numeric(cls, value):
        """Fail fast on strings and booleans instead of coercing them."""
        if isinstance(value, (str, bool)):
            raise ValueError("estimated value must be a number")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("estimated value must be finite")
        return value

    @property
    def resolved_value(self) -> float:
        """Estimated value with absent treated as zero."""
        return self.estimated_value or 0.0


class ItemListing(BaseModel):
    """A marketplace item as stored by an item source."""

    id: str = Field(description="Item identifier")
    title: str
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, description="Listed price, if any")
    is_donation: bool = False
    estimated_value: Optional[float] = Field(default=None, ge=0)
    owner_id: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def snapshot(self) -> ItemSnapshot:
        """Build the snapshot handed to the fairness evaluator."""
        return ItemSnapshot(title=self.title, estimated_value=self.estimated_value)
