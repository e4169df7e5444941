"""Trade comparison result schema."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from .item import ItemSnapshot


class FairnessLevel(str, Enum):
    """Coarse fairness buckets."""

    VERY_FAIR = "Very Fair"
    FAIR = "Fair"
    SOMEWHAT_UNFAIR = "Somewhat Unfair"
    UNFAIR = "Unfair"
    UNKNOWN = "Unknown"


class ComparisonResult(BaseModel):
    """Outcome of comparing two items for trade fairness."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    my_item: ItemSnapshot = Field(alias="myItem")
    their_item: ItemSnapshot = Field(alias="theirItem")
    fairness_score: int = Field(alias="fairnessScore", ge=0, le=100)
    fairness_level: FairnessLevel = Field(alias="fairnessLevel")
    recommendation: str

    def to_response(self) -> dict:
        """Serialize with the camelCase keys used on the wire."""
        return self.model_dump(mode="json", by_alias=True)
