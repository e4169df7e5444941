"""Fairness scoring for two-item trades."""

import logging
import math
from dataclasses import dataclass
from typing import Callable

from app.models import ComparisonResult, FairnessLevel, ItemSnapshot

logger = logging.getLogger(__name__)

UNKNOWN_SCORE = 50
UNKNOWN_RECOMMENDATION = "Unable to determine fairness. Please estimate values first."


@dataclass(frozen=True)
class FairnessTier:
    """One band of percentage difference and how it is scored."""

    max_percent_diff: float
    level: FairnessLevel
    recommendation: str
    score: Callable[[float], float]


def percent_difference(value_a: float, value_b: float) -> float:
    """Difference between two values as a percentage of their mean."""
    difference = abs(value_a - value_b)
    # Halve before adding so values near the float limit do not overflow
    average = value_a / 2 + value_b / 2
    return (difference / average) * 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


class FairnessEvaluator:
    """Compare two items and rate how balanced a swap between them is."""

    # Checked in order; the first tier whose bound covers the difference wins.
    # Scores are not continuous across tier boundaries.
    TIERS = (
        FairnessTier(
            max_percent_diff=15,
            level=FairnessLevel.VERY_FAIR,
            recommendation="This is an excellent trade! The values are very similar.",
            score=lambda pct: 100 - pct,
        ),
        FairnessTier(
            max_percent_diff=30,
            level=FairnessLevel.FAIR,
            recommendation="This is a reasonable trade. Values are close enough.",
            score=lambda pct: 85 - pct,
        ),
        FairnessTier(
            max_percent_diff=50,
            level=FairnessLevel.SOMEWHAT_UNFAIR,
            recommendation="Consider negotiating or adding items to balance the trade.",
            score=lambda pct: 50 - (pct - 30),
        ),
        FairnessTier(
            max_percent_diff=math.inf,
            level=FairnessLevel.UNFAIR,
            recommendation="This trade is significantly imbalanced. Proceed with caution.",
            score=lambda pct: max(0, 20 - (pct - 50) / 2),
        ),
    )

    def tier_for(self, percent_diff: float) -> FairnessTier:
        """Return the tier a percentage difference falls into."""
        for tier in self.TIERS:
            if percent_diff <= tier.max_percent_diff:
                return tier
        return self.TIERS[-1]

    def evaluate(self, my_item: ItemSnapshot, their_item: ItemSnapshot) -> ComparisonResult:
        """Score a proposed swap of my_item for their_item."""
        my_value = my_item.resolved_value
        their_value = their_item.resolved_value

        if my_value == 0 or their_value == 0:
            score = UNKNOWN_SCORE
            level = FairnessLevel.UNKNOWN
            recommendation = UNKNOWN_RECOMMENDATION
        else:
            pct = percent_difference(my_value, their_value)
            tier = self.tier_for(pct)
            score = self._clamp(round_half_up(tier.score(pct)))
            level = tier.level
            recommendation = tier.recommendation
            logger.debug(
                f"{my_item.title!r} vs {their_item.title!r}: "
                f"{pct:.2f}% difference -> {level.value} ({score})"
            )

        return ComparisonResult(
            my_item=ItemSnapshot(title=my_item.title, estimated_value=my_value),
            their_item=ItemSnapshot(title=their_item.title, estimated_value=their_value),
            fairness_score=score,
            fairness_level=level,
            recommendation=recommendation,
        )

    @staticmethod
    def _clamp(score: int) -> int:
        return max(0, min(100, score))
