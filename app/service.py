"""Trade operations shared by the API and the CLI."""

import logging

from app.connectors import ItemSource
from app.errors import EstimationError, ItemNotFoundError
from app.estimate import ValueEstimator
from app.models import ComparisonResult
from app.score import FairnessEvaluator

logger = logging.getLogger(__name__)

evaluator = FairnessEvaluator()


async def suggest_fair_swap(
    source: ItemSource,
    my_item_id: str,
    their_item_id: str,
) -> ComparisonResult:
    """Look up both items and rate the swap between them."""
    # A swap needs two distinct stored items
    if my_item_id == their_item_id:
        raise ItemNotFoundError([my_item_id, their_item_id])

    my_item, their_item = await source.require_items(my_item_id, their_item_id)
    result = evaluator.evaluate(my_item.snapshot(), their_item.snapshot())
    logger.info(
        f"Compared {my_item_id} with {their_item_id}: "
        f"{result.fairness_level.value} ({result.fairness_score})"
    )
    return result


async def estimate_item_value(
    source: ItemSource,
    estimator: ValueEstimator,
    item_id: str,
) -> float:
    """Estimate an item's value and store it back on the item."""
    listing = await source.get_item(item_id)
    if listing is None:
        raise ItemNotFoundError([item_id])

    try:
        estimate = await estimator.estimate(listing)
    except EstimationError as e:
        await source.record_estimate(item_id, estimator.model, None, None, error_message=str(e))
        raise

    await source.record_estimate(item_id, estimate.model, estimate.raw_response, estimate.value)

    # A failed write-back still returns the estimate to the caller
    if not await source.update_estimated_value(item_id, estimate.value):
        logger.error(f"Failed to store estimated value for item {item_id}")

    return estimate.value
