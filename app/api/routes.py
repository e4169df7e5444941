"""API routes for trade fairness."""

import logging
import uuid
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from app.config import settings
from app.connectors import DatabaseItemSource, ItemSource, RestItemSource
from app.errors import DuplicateItemError, EstimationError, ItemNotFoundError
from app.estimate import ValueEstimator
from app.models import ComparisonResult, ItemListing, ItemSnapshot
from app.service import estimate_item_value, evaluator, suggest_fair_swap

logger = logging.getLogger(__name__)

router = APIRouter()


class SwapRequest(BaseModel):
    """Request body for comparing two stored items."""
    model_config = ConfigDict(populate_by_name=True)

    my_item_id: str = Field(alias="myItemId")
    their_item_id: str = Field(alias="theirItemId")


class CompareRequest(BaseModel):
    """Request body for comparing two pre-resolved items."""
    model_config = ConfigDict(populate_by_name=True)

    my_item: ItemSnapshot = Field(alias="myItem")
    their_item: ItemSnapshot = Field(alias="theirItem")


class EstimateRequest(BaseModel):
    """Request body for estimating an item's value."""
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId")


class EstimateResponse(BaseModel):
    """Response for a value estimate."""
    model_config = ConfigDict(populate_by_name=True)

    estimated_value: float = Field(alias="estimatedValue")


class ItemCreateRequest(BaseModel):
    """Request body for listing a new item."""
    title: str = Field(min_length=1)
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_donation: bool = False
    estimated_value: Optional[float] = Field(default=None, ge=0)
    owner_id: Optional[str] = None


@lru_cache
def get_item_source() -> ItemSource:
    """Item source for the request: the remote table when configured, else the local database."""
    if settings.items_api_url:
        return RestItemSource()
    return DatabaseItemSource()


def get_estimator() -> ValueEstimator:
    return ValueEstimator()


@router.post("/suggest-fair-swaps", response_model=ComparisonResult)
async def suggest_fair_swaps(
    request: SwapRequest,
    source: ItemSource = Depends(get_item_source),
):
    """Compare two stored items for trade fairness."""
    try:
        return await suggest_fair_swap(source, request.my_item_id, request.their_item_id)
    except ItemNotFoundError as e:
        logger.info(str(e))
        raise HTTPException(status_code=404, detail="Items not found")


@router.post("/compare", response_model=ComparisonResult)
async def compare_items(request: CompareRequest):
    """Compare two items supplied directly in the request."""
    return evaluator.evaluate(request.my_item, request.their_item)


@router.post("/estimate-value", response_model=EstimateResponse)
async def estimate_value(
    request: EstimateRequest,
    source: ItemSource = Depends(get_item_source),
    estimator: ValueEstimator = Depends(get_estimator),
):
    """Estimate an item's market value and store it on the item."""
    try:
        value = await estimate_item_value(source, estimator, request.item_id)
    except ItemNotFoundError:
        raise HTTPException(status_code=404, detail="Item not found")
    except EstimationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return EstimateResponse(estimated_value=value)


@router.post("/items", response_model=ItemListing, status_code=201)
async def create_item(
    request: ItemCreateRequest,
    source: ItemSource = Depends(get_item_source),
):
    """List a new item."""
    listing = ItemListing(id=str(uuid.uuid4()), **request.model_dump())
    try:
        return await source.add_item(listing)
    except DuplicateItemError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NotImplementedError as e:
        raise HTTPException(status_code=405, detail=str(e))


@router.get("/items/{item_id}", response_model=ItemListing)
async def get_item(item_id: str, source: ItemSource = Depends(get_item_source)):
    """Fetch a single item."""
    listing = await source.get_item(item_id)
    if listing is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return listing
