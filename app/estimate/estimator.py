"""AI value estimation using the Claude API."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Optional

import anthropic

from app.config import settings
from app.errors import EstimationError
from app.models import ItemListing

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


@dataclass
class EstimateResult:
    """Outcome of a successful estimation call."""

    value: float
    raw_response: str
    model: str


def parse_estimate(text: str) -> float:
    """
    Pull a numeric value out of a model reply.

    Everything except digits and dots is dropped first, so thousands separators
    and currency symbols vanish ("₹12,500" -> 12500.0). Leading dots left over
    from abbreviations like "Rs." are ignored.
    """
    cleaned = re.sub(r"[^0-9.]", "", text or "").lstrip(".")
    match = _NUMBER.match(cleaned)
    if not match:
        raise EstimationError("Invalid AI response")
    return float(match.group())


class ValueEstimator:
    """Estimate the market value of a listing with Claude."""

    SYSTEM_PROMPT = "You are a precise item valuation assistant. Respond only with numeric values."

    ESTIMATION_PROMPT = """You are a fair trade value estimator. Analyze this item and provide an estimated market value in {currency}.

Item Details:
- Title: {title}
- Category: {category}
- Description: {description}
- Listed Price: {price}
- Condition: {condition}

Consider:
1. Current market prices for similar items
2. Category-specific depreciation
3. Condition indicators from description
4. Whether it's listed as donation (which might indicate lower value)

Respond with ONLY a number (the estimated value in {currency}). No currency symbols, no text, just the number."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.llm_model
        self.currency = currency or settings.estimate_currency
        self._client = None

    @property
    def client(self) -> anthropic.Anthropic:
        """Lazy-load Anthropic client."""
        if self._client is None:
            if not self.api_key:
                raise EstimationError("ANTHROPIC_API_KEY not configured")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def build_prompt(self, listing: ItemListing) -> str:
        """Render the valuation prompt for a listing."""
        price = f"{listing.price:g} {self.currency}" if listing.price else "Not specified"
        return self.ESTIMATION_PROMPT.format(
            currency=self.currency,
            title=listing.title,
            category=listing.category or "Uncategorized",
            description=listing.description or "No description provided",
            price=price,
            condition="Free/Donation" if listing.is_donation else "For Trade",
        )

    async def estimate(self, listing: ItemListing) -> EstimateResult:
        """Ask the model for a value and parse its reply."""
        if not self.api_key:
            raise EstimationError("ANTHROPIC_API_KEY not configured")

        prompt = self.build_prompt(listing)

        try:
            # Sync SDK call kept off the event loop
            text = await asyncio.to_thread(self._call_api, prompt)
        except anthropic.APIError as e:
            logger.error(f"AI API error while estimating {listing.id}: {e}")
            raise EstimationError("AI estimation failed") from e

        try:
            value = parse_estimate(text)
        except EstimationError:
            logger.error(f"Failed to parse AI response for {listing.id}: {text!r}")
            raise

        logger.info(f"Estimated {listing.title!r} at {value:g} {self.currency}")
        return EstimateResult(value=value, raw_response=text, model=self.model)

    def _call_api(self, prompt: str) -> str:
        """Call Claude API synchronously and return the reply text."""
        response = self.client.messages.create(
            model=self.model,
            max_tokens=settings.llm_max_tokens,
            system=self.SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": prompt}
            ],
        )
        return response.content[0].text.strip()
