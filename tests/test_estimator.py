"""Tests for AI value estimation."""

import asyncio
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from app.errors import EstimationError
from app.estimate import ValueEstimator, parse_estimate
from app.models import ItemListing


def make_listing(**kwargs) -> ItemListing:
    """Create test listing with defaults."""
    defaults = {
        "id": "item-1",
        "title": "Yamaha F310 Acoustic Guitar",
        "category": "Music",
        "description": "Acoustic guitar with gig bag",
        "price": 7500,
    }
    defaults.update(kwargs)
    return ItemListing(**defaults)


class TestParseEstimate:
    """Tests for reading numbers out of model replies."""

    @pytest.mark.parametrize("text, expected", [
        ("4500", 4500.0),
        ("  4500\n", 4500.0),
        ("₹12,500", 12500.0),
        ("about 300.50 INR", 300.5),
        ("Rs. 800", 800.0),
        ("1.5.2", 1.5),
    ])
    def test_parses_numbers(self, text, expected):
        assert parse_estimate(text) == expected

    @pytest.mark.parametrize("text", ["", "unknown", "...", None])
    def test_rejects_replies_without_numbers(self, text):
        with pytest.raises(EstimationError, match="Invalid AI response"):
            parse_estimate(text)


class TestValueEstimator:
    """Tests for the estimation client."""

    def test_prompt_includes_listing_details(self):
        estimator = ValueEstimator(api_key="test-key", currency="INR")
        prompt = estimator.build_prompt(make_listing())
        assert "Yamaha F310 Acoustic Guitar" in prompt
        assert "Music" in prompt
        assert "7500 INR" in prompt
        assert "For Trade" in prompt

    def test_prompt_for_donation_without_details(self):
        estimator = ValueEstimator(api_key="test-key")
        prompt = estimator.build_prompt(
            make_listing(description=None, price=None, is_donation=True)
        )
        assert "No description provided" in prompt
        assert "Not specified" in prompt
        assert "Free/Donation" in prompt

    def test_estimate_parses_reply(self):
        estimator = ValueEstimator(api_key="test-key", model="test-model")
        with patch.object(ValueEstimator, "_call_api", return_value="6800") as call:
            result = asyncio.run(estimator.estimate(make_listing()))
        assert result.value == 6800.0
        assert result.raw_response == "6800"
        assert result.model == "test-model"
        call.assert_called_once()

    def test_estimate_unparseable_reply(self):
        estimator = ValueEstimator(api_key="test-key")
        with patch.object(ValueEstimator, "_call_api", return_value="I cannot say"):
            with pytest.raises(EstimationError, match="Invalid AI response"):
                asyncio.run(estimator.estimate(make_listing()))

    def test_estimate_api_failure(self):
        estimator = ValueEstimator(api_key="test-key")
        error = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )
        with patch.object(ValueEstimator, "_call_api", side_effect=error):
            with pytest.raises(EstimationError, match="AI estimation failed"):
                asyncio.run(estimator.estimate(make_listing()))

    def test_estimate_requires_api_key(self):
        estimator = ValueEstimator(api_key="")
        estimator.api_key = ""
        with pytest.raises(EstimationError, match="ANTHROPIC_API_KEY"):
            asyncio.run(estimator.estimate(make_listing()))

    def test_call_api_sends_system_prompt(self):
        estimator = ValueEstimator(api_key="test-key", model="test-model")
        client = MagicMock()
        client.messages.create.return_value.content = [MagicMock(text=" 950 ")]
        estimator._client = client

        assert estimator._call_api("prompt") == "950"
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["system"] == ValueEstimator.SYSTEM_PROMPT
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
