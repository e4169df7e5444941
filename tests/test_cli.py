"""Tests for the command line interface."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest

from app.__main__ import main
from app.config import settings
from app.connectors import DatabaseItemSource
from app.errors import EstimationError
from app.estimate import EstimateResult, ValueEstimator


def run_cli(argv) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestCompareCommand:
    """Tests for `compare`."""

    def test_prints_analysis(self, capsys):
        code = run_cli([
            "compare",
            "--my-title", "Bike", "--my-value", "100",
            "--their-title", "Guitar", "--their-value", "87",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Very Fair (86/100)" in out
        assert "Value difference: 13.9%" in out

    def test_json_output(self, capsys):
        code = run_cli([
            "compare",
            "--my-title", "Bike", "--my-value", "100",
            "--their-title", "Guitar", "--their-value", "50",
            "--json",
        ])
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["fairnessScore"] == 12
        assert data["fairnessLevel"] == "Unfair"

    def test_missing_value_is_unknown(self, capsys):
        code = run_cli(["compare", "--my-title", "Bike", "--their-title", "Guitar", "--their-value", "87"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Unknown (50/100)" in out
        assert "Value difference" not in out

    def test_negative_value_rejected(self):
        code = run_cli(["compare", "--my-title", "Bike", "--my-value=-5", "--their-title", "Guitar"])
        assert code == 1


class TestCompareItemsCommand:
    """Tests for `compare-items`."""

    def test_mock_items(self, capsys):
        code = run_cli(["compare-items", "item-bike", "item-guitar", "--mock", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["myItem"]["title"] == "Hero Sprint Road Bike"
        assert data["fairnessScore"] == 89

    def test_unknown_item(self):
        assert run_cli(["compare-items", "item-bike", "missing", "--mock"]) == 1


class TestEstimateCommand:
    """Tests for `estimate`."""

    def test_prints_estimate(self, capsys):
        reply = EstimateResult(value=1500.0, raw_response="1500", model="test-model")
        with patch.object(ValueEstimator, "estimate", new=AsyncMock(return_value=reply)) as estimate:
            code = run_cli(["estimate", "item-lamp", "--mock"])

        assert code == 0
        assert "item-lamp: 1500" in capsys.readouterr().out
        assert estimate.call_args.args[0].id == "item-lamp"

    def test_estimation_failure(self, capsys):
        failure = AsyncMock(side_effect=EstimationError("Invalid AI response"))
        with patch.object(ValueEstimator, "estimate", new=failure):
            code = run_cli(["estimate", "item-lamp", "--mock"])

        assert code == 1
        assert capsys.readouterr().out == ""

    def test_unknown_item(self):
        with patch.object(ValueEstimator, "estimate", new=AsyncMock()) as estimate:
            assert run_cli(["estimate", "missing", "--mock"]) == 1
        estimate.assert_not_called()


class TestAddItemCommand:
    """Tests for `add-item`."""

    @pytest.fixture
    def db_path(self, tmp_path, monkeypatch):
        path = tmp_path / "items.db"
        monkeypatch.setattr(settings, "db_path", path)
        return path

    def test_stores_item(self, capsys, db_path):
        code = run_cli([
            "add-item", "--id", "tent-1", "--title", "Camping Tent",
            "--category", "Outdoors", "--price", "3000", "--value", "2500",
        ])
        assert code == 0
        assert capsys.readouterr().out.strip() == "tent-1"

        item = asyncio.run(DatabaseItemSource(f"sqlite:///{db_path}").get_item("tent-1"))
        assert item.title == "Camping Tent"
        assert item.estimated_value == 2500

    def test_generates_id(self, capsys, db_path):
        assert run_cli(["add-item", "--title", "Desk Lamp", "--donation"]) == 0
        item_id = capsys.readouterr().out.strip()

        item = asyncio.run(DatabaseItemSource(f"sqlite:///{db_path}").get_item(item_id))
        assert item.is_donation is True

    def test_existing_id(self, capsys, db_path):
        assert run_cli(["add-item", "--id", "dup", "--title", "First"]) == 0
        capsys.readouterr()

        assert run_cli(["add-item", "--id", "dup", "--title", "Second"]) == 1
        assert capsys.readouterr().out == ""

        item = asyncio.run(DatabaseItemSource(f"sqlite:///{db_path}").get_item("dup"))
        assert item.title == "First"

    def test_negative_price_rejected(self, db_path):
        assert run_cli(["add-item", "--title", "Lamp", "--price=-1"]) == 1
