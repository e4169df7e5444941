"""CLI entry point for the Trade Fairness service."""

import argparse
import asyncio
import json
import logging
import sys
import uuid

from pydantic import ValidationError

from app.config import settings
from app.connectors import DatabaseItemSource, ItemSource, MockItemSource, RestItemSource
from app.errors import TradeFairnessError
from app.estimate import ValueEstimator
from app.models import ComparisonResult, FairnessLevel, ItemListing, ItemSnapshot
from app.score import percent_difference
from app.service import estimate_item_value, evaluator, suggest_fair_swap

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_source(use_mock: bool = False) -> ItemSource:
    """Pick the item source for this run."""
    if use_mock:
        logger.info("Using mock item source")
        return MockItemSource()
    if settings.items_api_url:
        logger.info(f"Using remote item table at {settings.items_api_url}")
        return RestItemSource()
    return DatabaseItemSource()


def print_comparison(result: ComparisonResult):
    """Print a comparison result to console."""
    mine = result.my_item
    theirs = result.their_item

    print("\n" + "=" * 60)
    print("TRADE FAIRNESS ANALYSIS")
    print("=" * 60)
    print(f"\nYour item:  {mine.title} ({mine.resolved_value:g} {settings.estimate_currency})")
    print(f"Their item: {theirs.title} ({theirs.resolved_value:g} {settings.estimate_currency})")

    if result.fairness_level != FairnessLevel.UNKNOWN:
        pct = percent_difference(mine.resolved_value, theirs.resolved_value)
        print(f"Value difference: {pct:.1f}%")

    print("\n" + "-" * 60)
    print(f"Fairness: {result.fairness_level.value} ({result.fairness_score}/100)")
    print(result.recommendation)
    print("=" * 60)


def emit(result: ComparisonResult, as_json: bool):
    if as_json:
        print(json.dumps(result.to_response(), indent=2))
    else:
        print_comparison(result)


def cmd_compare(args) -> int:
    """Compare two items given on the command line."""
    try:
        my_item = ItemSnapshot(title=args.my_title, estimated_value=args.my_value)
        their_item = ItemSnapshot(title=args.their_title, estimated_value=args.their_value)
    except ValidationError as e:
        logger.error(f"Invalid item: {e}")
        return 1

    emit(evaluator.evaluate(my_item, their_item), args.json)
    return 0


def cmd_compare_items(args) -> int:
    """Compare two stored items by id."""
    source = build_source(args.mock)
    result = asyncio.run(suggest_fair_swap(source, args.my_item_id, args.their_item_id))
    emit(result, args.json)
    return 0


def cmd_estimate(args) -> int:
    """Estimate the value of a stored item."""
    source = build_source(args.mock)
    value = asyncio.run(estimate_item_value(source, ValueEstimator(), args.item_id))
    print(f"{args.item_id}: {value:g} {settings.estimate_currency}")
    return 0


def cmd_add_item(args) -> int:
    """Store a new item in the local database."""
    try:
        listing = ItemListing(
            id=args.id or str(uuid.uuid4()),
            title=args.title,
            category=args.category,
            description=args.description,
            price=args.price,
            is_donation=args.donation,
            estimated_value=args.value,
        )
    except ValidationError as e:
        logger.error(f"Invalid item: {e}")
        return 1

    asyncio.run(DatabaseItemSource().add_item(listing))
    print(listing.id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trade Fairness - Estimate item values and rate proposed swaps"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Compare two items by title and value")
    compare.add_argument("--my-title", required=True, help="Title of your item")
    compare.add_argument("--my-value", type=float, default=None, help="Estimated value of your item")
    compare.add_argument("--their-title", required=True, help="Title of their item")
    compare.add_argument("--their-value", type=float, default=None, help="Estimated value of their item")
    compare.add_argument("--json", action="store_true", help="Print the result as JSON")
    compare.set_defaults(func=cmd_compare)

    compare_items = subparsers.add_parser("compare-items", help="Compare two stored items by id")
    compare_items.add_argument("my_item_id", help="Id of your item")
    compare_items.add_argument("their_item_id", help="Id of their item")
    compare_items.add_argument("--mock", action="store_true", help="Use mock item source for testing")
    compare_items.add_argument("--json", action="store_true", help="Print the result as JSON")
    compare_items.set_defaults(func=cmd_compare_items)

    estimate = subparsers.add_parser("estimate", help="Estimate a stored item's value with AI")
    estimate.add_argument("item_id", help="Id of the item to estimate")
    estimate.add_argument("--mock", action="store_true", help="Use mock item source for testing")
    estimate.set_defaults(func=cmd_estimate)

    add_item = subparsers.add_parser("add-item", help="Add an item to the local database")
    add_item.add_argument("--id", default=None, help="Item id (default: random UUID)")
    add_item.add_argument("--title", required=True)
    add_item.add_argument("--category", default=None)
    add_item.add_argument("--description", default=None)
    add_item.add_argument("--price", type=float, default=None)
    add_item.add_argument("--value", type=float, default=None, help="Known estimated value")
    add_item.add_argument("--donation", action="store_true", help="Item is offered for free")
    add_item.set_defaults(func=cmd_add_item)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        sys.exit(args.func(args))
    except TradeFairnessError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
