#!/usr/bin/env python3
"""
CLI for valuations and listing searches.

Usage:
    python -m reporting.cli estimate <attributes_json>
    python -m reporting.cli search [--query TEXT] [--city CITY] [--min-area N] [--max-area N]
    python -m reporting.cli undervalued

Examples:
    # Value a property described in a JSON file
    python -m reporting.cli estimate property.json

    # Sarajevo listings between 40 and 80 m2, as JSON
    python -m reporting.cli search --city Sarajevo --min-area 40 --max-area 80 --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from core.errors import ValuationError
from core.listings import SearchCriteria, search_listings, undervalued_listings
from core.valuation import TargetPropertyAttributes
from utils.config import Config

from .text_report import render_listings, render_valuation


def _load_store(config: Config):
    """Listing store for a command, or None after reporting why it failed."""
    try:
        return config.load_listings()
    except (OSError, ValueError) as e:
        print(f"Error: Could not load listings: {e}", file=sys.stderr)
        return None


def cmd_estimate(args, config: Config):
    """Value a property described in a JSON file."""
    input_path = Path(args.attributes_file)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Could not read {input_path}: {e}", file=sys.stderr)
        return 1

    try:
        target = TargetPropertyAttributes.from_dict(data)
    except ValuationError as e:
        print(f"Error: Invalid property data: {e}", file=sys.stderr)
        return 1

    store = _load_store(config)
    if store is None:
        return 1

    try:
        engine = config.build_engine()
    except (OSError, ValueError) as e:
        print(f"Error: Could not load multiplier table: {e}", file=sys.stderr)
        return 1

    try:
        result = engine.estimate(target, store)
    except ValuationError as e:
        print(f"Error: Invalid property data: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_valuation(target, result))
    return 0


def cmd_search(args, config: Config):
    """Search listings by text, city and area range."""
    criteria = SearchCriteria(
        text_query=args.query,
        city=args.city,
        min_area=args.min_area,
        max_area=args.max_area,
    )
    store = _load_store(config)
    if store is None:
        return 1
    results = search_listings(store, criteria)

    if args.json:
        print(json.dumps([l.to_dict() for l in results], indent=2, ensure_ascii=False))
    else:
        print(render_listings(results, title="SEARCH RESULTS"))
    return 0


def cmd_undervalued(args, config: Config):
    """List undervalued deals."""
    store = _load_store(config)
    if store is None:
        return 1
    results = undervalued_listings(store)

    if args.json:
        print(json.dumps([l.to_dict() for l in results], indent=2, ensure_ascii=False))
    else:
        print(render_listings(results, title="UNDERVALUED OPPORTUNITIES"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="RealEstate IQ - Property Valuation & Listing Search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli estimate property.json
    python -m reporting.cli search --city Sarajevo --query ilidža
    python -m reporting.cli undervalued --json
        """,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of a text report",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Estimate command
    estimate_parser = subparsers.add_parser(
        "estimate",
        help="Estimate the fair price of a property from a JSON attributes file",
    )
    estimate_parser.add_argument(
        "attributes_file",
        help="Path to JSON file with the property attributes",
    )
    estimate_parser.set_defaults(func=cmd_estimate)

    # Search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search listings",
    )
    search_parser.add_argument("--query", default="", help="Title text to match")
    search_parser.add_argument("--city", default=None, help="Exact city")
    search_parser.add_argument("--min-area", type=float, default=None, help="Minimum area in m2")
    search_parser.add_argument("--max-area", type=float, default=None, help="Maximum area in m2")
    search_parser.set_defaults(func=cmd_search)

    # Undervalued command
    undervalued_parser = subparsers.add_parser(
        "undervalued",
        help="List listings below the undervalued price-per-area threshold",
    )
    undervalued_parser.set_defaults(func=cmd_undervalued)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    config = Config.load()
    logging.basicConfig(level=config.log_level)
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
