#!/usr/bin/env python3
"""Audit property listings.

Detects the flow of each listing, validates every wizard step, renders
the title and price, and reports which listings are incomplete. Reads
listings from a JSON file (a list of rows as exported by the backend or
by ``generate_sample_listings.py``) or generates them.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from listing_flows.config import ListingFlowsConfig
from listing_flows.exceptions import ListingFlowsError, RecordParseError
from listing_flows.logging import setup_logging
from listing_flows.models.base import PropertyRecord
from listing_flows.scenarios import ListingAuditScenario
from listing_flows.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[PropertyRecord]:
    """Load listing rows from a JSON file.

    Raises
    ------
    RecordParseError
        If the file is not a JSON list of objects.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RecordParseError(f"Cannot read listings from {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise RecordParseError(f"{path} must contain a JSON list of listing objects")
    return [PropertyRecord.from_dict(row) for row in data]


def print_summary(summary: dict) -> None:
    """Print audit summary."""
    print("\n" + "=" * 60)
    print("LISTING AUDIT SUMMARY")
    print("=" * 60)
    print(f"  Listings:   {summary['total']}")
    print(f"  Valid:      {summary['valid']}")
    print(f"  Complete:   {summary['complete']}")
    print(f"  Unreadable: {summary['unreadable']}")
    print("\n  By flow:")
    for flow, count in sorted(summary["by_flow"].items()):
        print(f"    {flow:<24} {count:>6}")
    if summary["invalid_steps"]:
        print("\n  Invalid steps:")
        for step_id, count in sorted(summary["invalid_steps"].items(), key=lambda item: -item[1]):
            print(f"    {step_id:<28} {count:>6}")
    print("=" * 60)


def main() -> None:
    """Main entry point."""
    config = ListingFlowsConfig.from_env()

    parser = argparse.ArgumentParser(description="Audit property listings")
    parser.add_argument("--input", type=Path, help="JSON file of listing rows (default: generate listings)")
    parser.add_argument(
        "--count",
        type=int,
        default=config.audit.num_records,
        help=f"Listings to generate without --input (default: {config.audit.num_records})",
    )
    parser.add_argument("--seed", type=int, default=config.audit.seed)
    parser.add_argument(
        "--output",
        choices=["console", "json"],
        default="console",
        help="Where to write the audit report (default: console)",
    )
    parser.add_argument("--output-dir", type=Path, default=config.output.json_output_dir)
    parser.add_argument("--max-records", type=int, default=None, help="Rows to print per batch on the console")
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    try:
        records = load_records(args.input) if args.input else None
        config.audit.num_records = args.count
        config.audit.seed = args.seed
        scenario = ListingAuditScenario.from_config(config.audit, config.formatting, records=records)
        scenario.generate()

        if args.output == "json":
            sink = JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
        else:
            sink = ConsoleSink(max_records=args.max_records)
        scenario.export([sink])
        sink.close()
    except ListingFlowsError as e:
        logger.error("Audit failed: %s", e)
        sys.exit(1)

    print_summary(scenario.get_summary())


if __name__ == "__main__":
    main()
