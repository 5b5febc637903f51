#!/usr/bin/env python3
"""Generate sample property listings.

Writes ``listings.json`` with listings for every flow, in the current
wizard layout, the legacy section layout and JSON-encoded details.
These files can be fed to ``audit_listings.py`` or used for manual
checks of the display pages.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from listing_flows.config import ListingFlowsConfig
from listing_flows.exceptions import ListingFlowsError
from listing_flows.generators import ListingGenerator
from listing_flows.logging import setup_logging
from listing_flows.models.enums import FlowType
from listing_flows.sinks import JsonFileSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    config = ListingFlowsConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate sample property listings")
    parser.add_argument(
        "--count",
        type=int,
        default=config.audit.num_records,
        help=f"Number of listings to generate (default: {config.audit.num_records})",
    )
    parser.add_argument(
        "--flow",
        action="append",
        choices=[flow.value for flow in FlowType],
        help="Restrict to a flow (repeatable; default: all flows)",
    )
    parser.add_argument(
        "--legacy-share",
        type=float,
        default=config.audit.legacy_share,
        help="Share of listings in the legacy section layout",
    )
    parser.add_argument(
        "--malformed-share",
        type=float,
        default=config.audit.malformed_share,
        help="Share of listings with unreadable details",
    )
    parser.add_argument("--seed", type=int, default=config.audit.seed if config.audit.seed is not None else 42)
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for listings.json",
    )
    parser.add_argument("--pretty", action="store_true", default=config.output.pretty_json)
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    try:
        generator = ListingGenerator(seed=args.seed)
        records = generator.generate_batch(
            args.count,
            flows=args.flow,
            legacy_share=args.legacy_share,
            malformed_share=args.malformed_share,
        )
        sink = JsonFileSink(args.output_dir, pretty=args.pretty)
        sink.write_batch("listings", records)
        sink.close()
    except ListingFlowsError as e:
        logger.error("Sample generation failed: %s", e)
        sys.exit(1)

    print(f"Saved {len(records)} listings to {sink.path_for('listings')}")


if __name__ == "__main__":
    main()
