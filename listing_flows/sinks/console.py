"""Console sink for debugging and development."""

import json
import sys
from typing import Any, TextIO

from listing_flows.sinks.serialization import to_dict


class ConsoleSink:
    """Output records to the console as JSON."""

    def __init__(
        self,
        pretty: bool = True,
        max_records: int | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        stream : TextIO | None
            Output stream (stdout by default).
        """
        self.pretty = pretty
        self.max_records = max_records
        self.stream = stream
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to the console."""
        out = self.stream or sys.stdout
        print(f"\n{'=' * 60}", file=out)
        print(f"Entity: {entity_type} ({len(records)} records)", file=out)
        print("=" * 60, file=out)

        display_records = records[: self.max_records] if self.max_records else records
        indent = 2 if self.pretty else None
        for record in display_records:
            print(json.dumps(to_dict(record), indent=indent, ensure_ascii=False, default=str), file=out)

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records", file=out)

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print summary and close."""
        out = self.stream or sys.stdout
        print(f"\n{'=' * 60}", file=out)
        print("Console Sink Summary", file=out)
        print("=" * 60, file=out)
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records", file=out)
