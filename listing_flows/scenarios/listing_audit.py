"""Listing audit scenario: classify, validate and render a batch of listings."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any

from listing_flows.config import AuditConfig, FormatConfig
from listing_flows.exceptions import RecordParseError
from listing_flows.extraction import PropertyExtractor
from listing_flows.flows.detection import FlowClassifier, get_flow_display_name, get_listing_type
from listing_flows.flows.steps import check_listing_completeness
from listing_flows.formatting.render import FieldFormatter
from listing_flows.generators import ListingGenerator
from listing_flows.lookup import get_property_details, get_steps, parse_property_details, record_as_mapping
from listing_flows.models.base import PropertyRecord
from listing_flows.validation.validator import FieldValidator

logger = logging.getLogger(__name__)


def listing_form_data(details: Mapping[str, Any]) -> dict[str, Any]:
    """Form data for validating a stored listing.

    Listings with a ``steps`` object validate as they are. Legacy
    listings keep their answers in section objects, which are flattened
    into top-level fields.
    """
    if get_steps(details):
        return dict(details)
    form_data: dict[str, Any] = {}
    for value in details.values():
        if isinstance(value, Mapping):
            form_data.update(value)
    form_data.update({k: v for k, v in details.items() if not isinstance(v, Mapping)})
    return form_data


class ListingAuditScenario:
    """Audit stored listings the way the owner dashboard reviews them.

    For each listing this reports:
    - The detected flow and the signal that decided it
    - Display name, title, headline price and city
    - Per-step validation verdicts, errors and completion
    - Wizard completeness and images
    """

    def __init__(
        self,
        num_records: int = 50,
        flows: list[str] | None = None,
        legacy_share: float = 0.2,
        malformed_share: float = 0.05,
        seed: int | None = None,
        records: list[Any] | None = None,
        format_config: FormatConfig | None = None,
    ) -> None:
        """Initialize listing audit scenario.

        Parameters
        ----------
        num_records : int
            Number of listings to generate when ``records`` is not given.
        flows : list[str] | None
            Flows to generate (all when omitted).
        legacy_share : float
            Share of generated listings in the legacy layout.
        malformed_share : float
            Share of generated listings with unreadable details.
        seed : int | None
            Random seed for reproducibility.
        records : list[Any] | None
            Listings to audit instead of generated ones (records or rows).
        format_config : FormatConfig | None
            Display formatting for prices.
        """
        self.num_records = num_records
        self.flows = flows
        self.legacy_share = legacy_share
        self.malformed_share = malformed_share
        self.seed = seed
        self.records = records

        self.formatter = FieldFormatter(format_config)
        self.rows: list[dict[str, Any]] = []
        self._classifier = FlowClassifier()
        self._validator = FieldValidator()
        self._generator = ListingGenerator(seed=seed)

    @classmethod
    def from_config(
        cls,
        config: AuditConfig,
        format_config: FormatConfig | None = None,
        records: list[Any] | None = None,
    ) -> ListingAuditScenario:
        return cls(
            num_records=config.num_records,
            flows=config.flows,
            legacy_share=config.legacy_share,
            malformed_share=config.malformed_share,
            seed=config.seed,
            records=records,
            format_config=format_config,
        )

    def generate(self) -> list[dict[str, Any]]:
        """Audit every listing.

        Returns
        -------
        list[dict[str, Any]]
            One audit row per listing.
        """
        if self.records is None:
            self.records = self._generator.generate_batch(
                self.num_records,
                flows=self.flows,
                legacy_share=self.legacy_share,
                malformed_share=self.malformed_share,
            )

        logger.info("Starting listing audit: %d listings", len(self.records))
        self.rows = [self.audit_record(record) for record in self.records]

        summary = self.get_summary()
        logger.info(
            "Audited %d listings: %d valid, %d complete, %d unreadable",
            summary["total"],
            summary["valid"],
            summary["complete"],
            summary["unreadable"],
        )
        return self.rows

    def audit_record(self, record: Any) -> dict[str, Any]:
        """Audit one listing."""
        row = record_as_mapping(record)
        details_error = None
        raw = row.get("property_details", row.get("propertyDetails"))
        try:
            parse_property_details(raw, strict=True)
        except RecordParseError as exc:
            details_error = str(exc)
            logger.warning("Listing %s has unreadable details", row.get("id"), extra={"listing_id": row.get("id")})

        flow, signal = self._classifier.detect_with_signal(row)
        extractor = PropertyExtractor(row, flow=flow, formatter=self.formatter)
        form_data = listing_form_data(get_property_details(row))
        validation = self._validator.validate_all_steps(flow, form_data)
        completeness = check_listing_completeness(row)

        return {
            "id": row.get("id"),
            "flow_type": flow.value,
            "flow_signal": signal,
            "display_name": get_flow_display_name(flow),
            "listing_type": get_listing_type(flow).value,
            "title": extractor.title(),
            "price": self.formatter.currency(extractor.price()),
            "city": self.formatter.render(extractor.location()["city"], "city"),
            "details_error": details_error,
            "steps": {
                step_id: {
                    "is_valid": result.is_valid,
                    "errors": result.errors,
                    "completion": self._validator.step_completion(step_id, form_data),
                }
                for step_id, result in validation.steps.items()
            },
            "invalid_steps": validation.invalid_steps,
            "is_valid": validation.all_valid,
            "missing_steps": completeness.missing_steps,
            "has_images": completeness.has_images,
            "is_complete": completeness.is_complete,
        }

    def export(self, sinks: list[Any]) -> None:
        """Export audit rows and the summary to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances (ConsoleSink, JsonFileSink).
        """
        if not self.rows:
            self.generate()
        summary = self.get_summary()
        for sink in sinks:
            sink.write_batch("listing_audit", self.rows)
            sink.write_batch("listing_audit_summary", [summary])

        logger.info("Exported listing audit to %d sinks", len(sinks))

    def export_records(self, sinks: list[Any]) -> None:
        """Export the audited listings themselves."""
        records = [
            record if isinstance(record, PropertyRecord) else PropertyRecord.from_dict(record_as_mapping(record))
            for record in self.records or []
        ]
        for sink in sinks:
            sink.write_batch("listings", records)

    def get_summary(self) -> dict[str, Any]:
        """Counts per flow, per detection signal and per invalid step."""
        invalid_steps: Counter[str] = Counter()
        for row in self.rows:
            invalid_steps.update(row["invalid_steps"])

        return {
            "total": len(self.rows),
            "by_flow": dict(Counter(row["flow_type"] for row in self.rows)),
            "by_signal": dict(Counter(row["flow_signal"] for row in self.rows)),
            "invalid_steps": dict(invalid_steps),
            "valid": sum(1 for row in self.rows if row["is_valid"]),
            "complete": sum(1 for row in self.rows if row["is_complete"]),
            "unreadable": sum(1 for row in self.rows if row["details_error"]),
        }
