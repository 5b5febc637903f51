"""Listing scenarios."""

from listing_flows.scenarios.listing_audit import ListingAuditScenario, listing_form_data

__all__ = ["ListingAuditScenario", "listing_form_data"]
