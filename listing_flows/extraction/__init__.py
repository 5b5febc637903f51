"""Extraction of display sections from property records."""

from listing_flows.extraction.sections import PropertyExtractor, generate_title, normalize_amenities

__all__ = ["PropertyExtractor", "generate_title", "normalize_amenities"]
