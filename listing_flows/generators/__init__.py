"""Sample listing generators."""

from listing_flows.generators.base import BaseGenerator
from listing_flows.generators.listing import ListingGenerator

__all__ = ["BaseGenerator", "ListingGenerator"]
