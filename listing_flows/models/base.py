"""Base models shared across the listing core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from listing_flows.models.enums import FlowType


@dataclass(frozen=True)
class PropertyRecord:
    """A stored property listing.

    ``property_details`` is kept exactly as stored: usually a mapping,
    sometimes a JSON-encoded string, occasionally ``None``. Use
    :func:`listing_flows.lookup.parse_property_details` to
    read it.
    """

    id: str
    owner_id: str = ""
    price: float | None = None
    property_details: Any = None
    flow_type: str | None = None
    title: str | None = None
    images: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PropertyRecord:
        """Build a record from a raw backend row (snake or camel case keys)."""
        return cls(
            id=str(data.get("id", "")),
            owner_id=str(data.get("owner_id") or data.get("ownerId") or ""),
            price=data.get("price"),
            property_details=data.get("property_details", data.get("propertyDetails")),
            flow_type=data.get("flow_type") or data.get("flowType"),
            title=data.get("title"),
            images=list(data.get("images") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Raw row shape, as the backend stores it."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "price": self.price,
            "property_details": self.property_details,
            "flow_type": self.flow_type,
            "title": self.title,
            "images": list(self.images),
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one step."""

    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)
    step_id: str | None = None

    @classmethod
    def from_errors(cls, errors: dict[str, str], step_id: str | None = None) -> ValidationResult:
        return cls(is_valid=not errors, errors=dict(errors), step_id=step_id)


@dataclass(frozen=True)
class FlowValidationResult:
    """Outcome of validating every step of a flow."""

    flow_type: FlowType
    steps: dict[str, ValidationResult]

    @property
    def all_valid(self) -> bool:
        return all(result.is_valid for result in self.steps.values())

    @property
    def invalid_steps(self) -> list[str]:
        return [step_id for step_id, result in self.steps.items() if not result.is_valid]


@dataclass(frozen=True)
class StepIds:
    """Step-ids of a flow, keyed by the logical section they hold."""

    basic_details: str | None = None
    location: str | None = None
    rental: str | None = None
    sale_details: str | None = None
    features: str | None = None
    pg_details: str | None = None
    flatmate_details: str | None = None
    coworking_details: str | None = None
    land_features: str | None = None


@dataclass(frozen=True)
class ListingCompleteness:
    """Whether a listing has every wizard step filled and at least one image."""

    flow_type: FlowType
    missing_steps: list[str]
    has_images: bool

    @property
    def is_complete(self) -> bool:
        return not self.missing_steps and self.has_images
