"""Configuration management for listing-flows."""

from dataclasses import dataclass, field
from pathlib import Path

from listing_flows.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")


@dataclass(frozen=True)
class FormatConfig:
    """Display formatting configuration.

    Defaults match the Indian marketplace the listing data comes from:
    rupee amounts with lakh/crore digit grouping, +91 phone numbers and
    day-first dates.
    """

    currency_symbol: str = "₹"
    country_code: str = "91"
    placeholder: str = "-"
    default_area_unit: str = "sqft"
    date_format: str = "%d/%m/%Y"
    not_specified: str = "Not specified"
    invalid_date: str = "Invalid date"


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class AuditConfig:
    """Configuration for a listing audit run."""

    num_records: int = 50
    seed: int | None = None
    flows: list[str] | None = None
    legacy_share: float = 0.2
    malformed_share: float = 0.05


@dataclass
class ListingFlowsConfig:
    """Main configuration for listing-flows."""

    formatting: FormatConfig = field(default_factory=FormatConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "ListingFlowsConfig":
        """Create config from environment variables."""
        import os

        formatting = FormatConfig(
            currency_symbol=os.getenv("LISTING_CURRENCY_SYMBOL", "₹"),
            country_code=os.getenv("LISTING_COUNTRY_CODE", "91"),
            placeholder=os.getenv("LISTING_PLACEHOLDER", "-"),
            default_area_unit=os.getenv("LISTING_AREA_UNIT", "sqft"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        audit = AuditConfig(
            num_records=_int_env("AUDIT_RECORDS", 50),
            seed=_int_env("SEED", None),
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
            )

        return cls(
            formatting=formatting,
            output=output,
            audit=audit,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _int_env(name: str, default: int | None) -> int | None:
    """Read an integer environment variable."""
    import os

    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
