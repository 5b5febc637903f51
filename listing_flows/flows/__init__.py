"""Flow detection and the wizard step registry."""

from listing_flows.flows.detection import (
    FlowClassifier,
    detect_flow_type,
    get_flow_category,
    get_flow_display_name,
    get_listing_type,
    is_sale_property,
)
from listing_flows.flows.steps import (
    FLOW_STEPS,
    check_listing_completeness,
    flow_for_step_id,
    format_field_key,
    format_step_id,
    step_ids_for_flow,
)

__all__ = [
    "FLOW_STEPS",
    "FlowClassifier",
    "check_listing_completeness",
    "detect_flow_type",
    "flow_for_step_id",
    "format_field_key",
    "format_step_id",
    "get_flow_category",
    "get_flow_display_name",
    "get_listing_type",
    "is_sale_property",
    "step_ids_for_flow",
]
