"""Service layer package: the pure reconciliation and valuation core."""

from .booking_mapper import (
    booking_to_external,
    booking_to_internal,
    booking_update_to_external,
    hospital_to_external,
    hospital_to_internal,
)
from .geo_cost import estimate_cost, haversine_km, route_cost
from .temporal import join_pickup_window, split_pickup_window, utc_now
from .valuation import (
    ValuationService,
    estimate_booking_value,
    index_hospitals,
    portfolio_summary,
    portfolio_total,
    revenue_by_month,
    revenue_by_origin_hospital,
    value_booking,
)
from .vocabulary import (
    external_to_internal_status,
    external_to_internal_urgency,
    internal_to_external_status,
    internal_to_external_urgency,
    lifecycle_position,
)

__all__ = [
    "ValuationService",
    "booking_to_external",
    "booking_to_internal",
    "booking_update_to_external",
    "estimate_booking_value",
    "estimate_cost",
    "external_to_internal_status",
    "external_to_internal_urgency",
    "haversine_km",
    "hospital_to_external",
    "hospital_to_internal",
    "index_hospitals",
    "internal_to_external_status",
    "internal_to_external_urgency",
    "join_pickup_window",
    "lifecycle_position",
    "portfolio_summary",
    "portfolio_total",
    "revenue_by_month",
    "revenue_by_origin_hospital",
    "route_cost",
    "split_pickup_window",
    "utc_now",
    "value_booking",
]
