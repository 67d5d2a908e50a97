"""Valuation router for distance, cost, and portfolio figures."""

import logging
import math
from datetime import tzinfo

from fastapi import APIRouter

from ..core.config import Settings
from ..core.dependencies import AppSettings, CurrentClock, PickupTimezone, build_valuation_service
from ..schemas.valuation import (
    DistanceRequest,
    DistanceResponse,
    PortfolioRequest,
    PortfolioResponse,
    SummaryResponse,
)
from ..services.geo_cost import route_cost
from ..services.temporal import Clock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/valuation", tags=["valuation"])


@router.post("/distance", response_model=DistanceResponse)
async def estimate_distance(
    request: DistanceRequest,
    app_settings: Settings = AppSettings,
) -> DistanceResponse:
    """Great-circle distance and tariff cost between two coordinates."""
    distance, cost = route_cost(
        request.origin,
        request.destination,
        rate=app_settings.tariff_rate_per_km,
        radius_km=app_settings.earth_radius_km,
    )
    return DistanceResponse(
        distance_km=None if distance is None or math.isnan(distance) else distance,
        cost=cost,
        rate_per_km=app_settings.tariff_rate_per_km,
        currency=app_settings.currency,
    )


@router.post("/portfolio", response_model=PortfolioResponse)
async def value_portfolio(
    request: PortfolioRequest,
    app_settings: Settings = AppSettings,
    clock: Clock = CurrentClock,
    tz: tzinfo = PickupTimezone,
) -> PortfolioResponse:
    """
    Value every booking and total them.

    Each valuation names the fallback tier that produced it.
    """
    service = build_valuation_service(request.hospitals, app_settings, clock, tz)
    valuations = service.value_all(request.bookings)
    total = math.fsum(v.value for v in valuations)

    logger.info(
        "Portfolio valued",
        extra={"bookings": len(valuations), "hospitals": len(service.hospitals_by_id), "total": total}
    )
    return PortfolioResponse(total=total, currency=app_settings.currency, valuations=valuations)


@router.post("/summary", response_model=SummaryResponse)
async def summarize_portfolio(
    request: PortfolioRequest,
    app_settings: Settings = AppSettings,
    clock: Clock = CurrentClock,
    tz: tzinfo = PickupTimezone,
) -> SummaryResponse:
    """Dashboard statistics with revenue broken down by month and by origin hospital."""
    service = build_valuation_service(request.hospitals, app_settings, clock, tz)
    return SummaryResponse(
        summary=service.summary(request.bookings),
        revenue_by_month=service.by_month(request.bookings, months=app_settings.revenue_window_months),
        revenue_by_hospital=service.by_origin_hospital(request.bookings),
        currency=app_settings.currency,
    )
