"""Booking router for record translation between upstream and application shapes."""

import logging
from datetime import tzinfo

from fastapi import APIRouter

from ..core.dependencies import CurrentClock, PickupTimezone
from ..schemas.booking import (
    ExternalBookingPayload,
    InternalBooking,
    InternalBookingChanges,
    TranslateBookingsRequest,
    TranslateBookingsResponse,
)
from ..services.booking_mapper import booking_to_external, booking_to_internal, booking_update_to_external
from ..services.temporal import Clock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/booking", tags=["booking"])


@router.post("/translate", response_model=TranslateBookingsResponse)
async def translate_bookings(
    request: TranslateBookingsRequest,
    clock: Clock = CurrentClock,
    tz: tzinfo = PickupTimezone,
) -> TranslateBookingsResponse:
    """
    Translate upstream booking records to the application shape.

    Unknown status or urgency codes are passed through unchanged.
    """
    items = [booking_to_internal(record, clock=clock, tz=tz) for record in request.records]

    logger.info("Bookings translated", extra={"count": len(items)})
    return TranslateBookingsResponse(items=items)


@router.post("/export", response_model=ExternalBookingPayload)
async def export_booking(
    booking: InternalBooking,
    tz: tzinfo = PickupTimezone,
) -> ExternalBookingPayload:
    """Build the upstream create payload for an application booking."""
    return booking_to_external(booking, tz=tz)


@router.post("/export-update", response_model=dict)
async def export_booking_update(
    changes: InternalBookingChanges,
    tz: tzinfo = PickupTimezone,
) -> dict:
    """Build a partial upstream update payload containing only the changed fields."""
    return booking_update_to_external(changes, tz=tz)
