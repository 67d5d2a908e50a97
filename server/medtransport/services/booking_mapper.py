"""Whole-record mapping between upstream and application shapes."""

import logging
from datetime import timezone, tzinfo

from ..models.booking import InternalStatus, InternalUrgency
from ..schemas.booking import (
    ExternalBookingPayload,
    ExternalBookingRecord,
    InternalBooking,
    InternalBookingChanges,
)
from ..schemas.hospital import (
    ContactInformation,
    Coordinate,
    ExternalHospitalPayload,
    ExternalHospitalRecord,
    Hospital,
)
from .temporal import Clock, join_pickup_window, parse_instant, split_pickup_window, utc_now
from .vocabulary import (
    external_to_internal_level_of_care,
    external_to_internal_status,
    external_to_internal_urgency,
    internal_to_external_level_of_care,
    internal_to_external_status,
    internal_to_external_urgency,
)

logger = logging.getLogger(__name__)

UNKNOWN_REQUESTER = "Unknown"
DEFAULT_LEVEL_OF_CARE = "Primary"
DEFAULT_CONTACT_POSITION = "Administrator"


def booking_to_internal(
    record: ExternalBookingRecord,
    *,
    clock: Clock = utc_now,
    tz: tzinfo = timezone.utc,
) -> InternalBooking:
    """
    Convert an upstream booking record to the application shape.

    Approvals and timeline are left empty; they are filled in by whoever owns
    the booking's event log. A record without a status starts at
    ``requested``; a status of any other shape passes through untranslated.

    Args:
        record: Upstream booking record
        clock: Source of "now" for missing pickup and request timestamps
        tz: Timezone of the upstream pickup date/time fields

    Returns:
        Application booking
    """
    status = (
        external_to_internal_status(record.status) if record.status is not None else InternalStatus.REQUESTED.value
    )
    urgency = (
        external_to_internal_urgency(record.urgency) if record.urgency else InternalUrgency.ROUTINE.value
    )

    requested_at = parse_instant(record.created_at, tz=tz)
    if requested_at is None:
        requested_at = clock()

    booking = InternalBooking(
        id=record.id or record.legacy_id,
        patient_id=record.patient_id,
        origin_hospital_id=record.origin_hospital_id or "",
        destination_hospital_id=record.destination_hospital_id or "",
        status=status,
        urgency=urgency,
        preferred_pickup_window=join_pickup_window(
            record.preferred_date, record.preferred_time, clock=clock, tz=tz
        ),
        required_equipment=list(record.required_equipment or []),
        special_instructions=record.special_instructions,
        requested_by=record.created_by or UNKNOWN_REQUESTER,
        requested_at=requested_at,
        estimated_cost=record.estimated_cost,
        actual_cost=record.actual_cost,
        estimated_flight_time=record.estimated_flight_time,
    )

    logger.debug(
        "Booking translated to internal form",
        extra={"booking_id": booking.id, "status": booking.status, "urgency": booking.urgency}
    )
    return booking


def booking_to_external(booking: InternalBooking, *, tz: tzinfo = timezone.utc) -> ExternalBookingPayload:
    """Build the upstream create payload for an application booking."""
    preferred_date, preferred_time = split_pickup_window(booking.preferred_pickup_window, tz=tz)

    return ExternalBookingPayload(
        patient_id=booking.patient_id,
        urgency=internal_to_external_urgency(booking.urgency or InternalUrgency.ROUTINE.value),
        origin_hospital_id=booking.origin_hospital_id or None,
        destination_hospital_id=booking.destination_hospital_id or None,
        preferred_date=preferred_date,
        preferred_time=preferred_time,
        required_equipment=list(booking.required_equipment),
        special_instructions=booking.special_instructions or "",
    )


def booking_update_to_external(changes: InternalBookingChanges, *, tz: tzinfo = timezone.utc) -> dict:
    """
    Build a partial upstream update payload.

    Only fields present in ``changes`` appear in the result, so the upstream
    API leaves everything else untouched.
    """
    payload: dict = {}
    if changes.urgency:
        payload["urgency"] = internal_to_external_urgency(changes.urgency)
    if changes.status:
        payload["status"] = internal_to_external_status(changes.status)

    preferred_date, preferred_time = split_pickup_window(changes.preferred_pickup_window, tz=tz)
    if preferred_date:
        payload["preferred_date"] = preferred_date
    if preferred_time:
        payload["preferred_time"] = preferred_time

    if changes.required_equipment is not None:
        payload["required_equipment"] = list(changes.required_equipment)
    return payload


def hospital_to_internal(record: ExternalHospitalRecord) -> Hospital:
    """
    Convert an upstream hospital record to the application shape.

    Coordinates are set only when both latitude and longitude are present.
    """
    coordinates = None
    if record.latitude is not None and record.longitude is not None:
        coordinates = Coordinate(lat=record.latitude, lng=record.longitude)

    contact = record.contact_information
    return Hospital(
        id=record.id or record.legacy_id or "",
        name=record.hospital_name,
        address=record.address,
        level_of_care=(
            external_to_internal_level_of_care(record.level_of_care)
            if record.level_of_care else DEFAULT_LEVEL_OF_CARE
        ),
        icu_capacity=record.icu_capacity or 0,
        occupied_beds=record.occupied_beds or 0,
        coordinates=coordinates,
        contact_person=contact.name if contact else "",
        email=contact.email if contact else "",
        phone=contact.phone if contact else "",
    )


def hospital_to_external(hospital: Hospital) -> ExternalHospitalPayload:
    """
    Build the upstream create payload for an application hospital.

    An unlocated hospital is sent with null latitude and longitude rather
    than (0, 0), which is a real point.
    """
    coordinates = hospital.coordinates
    return ExternalHospitalPayload(
        hospital_name=hospital.name,
        address=hospital.address,
        latitude=coordinates.lat if coordinates else None,
        longitude=coordinates.lng if coordinates else None,
        level_of_care=internal_to_external_level_of_care(hospital.level_of_care or DEFAULT_LEVEL_OF_CARE),
        icu_capacity=hospital.icu_capacity,
        occupied_beds=hospital.occupied_beds,
        contact_information=ContactInformation(
            name=hospital.contact_person,
            phone=hospital.phone,
            email=hospital.email,
            position=DEFAULT_CONTACT_POSITION,
        ),
        preferred_pickup_location=hospital.address,
    )
