"""Booking-related Pydantic schemas.

ExternalBookingRecord mirrors the upstream bookings API field for field
(snake_case). InternalBooking is the application shape (camelCase on the
wire). Recorded cost fields are kept as arbitrary JSON values because only
numeric ones count toward valuations.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import InternalModel


class ExternalBookingRecord(BaseModel):
    """Booking as stored by the upstream bookings API."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="Booking ID")
    legacy_id: Optional[str] = Field(None, alias="_id", description="Document ID used by older API versions")
    patient_id: Optional[str] = Field(None, description="Patient reference")
    origin_hospital_id: Optional[str] = Field(None, description="Origin hospital reference")
    destination_hospital_id: Optional[str] = Field(None, description="Destination hospital reference")
    status: Any = Field(None, description="External status code; other values pass through")
    urgency: Any = Field(None, description="External urgency code; other values pass through")
    preferred_date: Optional[str] = Field(None, description="Pickup date, YYYY-MM-DD")
    preferred_time: Optional[str] = Field(None, description="Pickup wall-clock time, HH:MM:SS")
    required_equipment: Optional[list[str]] = None
    special_instructions: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Any = Field(None, description="ISO 8601 creation instant; unreadable values fall back to now")
    estimated_cost: Any = None
    actual_cost: Any = None
    estimated_flight_time: Any = None


class TimelineEvent(InternalModel):
    """Entry of the append-only booking event log."""

    id: str
    event: str
    user: str
    timestamp: datetime
    details: Optional[str] = None


class Approval(InternalModel):
    """Clinical or dispatch approval attached to a booking."""

    id: str
    type: str
    status: str
    approved_by: str
    approved_at: datetime
    notes: Optional[str] = None


class InternalBooking(InternalModel):
    """Booking as used by the application."""

    id: Optional[str] = Field(None, description="Booking ID")
    patient_id: Optional[str] = None
    origin_hospital_id: str = ""
    destination_hospital_id: str = ""
    status: Any = Field("requested", description="Internal status code; unknown codes kept as received")
    urgency: Any = Field("routine", description="Internal urgency code; unknown codes kept as received")
    preferred_pickup_window: Optional[datetime] = Field(None, description="Combined pickup instant")
    required_equipment: list[str] = Field(default_factory=list)
    special_instructions: Optional[str] = None
    requested_by: Optional[str] = None
    requested_at: Optional[datetime] = None
    approvals: list[Approval] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)
    estimated_cost: Any = None
    actual_cost: Any = None
    estimated_flight_time: Any = None


class ExternalBookingPayload(BaseModel):
    """Body the upstream API accepts when creating a booking."""

    patient_id: Optional[str]
    urgency: Any
    origin_hospital_id: Optional[str]
    destination_hospital_id: Optional[str]
    preferred_date: Optional[str]
    preferred_time: Optional[str]
    required_equipment: list[str]
    special_instructions: str


class InternalBookingChanges(InternalModel):
    """Partial update expressed in the application vocabulary."""

    status: Optional[str] = None
    urgency: Optional[str] = None
    preferred_pickup_window: Optional[datetime] = None
    required_equipment: Optional[list[str]] = None


class TranslateBookingsRequest(BaseModel):
    """Request schema for translating upstream booking records."""

    records: list[ExternalBookingRecord] = Field(..., description="Upstream booking records")


class TranslateBookingsResponse(InternalModel):
    """Response schema for translated bookings."""

    items: list[InternalBooking]
