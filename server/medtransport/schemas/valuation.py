"""Valuation-related Pydantic schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .booking import InternalBooking
from .hospital import Coordinate, Hospital


class ValueSource(str, Enum):
    """Fallback tier that produced a booking value, in evaluation order."""
    GEOGRAPHIC = "geographic"
    RECORDED_ESTIMATE = "recorded_estimate"
    RECORDED_ACTUAL = "recorded_actual"
    NONE = "none"


class BookingValuation(BaseModel):
    """Value of one booking and where it came from."""

    booking_id: Optional[str] = Field(None, description="Booking ID")
    value: float = Field(..., description="Value in currency units")
    source: ValueSource = Field(..., description="Tier that produced the value")
    distance_km: Optional[float] = Field(None, description="Route distance when both hospitals are located")


class RevenueBucket(BaseModel):
    """One row of a revenue breakdown."""

    label: str
    revenue: float


class PortfolioSummary(BaseModel):
    """Headline statistics over a set of bookings."""

    total_bookings: int
    completed_bookings: int
    pending_bookings: int
    total_revenue: float
    efficiency: int = Field(..., description="Completed bookings as a rounded percentage")
    avg_flight_time: int = Field(..., description="Rounded mean of recorded flight times")


class DistanceRequest(BaseModel):
    """Request schema for a point-to-point estimate."""

    origin: Coordinate
    destination: Coordinate


class DistanceResponse(BaseModel):
    """Response schema for a point-to-point estimate."""

    distance_km: Optional[float]
    cost: int
    rate_per_km: float
    currency: str


class PortfolioRequest(BaseModel):
    """Bookings plus the hospitals their references resolve against."""

    bookings: list[InternalBooking] = Field(default_factory=list)
    hospitals: list[Hospital] = Field(default_factory=list)


class PortfolioResponse(BaseModel):
    """Response schema for portfolio valuation."""

    total: float
    currency: str
    valuations: list[BookingValuation]


class SummaryResponse(BaseModel):
    """Response schema for dashboard analytics."""

    summary: PortfolioSummary
    revenue_by_month: list[RevenueBucket]
    revenue_by_hospital: list[RevenueBucket]
    currency: str
