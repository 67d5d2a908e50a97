"""Booking lifecycle and urgency vocabularies.

Two closed vocabularies exist for every concept: the external one used by
the upstream bookings API and the internal one used by the application.
Member values are wire values and must not be renamed.
"""

from enum import Enum


class ExternalStatus(str, Enum):
    """Booking status as stored by the upstream bookings API."""
    PENDING = "pending"
    APPROVED = "approved"
    SCHEDULED = "scheduled"
    EN_ROUTE = "en_route"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InternalStatus(str, Enum):
    """Booking status as used by the application, in lifecycle order."""
    REQUESTED = "requested"
    CLINICAL_REVIEW = "clinical_review"
    DISPATCH_REVIEW = "dispatch_review"
    AIRLINE_CONFIRMED = "airline_confirmed"
    CREW_ASSIGNED = "crew_assigned"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ExternalUrgency(str, Enum):
    """Clinical priority as stored by the upstream bookings API."""
    STABLE = "stable"
    URGENT = "urgent"
    CRITICAL = "critical"


class InternalUrgency(str, Enum):
    """Clinical priority as used by the application."""
    ROUTINE = "routine"
    URGENT = "urgent"
    EMERGENCY = "emergency"


# Definition order of InternalStatus is the lifecycle order.
INTERNAL_LIFECYCLE: tuple[InternalStatus, ...] = tuple(InternalStatus)

PENDING_STATUSES = frozenset({InternalStatus.REQUESTED, InternalStatus.CLINICAL_REVIEW})
