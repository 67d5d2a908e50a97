"""Models module exporting the closed domain vocabularies."""

from .booking import (
    INTERNAL_LIFECYCLE,
    PENDING_STATUSES,
    ExternalStatus,
    ExternalUrgency,
    InternalStatus,
    InternalUrgency,
)
from .hospital import ExternalLevelOfCare, LevelOfCare

__all__ = [
    # Booking vocabularies
    "ExternalStatus",
    "InternalStatus",
    "ExternalUrgency",
    "InternalUrgency",
    "INTERNAL_LIFECYCLE",
    "PENDING_STATUSES",

    # Hospital vocabularies
    "ExternalLevelOfCare",
    "LevelOfCare",
]
