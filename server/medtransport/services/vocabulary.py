"""Translation between the upstream and application vocabularies.

Every lookup is total: a code with no mapping comes back unchanged. That is a
soft failure, so it is logged and counted, but it never raises. Callers that
must tell a translated value from a passed-through one compare the result
against the target enum themselves.

Tables are read-only mappings built once at import.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..core.observability import metrics_collector
from ..models.booking import (
    INTERNAL_LIFECYCLE,
    ExternalStatus,
    ExternalUrgency,
    InternalStatus,
    InternalUrgency,
)
from ..models.hospital import ExternalLevelOfCare, LevelOfCare

logger = logging.getLogger(__name__)


EXTERNAL_TO_INTERNAL_STATUS: Mapping[str, str] = MappingProxyType({
    ExternalStatus.PENDING.value: InternalStatus.REQUESTED.value,
    ExternalStatus.APPROVED.value: InternalStatus.CLINICAL_REVIEW.value,
    ExternalStatus.SCHEDULED.value: InternalStatus.DISPATCH_REVIEW.value,
    ExternalStatus.EN_ROUTE.value: InternalStatus.IN_TRANSIT.value,
    ExternalStatus.COMPLETED.value: InternalStatus.COMPLETED.value,
    ExternalStatus.CANCELLED.value: InternalStatus.CANCELLED.value,
})

# airline_confirmed and crew_assigned have no upstream state: both collapse to scheduled.
INTERNAL_TO_EXTERNAL_STATUS: Mapping[str, str] = MappingProxyType({
    **{internal: external for external, internal in EXTERNAL_TO_INTERNAL_STATUS.items()},
    InternalStatus.AIRLINE_CONFIRMED.value: ExternalStatus.SCHEDULED.value,
    InternalStatus.CREW_ASSIGNED.value: ExternalStatus.SCHEDULED.value,
})

INTERNAL_TO_EXTERNAL_URGENCY: Mapping[str, str] = MappingProxyType({
    InternalUrgency.ROUTINE.value: ExternalUrgency.STABLE.value,
    InternalUrgency.URGENT.value: ExternalUrgency.URGENT.value,
    InternalUrgency.EMERGENCY.value: ExternalUrgency.CRITICAL.value,
})

EXTERNAL_TO_INTERNAL_URGENCY: Mapping[str, str] = MappingProxyType({
    external: internal for internal, external in INTERNAL_TO_EXTERNAL_URGENCY.items()
})

EXTERNAL_TO_INTERNAL_LEVEL_OF_CARE: Mapping[str, str] = MappingProxyType({
    ExternalLevelOfCare.BASIC.value: LevelOfCare.PRIMARY.value,
    ExternalLevelOfCare.ADVANCED.value: LevelOfCare.SECONDARY.value,
    ExternalLevelOfCare.TERTIARY.value: LevelOfCare.TERTIARY.value,
    ExternalLevelOfCare.TRAUMA_CENTER.value: LevelOfCare.QUATERNARY.value,
})

INTERNAL_TO_EXTERNAL_LEVEL_OF_CARE: Mapping[str, str] = MappingProxyType({
    internal: external for external, internal in EXTERNAL_TO_INTERNAL_LEVEL_OF_CARE.items()
})

_LIFECYCLE_INDEX: Mapping[str, int] = MappingProxyType({
    status.value: position for position, status in enumerate(INTERNAL_LIFECYCLE)
})


def _plain(code: Any) -> Any:
    # enum members hash by name, so look up by value
    return code.value if isinstance(code, Enum) else code


def _translate(code: Any, table: Mapping[str, str], vocabulary: str) -> Any:
    """Look a code up in a table, passing it through unchanged on a miss."""
    code = _plain(code)
    if isinstance(code, str) and code in table:
        return table[code]

    logger.warning(
        "Code has no translation, passing through unchanged",
        extra={"vocabulary": vocabulary, "code": code}
    )
    metrics_collector.record_passthrough(vocabulary)
    return code


def external_to_internal_status(code: str) -> str:
    """Translate an upstream status code to the application lifecycle."""
    return _translate(code, EXTERNAL_TO_INTERNAL_STATUS, "status.external_to_internal")


def internal_to_external_status(code: str) -> str:
    """
    Translate an application status to the upstream vocabulary.

    ``airline_confirmed`` and ``crew_assigned`` both become ``scheduled``;
    translating ``scheduled`` back yields ``dispatch_review``.
    """
    return _translate(code, INTERNAL_TO_EXTERNAL_STATUS, "status.internal_to_external")


def external_to_internal_urgency(code: str) -> str:
    """Translate an upstream urgency code to the application vocabulary."""
    return _translate(code, EXTERNAL_TO_INTERNAL_URGENCY, "urgency.external_to_internal")


def internal_to_external_urgency(code: str) -> str:
    """Translate an application urgency code to the upstream vocabulary."""
    return _translate(code, INTERNAL_TO_EXTERNAL_URGENCY, "urgency.internal_to_external")


def external_to_internal_level_of_care(code: str) -> str:
    return _translate(code, EXTERNAL_TO_INTERNAL_LEVEL_OF_CARE, "level_of_care.external_to_internal")


def internal_to_external_level_of_care(code: str) -> str:
    return _translate(code, INTERNAL_TO_EXTERNAL_LEVEL_OF_CARE, "level_of_care.internal_to_external")


def lifecycle_position(status: str) -> Optional[int]:
    """
    Position of an internal status in the booking lifecycle.

    Args:
        status: Internal status code

    Returns:
        Zero-based index in lifecycle order, or None for codes outside it
    """
    status = _plain(status)
    if not isinstance(status, str):
        return None
    return _LIFECYCLE_INDEX.get(status)
