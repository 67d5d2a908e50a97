"""Hospital router for record translation between upstream and application shapes."""

import logging

from fastapi import APIRouter

from ..schemas.hospital import (
    ExternalHospitalPayload,
    Hospital,
    TranslateHospitalsRequest,
    TranslateHospitalsResponse,
)
from ..services.booking_mapper import hospital_to_external, hospital_to_internal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/hospital", tags=["hospital"])


@router.post("/translate", response_model=TranslateHospitalsResponse)
async def translate_hospitals(request: TranslateHospitalsRequest) -> TranslateHospitalsResponse:
    """Translate upstream hospital records to the application shape."""
    items = [hospital_to_internal(record) for record in request.records]

    unlocated = sum(1 for h in items if h.coordinates is None)
    if unlocated:
        logger.info("Hospitals without coordinates", extra={"count": unlocated})

    return TranslateHospitalsResponse(items=items)


@router.post("/export", response_model=ExternalHospitalPayload)
async def export_hospital(hospital: Hospital) -> ExternalHospitalPayload:
    """Build the upstream create payload for an application hospital."""
    return hospital_to_external(hospital)
