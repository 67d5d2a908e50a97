"""Hospital-related Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import InternalModel


class Coordinate(BaseModel):
    """A point in degrees. No range validation: bad values give degenerate distances."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., description="Latitude in degrees")
    lng: float = Field(..., description="Longitude in degrees")


class ContactInformation(BaseModel):
    """Contact block of an upstream hospital record."""

    name: str = ""
    phone: str = ""
    email: str = ""
    position: str = ""


class ExternalHospitalRecord(BaseModel):
    """Hospital as returned by the upstream hospitals API."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="Hospital ID")
    legacy_id: Optional[str] = Field(None, alias="_id", description="Document ID used by older API versions")
    hospital_name: str = Field("", description="Hospital display name")
    address: str = Field("", description="Street address")
    latitude: Optional[float] = Field(None, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, description="Longitude in degrees")
    level_of_care: Optional[str] = Field(None, description="External level-of-care code")
    icu_capacity: Optional[int] = None
    occupied_beds: Optional[int] = None
    contact_information: Optional[ContactInformation] = None


class Hospital(InternalModel):
    """Hospital as used by the application."""

    id: str = Field(..., description="Hospital ID")
    name: str = Field("", description="Hospital display name")
    address: str = ""
    level_of_care: str = Field("Primary", description="Internal level-of-care label")
    icu_capacity: int = 0
    occupied_beds: int = 0
    coordinates: Optional[Coordinate] = Field(None, description="Location; absent when unknown")
    contact_person: str = ""
    email: str = ""
    phone: str = ""


class ExternalHospitalPayload(BaseModel):
    """Body the upstream API accepts when creating a hospital."""

    hospital_name: str
    address: str
    latitude: Optional[float] = Field(None, description="Latitude in degrees; null when the location is unknown")
    longitude: Optional[float] = Field(None, description="Longitude in degrees; null when the location is unknown")
    level_of_care: str
    icu_capacity: int
    occupied_beds: int
    contact_information: ContactInformation
    preferred_pickup_location: str = Field("", description="Pickup point; the street address unless told otherwise")


class TranslateHospitalsRequest(BaseModel):
    """Request schema for translating upstream hospital records."""

    records: list[ExternalHospitalRecord] = Field(..., description="Upstream hospital records")


class TranslateHospitalsResponse(BaseModel):
    """Response schema for translated hospitals."""

    items: list[Hospital]
