"""Test configuration and fixtures."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from medtransport.core.dependencies import get_clock
from medtransport.schemas.booking import ExternalBookingRecord, InternalBooking
from medtransport.schemas.hospital import Coordinate, Hospital

FIXED_NOW = datetime(2025, 6, 15, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """The instant every frozen clock returns."""
    return FIXED_NOW


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest_asyncio.fixture(scope="function")
async def test_app(fixed_clock):
    """Create a test FastAPI application with a frozen clock."""
    from medtransport.main import create_app

    app = create_app()
    app.dependency_overrides[get_clock] = lambda: fixed_clock

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def chennai():
    """Hospital in Chennai with coordinates."""
    return Hospital(id="h-chennai", name="Chennai General", coordinates=Coordinate(lat=13.08, lng=80.27))


@pytest.fixture
def madurai():
    """Hospital in Madurai with coordinates."""
    return Hospital(id="h-madurai", name="Madurai Medical College", coordinates=Coordinate(lat=9.93, lng=78.12))


@pytest.fixture
def unlocated_hospital():
    """Hospital whose location is unknown."""
    return Hospital(id="h-nowhere", name="Rural Clinic")


@pytest.fixture
def hospitals_by_id(chennai, madurai, unlocated_hospital):
    """Known hospitals keyed by ID."""
    return {h.id: h for h in (chennai, madurai, unlocated_hospital)}


@pytest.fixture
def sample_external_booking_data():
    """Upstream booking record as the bookings API returns it."""
    return {
        "id": "bk-1001",
        "patient_id": "pt-42",
        "origin_hospital_id": "h-chennai",
        "destination_hospital_id": "h-madurai",
        "status": "en_route",
        "urgency": "critical",
        "preferred_date": "2025-06-01",
        "preferred_time": "08:30:00",
        "required_equipment": ["ventilator", "defibrillator"],
        "created_by": "dr.rao",
        "created_at": "2025-05-30T12:00:00Z",
        "estimated_cost": 250000,
    }


@pytest.fixture
def sample_external_booking(sample_external_booking_data):
    return ExternalBookingRecord(**sample_external_booking_data)


@pytest.fixture
def sample_hospital_data():
    """Upstream hospital record as the hospitals API returns it."""
    return {
        "_id": "h-chennai",
        "hospital_name": "Chennai General",
        "address": "Park Town, Chennai",
        "latitude": 13.08,
        "longitude": 80.27,
        "level_of_care": "trauma_center",
        "icu_capacity": 40,
        "occupied_beds": 31,
        "contact_information": {
            "name": "A. Kumar",
            "phone": "+91-44-0000-0000",
            "email": "icu@chennai-general.example",
            "position": "Administrator",
        },
    }


@pytest.fixture
def make_booking():
    """Factory for internal bookings with sensible defaults."""

    def _make(**overrides) -> InternalBooking:
        fields = {
            "id": "bk-1",
            "origin_hospital_id": "",
            "destination_hospital_id": "",
            "status": "requested",
            "urgency": "routine",
        }
        fields.update(overrides)
        return InternalBooking(**fields)

    return _make
