"""Unit tests for whole-record mapping between upstream and application shapes."""

from datetime import datetime, timedelta, timezone

from medtransport.schemas.booking import (
    ExternalBookingRecord,
    InternalBooking,
    InternalBookingChanges,
)
from medtransport.schemas.hospital import (
    ExternalHospitalRecord,
    Hospital,
    TranslateHospitalsRequest,
    TranslateHospitalsResponse,
)
from medtransport.services.booking_mapper import (
    booking_to_external,
    booking_to_internal,
    booking_update_to_external,
    hospital_to_external,
    hospital_to_internal,
)

IST = timezone(timedelta(hours=5, minutes=30))


class TestBookingToInternal:
    """Tests for upstream-to-application booking translation."""

    def test_full_record(self, sample_external_booking, fixed_clock):
        booking = booking_to_internal(sample_external_booking, clock=fixed_clock)

        assert booking.id == "bk-1001"
        assert booking.patient_id == "pt-42"
        assert booking.origin_hospital_id == "h-chennai"
        assert booking.destination_hospital_id == "h-madurai"
        assert booking.status == "in_transit"
        assert booking.urgency == "emergency"
        assert booking.preferred_pickup_window == datetime(2025, 6, 1, 8, 30, tzinfo=timezone.utc)
        assert booking.required_equipment == ["ventilator", "defibrillator"]
        assert booking.requested_by == "dr.rao"
        assert booking.requested_at == datetime(2025, 5, 30, 12, 0, tzinfo=timezone.utc)
        assert booking.estimated_cost == 250000

    def test_approvals_and_timeline_start_empty(self, sample_external_booking, fixed_clock):
        booking = booking_to_internal(sample_external_booking, clock=fixed_clock)
        assert booking.approvals == []
        assert booking.timeline == []

    def test_legacy_id_fallback(self, fixed_clock):
        record = ExternalBookingRecord.model_validate({"_id": "legacy-7", "status": "approved"})
        booking = booking_to_internal(record, clock=fixed_clock)
        assert booking.id == "legacy-7"
        assert booking.status == "clinical_review"

    def test_sparse_record_defaults(self, fixed_clock, fixed_now):
        booking = booking_to_internal(ExternalBookingRecord(), clock=fixed_clock)

        assert booking.id is None
        assert booking.status == "requested"
        assert booking.urgency == "routine"
        assert booking.origin_hospital_id == ""
        assert booking.destination_hospital_id == ""
        assert booking.required_equipment == []
        assert booking.requested_by == "Unknown"
        assert booking.requested_at == fixed_now
        assert booking.preferred_pickup_window == fixed_now

    def test_unknown_codes_pass_through(self, fixed_clock):
        record = ExternalBookingRecord(status="on_hold", urgency="elective")
        booking = booking_to_internal(record, clock=fixed_clock)
        assert booking.status == "on_hold"
        assert booking.urgency == "elective"

    def test_pickup_fields_read_in_configured_timezone(self, fixed_clock):
        record = ExternalBookingRecord(preferred_date="2025-06-01", preferred_time="08:30:00")
        booking = booking_to_internal(record, clock=fixed_clock, tz=IST)
        assert booking.preferred_pickup_window == datetime(2025, 6, 1, 3, 0, tzinfo=timezone.utc)

    def test_unreadable_created_at_uses_clock(self, fixed_clock, fixed_now):
        record = ExternalBookingRecord(created_at="yesterday-ish")
        assert booking_to_internal(record, clock=fixed_clock).requested_at == fixed_now

    def test_camel_case_on_the_wire(self, sample_external_booking, fixed_clock):
        payload = booking_to_internal(sample_external_booking, clock=fixed_clock).model_dump(by_alias=True)
        assert payload["originHospitalId"] == "h-chennai"
        assert "preferredPickupWindow" in payload
        assert "origin_hospital_id" not in payload


class TestBookingToExternal:
    """Tests for application-to-upstream create payloads."""

    def test_create_payload(self):
        booking = InternalBooking(
            id="bk-9",
            patient_id="pt-1",
            origin_hospital_id="h-chennai",
            destination_hospital_id="h-madurai",
            status="crew_assigned",
            urgency="urgent",
            preferred_pickup_window=datetime(2025, 6, 1, 8, 30, 15, 999, tzinfo=timezone.utc),
            required_equipment=["stretcher"],
        )
        payload = booking_to_external(booking)

        assert payload.patient_id == "pt-1"
        assert payload.urgency == "urgent"
        assert payload.origin_hospital_id == "h-chennai"
        assert payload.destination_hospital_id == "h-madurai"
        assert payload.preferred_date == "2025-06-01"
        assert payload.preferred_time == "08:30:15"
        assert payload.required_equipment == ["stretcher"]
        assert payload.special_instructions == ""

    def test_missing_window_and_hospitals(self):
        payload = booking_to_external(InternalBooking(urgency="emergency"))
        assert payload.urgency == "critical"
        assert payload.origin_hospital_id is None
        assert payload.preferred_date is None
        assert payload.preferred_time is None

    def test_split_in_configured_timezone(self):
        booking = InternalBooking(preferred_pickup_window=datetime(2025, 6, 1, 20, 0, tzinfo=timezone.utc))
        payload = booking_to_external(booking, tz=IST)
        assert (payload.preferred_date, payload.preferred_time) == ("2025-06-02", "01:30:00")

    def test_round_trip_through_upstream(self, sample_external_booking, fixed_clock):
        internal = booking_to_internal(sample_external_booking, clock=fixed_clock)
        payload = booking_to_external(internal)
        assert payload.urgency == sample_external_booking.urgency
        assert payload.preferred_date == sample_external_booking.preferred_date
        assert payload.preferred_time == sample_external_booking.preferred_time


class TestBookingUpdateToExternal:
    """Tests for partial update payloads."""

    def test_only_changed_fields(self):
        assert booking_update_to_external(InternalBookingChanges(status="airline_confirmed")) == {
            "status": "scheduled"
        }

    def test_empty_changes(self):
        assert booking_update_to_external(InternalBookingChanges()) == {}

    def test_all_fields(self):
        changes = InternalBookingChanges(
            status="completed",
            urgency="routine",
            preferred_pickup_window=datetime(2025, 7, 4, 6, 0, tzinfo=timezone.utc),
            required_equipment=[],
        )
        assert booking_update_to_external(changes) == {
            "status": "completed",
            "urgency": "stable",
            "preferred_date": "2025-07-04",
            "preferred_time": "06:00:00",
            "required_equipment": [],
        }


class TestHospitalToInternal:
    """Tests for upstream hospital translation."""

    def test_full_record(self, sample_hospital_data):
        hospital = hospital_to_internal(ExternalHospitalRecord.model_validate(sample_hospital_data))

        assert hospital.id == "h-chennai"
        assert hospital.name == "Chennai General"
        assert hospital.level_of_care == "Quaternary"
        assert hospital.icu_capacity == 40
        assert hospital.occupied_beds == 31
        assert hospital.coordinates.lat == 13.08
        assert hospital.coordinates.lng == 80.27
        assert hospital.contact_person == "A. Kumar"
        assert hospital.email == "icu@chennai-general.example"

    def test_half_a_location_is_no_location(self, sample_hospital_data):
        sample_hospital_data.pop("longitude")
        hospital = hospital_to_internal(ExternalHospitalRecord.model_validate(sample_hospital_data))
        assert hospital.coordinates is None

    def test_sparse_record(self):
        hospital = hospital_to_internal(ExternalHospitalRecord(id="h-1"))
        assert hospital.id == "h-1"
        assert hospital.level_of_care == "Primary"
        assert hospital.contact_person == ""
        assert hospital.icu_capacity == 0

    def test_unknown_level_of_care_passes_through(self):
        hospital = hospital_to_internal(ExternalHospitalRecord(id="h-2", level_of_care="field_unit"))
        assert hospital.level_of_care == "field_unit"


class TestLenientBookingIntake:
    """Tests for upstream values outside the declared shapes."""

    def test_non_string_status_passes_through(self, fixed_clock):
        booking = booking_to_internal(ExternalBookingRecord(status=3), clock=fixed_clock)
        assert booking.status == 3

    def test_non_string_created_at_uses_clock(self, fixed_clock, fixed_now):
        booking = booking_to_internal(ExternalBookingRecord(created_at=1717200000), clock=fixed_clock)
        assert booking.requested_at == fixed_now

    def test_non_string_urgency_survives_export(self, fixed_clock):
        booking = booking_to_internal(ExternalBookingRecord(urgency=2), clock=fixed_clock)
        assert booking_to_external(booking).urgency == 2


class TestHospitalToExternal:
    """Tests for application-to-upstream hospital payloads."""

    def test_round_trip_through_upstream(self, sample_hospital_data):
        hospital = hospital_to_internal(ExternalHospitalRecord.model_validate(sample_hospital_data))
        payload = hospital_to_external(hospital)

        assert payload.hospital_name == sample_hospital_data["hospital_name"]
        assert payload.address == sample_hospital_data["address"]
        assert payload.latitude == sample_hospital_data["latitude"]
        assert payload.longitude == sample_hospital_data["longitude"]
        assert payload.level_of_care == "trauma_center"
        assert payload.icu_capacity == 40
        assert payload.occupied_beds == 31
        assert payload.contact_information.name == "A. Kumar"
        assert payload.contact_information.position == "Administrator"

    def test_unlocated_hospital_has_null_coordinates(self, unlocated_hospital):
        payload = hospital_to_external(unlocated_hospital)
        assert payload.latitude is None
        assert payload.longitude is None
        assert payload.level_of_care == "basic"

    def test_unknown_level_of_care_passes_through(self):
        payload = hospital_to_external(Hospital(id="h-3", level_of_care="Field"))
        assert payload.level_of_care == "Field"

    def test_translate_envelopes_live_with_hospital_schemas(self, sample_hospital_data):
        request = TranslateHospitalsRequest.model_validate({"records": [sample_hospital_data]})
        response = TranslateHospitalsResponse(items=[hospital_to_internal(r) for r in request.records])
        assert response.items[0].id == "h-chennai"
