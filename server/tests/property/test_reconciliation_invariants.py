"""Property-based tests for reconciliation and valuation invariants."""

from datetime import date, datetime, time, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from medtransport.models.booking import ExternalStatus, ExternalUrgency, InternalUrgency
from medtransport.schemas.booking import InternalBooking
from medtransport.schemas.hospital import Coordinate
from medtransport.services.geo_cost import estimate_cost, haversine_km
from medtransport.services.temporal import join_pickup_window, split_pickup_window
from medtransport.services.valuation import estimate_booking_value, portfolio_total
from medtransport.services.vocabulary import (
    EXTERNAL_TO_INTERNAL_STATUS,
    external_to_internal_status,
    external_to_internal_urgency,
    internal_to_external_status,
    internal_to_external_urgency,
)

# Strategies for generating test data
coordinates = st.builds(
    Coordinate,
    lat=st.floats(min_value=-90, max_value=90, allow_nan=False),
    lng=st.floats(min_value=-180, max_value=180, allow_nan=False),
)
pickup_dates = st.dates(min_value=date(1900, 1, 1), max_value=date(2100, 12, 31))
pickup_times = st.times().map(lambda t: t.replace(microsecond=0))
recorded_costs = st.one_of(
    st.none(),
    st.floats(min_value=0, max_value=1e9, allow_nan=False),
    st.integers(min_value=0, max_value=10 ** 9),
    st.text(alphabet="abcxyz ", max_size=8),
)
frozen_clock = lambda: datetime(2025, 6, 15, 9, 30, tzinfo=timezone.utc)  # noqa: E731


@pytest.mark.parametrize("status", list(ExternalStatus))
def test_external_status_round_trips(status):
    """Test every upstream status survives translation there and back."""
    assert internal_to_external_status(external_to_internal_status(status.value)) == status.value


@given(code=st.text(max_size=20).filter(lambda s: s not in EXTERNAL_TO_INTERNAL_STATUS))
def test_unknown_status_passes_through(code):
    """Test translation never invents a code for unmapped input."""
    assert external_to_internal_status(code) == code


@given(urgency=st.sampled_from(list(InternalUrgency)))
def test_urgency_translation_is_inverse(urgency):
    external = internal_to_external_urgency(urgency.value)
    assert external in {u.value for u in ExternalUrgency}
    assert external_to_internal_urgency(external) == urgency.value


@given(a=coordinates, b=coordinates)
def test_distance_is_symmetric_and_bounded(a, b):
    """Test distance is symmetric, non-negative and at most half the circumference."""
    forward = haversine_km(a, b)
    assert forward == haversine_km(b, a)
    assert 0 <= forward <= 20015.09 + 0.01


@given(a=coordinates)
def test_distance_to_self_is_zero(a):
    assert haversine_km(a, a) == 0


@given(
    shorter=st.floats(min_value=-1e6, max_value=1e6, allow_nan=False),
    extra=st.floats(min_value=0, max_value=1e6, allow_nan=False),
)
def test_cost_is_monotonic_and_non_negative(shorter, extra):
    assert 0 <= estimate_cost(shorter) <= estimate_cost(shorter + extra)


@given(day=pickup_dates, wall=pickup_times)
def test_split_inverts_join(day, wall):
    """Test joining upstream pickup fields then splitting gives the same fields back."""
    joined = join_pickup_window(day.isoformat(), wall.isoformat(), clock=frozen_clock)
    assert joined.tzinfo is not None
    assert split_pickup_window(joined) == (day.isoformat(), wall.isoformat())


@given(moment=st.datetimes(
    min_value=datetime(1900, 1, 1),
    max_value=datetime(2100, 12, 31),
    timezones=st.just(timezone.utc),
))
def test_join_inverts_split_to_the_second(moment):
    preferred_date, preferred_time = split_pickup_window(moment)
    rejoined = join_pickup_window(preferred_date, preferred_time, clock=frozen_clock)
    assert rejoined == moment.replace(microsecond=0)


@given(estimated=recorded_costs, actual=recorded_costs)
def test_value_is_never_negative_for_non_negative_costs(estimated, actual):
    booking = InternalBooking(id="b", estimated_cost=estimated, actual_cost=actual)
    assert estimate_booking_value(booking, {}) >= 0


@given(costs=st.lists(st.floats(min_value=-1e12, max_value=1e12, allow_nan=False), max_size=30))
def test_portfolio_total_ignores_booking_order(costs):
    """Test permuting the booking list never changes the total."""
    bookings = [InternalBooking(id=str(i), estimated_cost=c) for i, c in enumerate(costs)]
    total = portfolio_total(bookings, {})

    assert portfolio_total(list(reversed(bookings)), {}) == total
    assert portfolio_total(sorted(bookings, key=lambda b: b.estimated_cost), {}) == total
