"""Booking valuation and portfolio aggregation.

A booking's value comes from the first tier that yields one:

    geographic         cost of the great-circle route between its hospitals (> 0)
    recorded_estimate  its recorded estimated cost (numeric, non-zero)
    recorded_actual    its recorded actual cost (numeric, non-zero)
    none               0

Nothing here raises; missing hospitals, missing coordinates and junk cost
fields all fall through to the next tier, and the last tier always answers.
Sums use math.fsum so the order of the booking list never changes a total.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import timezone, tzinfo
from decimal import Decimal
from typing import Any, Callable, Optional

from ..core.observability import metrics_collector
from ..models.booking import PENDING_STATUSES, InternalStatus
from ..schemas.booking import InternalBooking
from ..schemas.hospital import Hospital
from ..schemas.valuation import BookingValuation, PortfolioSummary, RevenueBucket, ValueSource
from .geo_cost import DEFAULT_RATE_PER_KM, EARTH_RADIUS_KM, haversine_km, estimate_cost, round_half_up
from .temporal import Clock, parse_instant, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TierResult:
    value: float
    distance_km: Optional[float] = None


# matched by equality; passed-through status values may be unhashable
_PENDING_CODES = tuple(s.value for s in PENDING_STATUSES)

Resolver = Callable[[InternalBooking, Mapping[str, Hospital], float, float], Optional[_TierResult]]


def as_amount(value: Any) -> Optional[float]:
    """
    Read a recorded cost field.

    Numbers and numeric strings count; booleans, NaN, infinities, zero and
    anything else do not.
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, Decimal, str)):
        return None
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(amount) or amount == 0:
        return None
    return amount


def index_hospitals(hospitals: Iterable[Hospital]) -> dict[str, Hospital]:
    """Map hospital IDs to hospitals; the first of any duplicated ID wins."""
    indexed: dict[str, Hospital] = {}
    for hospital in hospitals:
        indexed.setdefault(hospital.id, hospital)
    return indexed


def _geographic(booking, hospitals_by_id, rate, radius_km):
    origin = hospitals_by_id.get(booking.origin_hospital_id) if booking.origin_hospital_id else None
    destination = hospitals_by_id.get(booking.destination_hospital_id) if booking.destination_hospital_id else None
    if origin is None or destination is None:
        return None
    if origin.coordinates is None or destination.coordinates is None:
        return None

    distance = haversine_km(origin.coordinates, destination.coordinates, radius_km=radius_km)
    cost = estimate_cost(distance, rate=rate)
    if cost <= 0:
        return None
    return _TierResult(value=cost, distance_km=distance)


def _recorded_estimate(booking, hospitals_by_id, rate, radius_km):
    amount = as_amount(booking.estimated_cost)
    return None if amount is None else _TierResult(value=amount)


def _recorded_actual(booking, hospitals_by_id, rate, radius_km):
    amount = as_amount(booking.actual_cost)
    return None if amount is None else _TierResult(value=amount)


def _nothing(booking, hospitals_by_id, rate, radius_km):
    return _TierResult(value=0)


FALLBACK_CHAIN: tuple[tuple[ValueSource, Resolver], ...] = (
    (ValueSource.GEOGRAPHIC, _geographic),
    (ValueSource.RECORDED_ESTIMATE, _recorded_estimate),
    (ValueSource.RECORDED_ACTUAL, _recorded_actual),
    (ValueSource.NONE, _nothing),
)


def value_booking(
    booking: InternalBooking,
    hospitals_by_id: Mapping[str, Hospital],
    *,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> BookingValuation:
    """
    Value one booking by walking the fallback chain.

    Args:
        booking: Booking to value
        hospitals_by_id: Known hospitals keyed by ID
        rate: Tariff in currency units per km
        radius_km: Sphere radius for the distance

    Returns:
        The value together with the tier that produced it
    """
    for source, resolve in FALLBACK_CHAIN:
        result = resolve(booking, hospitals_by_id, rate, radius_km)
        if result is not None:
            metrics_collector.record_value_source(source.value)
            return BookingValuation(
                booking_id=booking.id,
                value=result.value,
                source=source,
                distance_km=result.distance_km,
            )

    return BookingValuation(booking_id=booking.id, value=0, source=ValueSource.NONE)


def estimate_booking_value(
    booking: InternalBooking,
    hospitals_by_id: Mapping[str, Hospital],
    *,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Monetary value of one booking in currency units."""
    return value_booking(booking, hospitals_by_id, rate=rate, radius_km=radius_km).value


def portfolio_total(
    bookings: Iterable[InternalBooking],
    hospitals_by_id: Mapping[str, Hospital],
    *,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Sum of booking values; independent of booking order."""
    return math.fsum(
        estimate_booking_value(b, hospitals_by_id, rate=rate, radius_km=radius_km) for b in bookings
    )


def portfolio_summary(
    bookings: Iterable[InternalBooking],
    hospitals_by_id: Mapping[str, Hospital],
    *,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> PortfolioSummary:
    """
    Headline dashboard statistics.

    Pending means ``requested`` or ``clinical_review``. Efficiency is the
    completed share as a whole percentage. Average flight time treats
    non-numeric recorded times as 0.
    """
    bookings = list(bookings)
    total = len(bookings)
    completed = sum(1 for b in bookings if b.status == InternalStatus.COMPLETED.value)
    pending = sum(1 for b in bookings if b.status in _PENDING_CODES)
    flight_times = [as_amount(b.estimated_flight_time) or 0.0 for b in bookings]

    return PortfolioSummary(
        total_bookings=total,
        completed_bookings=completed,
        pending_bookings=pending,
        total_revenue=portfolio_total(bookings, hospitals_by_id, rate=rate, radius_km=radius_km),
        efficiency=int(round_half_up(completed / total * 100)) if total else 0,
        avg_flight_time=int(round_half_up(math.fsum(flight_times) / total)) if total else 0,
    )


def _month_labels(now, months: int) -> list[str]:
    labels = []
    year, month = now.year, now.month
    for _ in range(months):
        labels.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(labels))


def revenue_by_month(
    bookings: Iterable[InternalBooking],
    hospitals_by_id: Mapping[str, Hospital],
    *,
    clock: Clock = utc_now,
    tz: tzinfo = timezone.utc,
    months: int = 6,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> list[RevenueBucket]:
    """
    Revenue for the last ``months`` calendar months, oldest first.

    Months are keyed ``YYYY-MM`` in ``tz`` and end with the clock's current
    month. Every month in the window appears, with 0 when it has no bookings.
    Bookings without a readable ``requested_at``, or outside the window, are
    left out.
    """
    now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    labels = _month_labels(now.astimezone(tz), months)
    amounts: dict[str, list[float]] = {label: [] for label in labels}

    for booking in bookings:
        requested_at = parse_instant(booking.requested_at, tz=tz)
        if requested_at is None:
            continue
        try:
            local = requested_at.astimezone(tz)
        except (OverflowError, ValueError):
            continue
        label = f"{local.year:04d}-{local.month:02d}"
        if label in amounts:
            amounts[label].append(
                estimate_booking_value(booking, hospitals_by_id, rate=rate, radius_km=radius_km)
            )

    return [RevenueBucket(label=label, revenue=math.fsum(amounts[label])) for label in labels]


def revenue_by_origin_hospital(
    bookings: Iterable[InternalBooking],
    hospitals_by_id: Mapping[str, Hospital],
    *,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> list[RevenueBucket]:
    """Revenue per origin hospital name, in first-seen order; unresolvable origins are skipped."""
    amounts: dict[str, list[float]] = {}
    skipped = 0

    for booking in bookings:
        origin = hospitals_by_id.get(booking.origin_hospital_id) if booking.origin_hospital_id else None
        if origin is None:
            skipped += 1
            continue
        amounts.setdefault(origin.name, []).append(
            estimate_booking_value(booking, hospitals_by_id, rate=rate, radius_km=radius_km)
        )

    if skipped:
        logger.info("Bookings without a known origin left out of hospital revenue", extra={"skipped": skipped})

    return [RevenueBucket(label=name, revenue=math.fsum(values)) for name, values in amounts.items()]


class ValuationService:
    """Valuation operations bound to one hospital snapshot and tariff."""

    def __init__(
        self,
        hospitals: Iterable[Hospital],
        *,
        rate: float = DEFAULT_RATE_PER_KM,
        radius_km: float = EARTH_RADIUS_KM,
        clock: Clock = utc_now,
        tz: tzinfo = timezone.utc,
    ):
        self.hospitals_by_id = index_hospitals(hospitals)
        self.rate = rate
        self.radius_km = radius_km
        self.clock = clock
        self.tz = tz

    def value(self, booking: InternalBooking) -> BookingValuation:
        return value_booking(booking, self.hospitals_by_id, rate=self.rate, radius_km=self.radius_km)

    def value_all(self, bookings: Iterable[InternalBooking]) -> list[BookingValuation]:
        return [self.value(b) for b in bookings]

    def total(self, bookings: Iterable[InternalBooking]) -> float:
        return portfolio_total(bookings, self.hospitals_by_id, rate=self.rate, radius_km=self.radius_km)

    def summary(self, bookings: Iterable[InternalBooking]) -> PortfolioSummary:
        return portfolio_summary(bookings, self.hospitals_by_id, rate=self.rate, radius_km=self.radius_km)

    def by_month(self, bookings: Iterable[InternalBooking], months: int = 6) -> list[RevenueBucket]:
        return revenue_by_month(
            bookings,
            self.hospitals_by_id,
            clock=self.clock,
            tz=self.tz,
            months=months,
            rate=self.rate,
            radius_km=self.radius_km,
        )

    def by_origin_hospital(self, bookings: Iterable[InternalBooking]) -> list[RevenueBucket]:
        return revenue_by_origin_hospital(
            bookings, self.hospitals_by_id, rate=self.rate, radius_km=self.radius_km
        )
