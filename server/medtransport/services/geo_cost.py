"""Great-circle distance and the linear transport tariff.

Rounding is half-up (toward positive infinity at .5), which is how the
dashboards that consume these figures round. Non-finite input never raises:
distance comes back as NaN and cost as zero.
"""

import math
from typing import Optional

from ..schemas.hospital import Coordinate

EARTH_RADIUS_KM = 6371.0
DEFAULT_RATE_PER_KM = 1000


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up, e.g. 2.5 -> 3 and -2.5 -> -2."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def haversine_km(a: Coordinate, b: Coordinate, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Calculate great-circle distance between two points in kilometers.

    Uses the haversine formula on a sphere. The result is rounded to two
    decimals, is symmetric in its arguments and is 0 for identical points.

    Returns:
        Distance in km, or NaN when a coordinate is not a finite number
    """
    lat1_r = math.radians(a.lat)
    lat2_r = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)

    if not all(math.isfinite(v) for v in (lat1_r, lat2_r, dlat, dlng, radius_km)):
        return math.nan

    h = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2)
    h = min(max(h, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return round_half_up(radius_km * c, 2)


def estimate_cost(distance_km: float, *, rate: float = DEFAULT_RATE_PER_KM) -> int:
    """
    Price a distance with the fixed per-kilometer tariff.

    Monotonically non-decreasing in distance; 0 for zero, negative or
    non-finite distances.
    """
    if not math.isfinite(distance_km) or distance_km <= 0:
        return 0
    amount = distance_km * rate
    if not math.isfinite(amount):
        return 0
    return int(round_half_up(amount))


def route_cost(
    origin: Optional[Coordinate],
    destination: Optional[Coordinate],
    *,
    rate: float = DEFAULT_RATE_PER_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> tuple[Optional[float], int]:
    """
    Distance and cost of a route.

    Returns:
        ``(distance_km, cost)``; ``(None, 0)`` when either end is unlocated
    """
    if origin is None or destination is None:
        return None, 0
    distance = haversine_km(origin, destination, radius_km=radius_km)
    return distance, estimate_cost(distance, rate=rate)
