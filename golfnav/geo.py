"""Great-circle helpers on a spherical Earth."""

from __future__ import annotations

import math
from typing import Optional, Protocol

from .models import Coordinate, validate_lat_lon

EARTH_RADIUS_M = 6_371_000.0
METERS_TO_YARDS = 1.09361


class _LatLon(Protocol):
    latitude: float
    longitude: float


def distance_meters(a: _LatLon, b: _LatLon) -> float:
    """Compute the haversine distance between two points in meters."""

    validate_lat_lon(a.latitude, a.longitude)
    validate_lat_lon(b.latitude, b.longitude)
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def bearing_degrees(a: _LatLon, b: _LatLon) -> float:
    """Initial bearing from ``a`` to ``b`` in degrees, clockwise from north.

    Identical points have no defined bearing; 0.0 is returned.
    """

    validate_lat_lon(a.latitude, a.longitude)
    validate_lat_lon(b.latitude, b.longitude)
    if a.latitude == b.latitude and a.longitude == b.longitude:
        return 0.0
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # -0.0 % 360 and tiny negatives can round up to exactly 360.
    if bearing >= 360.0:
        return 0.0
    return bearing


def destination_point(
    origin: Coordinate,
    bearing_deg: float,
    distance_m: float,
    captured_at_ms: Optional[int] = None,
) -> Coordinate:
    """Return the point ``distance_m`` away from ``origin`` along ``bearing_deg``."""

    if distance_m < 0:
        raise ValueError("distance_m must be non-negative")
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)
    theta = math.radians(bearing_deg % 360.0)
    delta = distance_m / EARTH_RADIUS_M

    lat2 = math.asin(
        math.sin(lat1) * math.cos(delta)
        + math.cos(lat1) * math.sin(delta) * math.cos(theta)
    )
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    lon_deg = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    return Coordinate(
        latitude=max(-90.0, min(90.0, math.degrees(lat2))),
        longitude=lon_deg,
        accuracy_m=origin.accuracy_m,
        captured_at_ms=origin.captured_at_ms if captured_at_ms is None else captured_at_ms,
    )


def meters_to_yards(meters: float) -> float:
    return meters * METERS_TO_YARDS


def yards_to_meters(yards: float) -> float:
    return yards / METERS_TO_YARDS


__all__ = [
    "EARTH_RADIUS_M",
    "METERS_TO_YARDS",
    "bearing_degrees",
    "destination_point",
    "distance_meters",
    "meters_to_yards",
    "validate_lat_lon",
    "yards_to_meters",
]
