"""Value types shared by the proximity classifier and the shot engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidCoordinate


def validate_lat_lon(latitude: float, longitude: float) -> None:
    """Raise :class:`InvalidCoordinate` unless both angles are in range."""

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidCoordinate(f"non-finite coordinate ({latitude}, {longitude})")
    if not -90.0 <= latitude <= 90.0:
        raise InvalidCoordinate(f"latitude {latitude} outside [-90, 90]")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidCoordinate(f"longitude {longitude} outside [-180, 180]")


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A single GPS fix.

    Attributes:
        latitude: Decimal degrees in [-90, 90].
        longitude: Decimal degrees in [-180, 180].
        accuracy_m: Horizontal accuracy radius reported by the device, if any.
        captured_at_ms: Unix epoch milliseconds of the fix.
    """

    latitude: float
    longitude: float
    accuracy_m: Optional[float] = None
    captured_at_ms: int = 0

    def __post_init__(self) -> None:
        validate_lat_lon(self.latitude, self.longitude)
        if self.accuracy_m is not None and not (
            math.isfinite(self.accuracy_m) and self.accuracy_m >= 0
        ):
            raise InvalidCoordinate(f"accuracy {self.accuracy_m} must be >= 0")


@dataclass(frozen=True, slots=True)
class CourseAnchor:
    """One of the user's saved courses, reduced to a single anchor point."""

    course_id: str
    display_name: str
    coordinate: Coordinate


class ShotState(str, Enum):
    INACTIVE = "inactive"
    PLACED = "placed"
    ACTIVATED = "activated"
    COMPLETED = "completed"


__all__ = ["Coordinate", "CourseAnchor", "ShotState", "validate_lat_lon"]
