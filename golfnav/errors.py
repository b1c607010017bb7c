"""Error taxonomy for the shot-placement and proximity engine."""

from __future__ import annotations


class GolfNavError(Exception):
    """Base class for engine errors."""


class InvalidCoordinate(GolfNavError, ValueError):
    """Latitude/longitude (or accuracy) outside the valid range."""


class AlreadyInFlight(GolfNavError):
    """A placement is already placed or activated."""


class NoActivePlacement(GolfNavError):
    """No placement exists in the state the operation requires."""


class TargetTooFar(GolfNavError, ValueError):
    """The selected target is beyond a realistic shot distance."""

    def __init__(self, distance_m: float, limit_m: float) -> None:
        super().__init__(
            f"shot placement too far: {distance_m:.0f} m (limit {limit_m:.0f} m)"
        )
        self.distance_m = distance_m
        self.limit_m = limit_m


class AdvisoryUnavailable(GolfNavError):
    """The club-recommendation or skill advisory call failed or timed out."""


__all__ = [
    "AdvisoryUnavailable",
    "AlreadyInFlight",
    "GolfNavError",
    "InvalidCoordinate",
    "NoActivePlacement",
    "TargetTooFar",
]
