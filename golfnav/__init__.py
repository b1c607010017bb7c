"""Shot placement and course proximity engine."""

from .errors import (
    AdvisoryUnavailable,
    AlreadyInFlight,
    GolfNavError,
    InvalidCoordinate,
    NoActivePlacement,
    TargetTooFar,
)
from .geo import bearing_degrees, destination_point, distance_meters
from .models import Coordinate, CourseAnchor, ShotState
from .proximity import ProximityClassifier, ProximityResult, classify
from .shots import ShotPlacementEngine, ShotPlacementView
from .skill import ShotCategory, SkillTier, SkillVerdict

__version__ = "0.1.0"

__all__ = [
    "AdvisoryUnavailable",
    "AlreadyInFlight",
    "Coordinate",
    "CourseAnchor",
    "GolfNavError",
    "InvalidCoordinate",
    "NoActivePlacement",
    "ProximityClassifier",
    "ProximityResult",
    "ShotCategory",
    "ShotPlacementEngine",
    "ShotPlacementView",
    "ShotState",
    "SkillTier",
    "SkillVerdict",
    "TargetTooFar",
    "bearing_degrees",
    "classify",
    "destination_point",
    "distance_meters",
]
