"""Course proximity classification."""

from .classifier import (
    DEFAULT_THRESHOLD_M,
    NearestCourse,
    ProximityClassifier,
    ProximityResult,
    classify,
)
from .directory import CourseDirectory, InMemoryCourseDirectory, load_anchors

__all__ = [
    "DEFAULT_THRESHOLD_M",
    "CourseDirectory",
    "InMemoryCourseDirectory",
    "NearestCourse",
    "ProximityClassifier",
    "ProximityResult",
    "classify",
    "load_anchors",
]
