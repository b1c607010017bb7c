from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from golfnav.geo import distance_meters
from golfnav.metrics import PROXIMITY_CHECKS
from golfnav.models import Coordinate, CourseAnchor

from .directory import CourseDirectory

DEFAULT_THRESHOLD_M = 1600.0

logger = logging.getLogger(__name__)


class NearestCourse(BaseModel):
    course_id: str = Field(alias="courseId")
    display_name: str = Field(alias="displayName")
    distance_m: float = Field(alias="distanceMeters")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ProximityResult(BaseModel):
    in_range: Dict[str, bool] = Field(default_factory=dict, alias="perCourseInRange")
    nearest: Optional[NearestCourse] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def classify(
    position: Coordinate,
    anchors: Sequence[CourseAnchor],
    threshold_m: float = DEFAULT_THRESHOLD_M,
) -> ProximityResult:
    """Decide which saved courses are within ``threshold_m`` of ``position``.

    The nearest in-range anchor wins; on equal distances the first anchor in
    input order is kept.
    """

    in_range: Dict[str, bool] = {}
    best: Optional[tuple[CourseAnchor, float]] = None
    for anchor in anchors:
        distance = distance_meters(position, anchor.coordinate)
        inside = distance <= threshold_m
        in_range[anchor.course_id] = in_range.get(anchor.course_id, False) or inside
        if inside and (best is None or distance < best[1]):
            best = (anchor, distance)

    nearest: Optional[NearestCourse] = None
    if best is not None:
        anchor, distance = best
        nearest = NearestCourse(
            course_id=anchor.course_id,
            display_name=anchor.display_name,
            distance_m=distance,
        )
    PROXIMITY_CHECKS.labels(result="match" if nearest else "none").inc()
    return ProximityResult(in_range=in_range, nearest=nearest)


class ProximityClassifier:
    """Binds :func:`classify` to a course directory and configured threshold."""

    def __init__(
        self,
        directory: CourseDirectory,
        threshold_m: float = DEFAULT_THRESHOLD_M,
    ) -> None:
        self._directory = directory
        self.threshold_m = float(threshold_m)

    def classify(
        self,
        position: Coordinate,
        anchors: Optional[Sequence[CourseAnchor]] = None,
        threshold_m: Optional[float] = None,
    ) -> ProximityResult:
        if anchors is None:
            anchors = self._directory.list_anchors()
        threshold = self.threshold_m if threshold_m is None else threshold_m
        result = classify(position, anchors, threshold)
        if result.nearest is not None:
            logger.debug(
                "position within %.0f m of course %s",
                result.nearest.distance_m,
                result.nearest.course_id,
            )
        return result


__all__ = [
    "DEFAULT_THRESHOLD_M",
    "NearestCourse",
    "ProximityClassifier",
    "ProximityResult",
    "classify",
]
