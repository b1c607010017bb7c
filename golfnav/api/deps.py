from __future__ import annotations

import logging
from functools import lru_cache

from golfnav.config import get_settings
from golfnav.proximity import InMemoryCourseDirectory, ProximityClassifier, load_anchors
from golfnav.shots import HttpClubAdvisor, LocalClubAdvisor, ShotPlacementEngine
from golfnav.shots.advisory import ClubAdvisor

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_course_directory() -> InMemoryCourseDirectory:
    settings = get_settings()
    if not settings.courses_file:
        return InMemoryCourseDirectory()
    anchors = load_anchors(settings.courses_file)
    log.info("loaded %d course anchors from %s", len(anchors), settings.courses_file)
    return InMemoryCourseDirectory(anchors)


@lru_cache(maxsize=1)
def get_proximity_classifier() -> ProximityClassifier:
    return ProximityClassifier(
        get_course_directory(), threshold_m=get_settings().proximity_threshold_m
    )


@lru_cache(maxsize=1)
def get_engine() -> ShotPlacementEngine:
    settings = get_settings()
    advisor: ClubAdvisor
    if settings.advisor_url:
        advisor = HttpClubAdvisor(settings.advisor_url, timeout_s=settings.advisor_timeout_s)
    else:
        advisor = LocalClubAdvisor()
    return ShotPlacementEngine(advisor, settings=settings)


__all__ = ["get_course_directory", "get_engine", "get_proximity_classifier"]
