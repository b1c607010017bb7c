from __future__ import annotations

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
)

REGISTRY = CollectorRegistry()

SHOT_TRANSITIONS = Counter(
    "golfnav_shot_transitions_total",
    "Shot placement state transitions",
    ["state"],
    registry=REGISTRY,
)
LOCATION_UPDATES = Counter(
    "golfnav_location_updates_total",
    "Location fixes received by the shot engine, by outcome",
    ["outcome"],
    registry=REGISTRY,
)
ADVISORY_RESULTS = Counter(
    "golfnav_advisory_results_total",
    "Club recommendation results, by outcome",
    ["outcome"],
    registry=REGISTRY,
)
PROXIMITY_CHECKS = Counter(
    "golfnav_proximity_checks_total",
    "Course proximity classifications, by result",
    ["result"],
    registry=REGISTRY,
)


async def metrics_app(_req: Request | None = None) -> Response:
    data = generate_latest(REGISTRY)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "ADVISORY_RESULTS",
    "LOCATION_UPDATES",
    "PROXIMITY_CHECKS",
    "REGISTRY",
    "SHOT_TRANSITIONS",
    "metrics_app",
]
