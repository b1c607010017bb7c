from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from golfnav.errors import InvalidCoordinate
from golfnav.proximity import ProximityClassifier, ProximityResult

from ..deps import get_proximity_classifier
from ..schemas import ProximityIn

router = APIRouter(prefix="/api", tags=["proximity"])


@router.post("/proximity", response_model=ProximityResult)
def post_proximity(
    body: ProximityIn,
    classifier: ProximityClassifier = Depends(get_proximity_classifier),
) -> ProximityResult:
    try:
        position = body.to_coordinate()
    except InvalidCoordinate as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return classifier.classify(position, threshold_m=body.thresholdM)
