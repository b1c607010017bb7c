"""HTTP commands for the shot placement engine."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from golfnav.errors import AlreadyInFlight, InvalidCoordinate, NoActivePlacement, TargetTooFar
from golfnav.shots import ShotPlacementEngine

from ..deps import get_engine
from ..schemas import CreateShotIn, FixIn, PlacementOut, ShotStateOut, SkillContextIn

router = APIRouter(prefix="/api/shots", tags=["shots"])


def _state(engine: ShotPlacementEngine, *, changed: bool = True) -> ShotStateOut:
    view = engine.get_current_placement()
    return ShotStateOut(
        state=engine.current_state,
        placement=PlacementOut.from_view(view) if view is not None else None,
        changed=changed,
    )


@router.post("", response_model=PlacementOut, status_code=201)
def create_shot(
    body: CreateShotIn, engine: ShotPlacementEngine = Depends(get_engine)
) -> PlacementOut:
    try:
        view = engine.create_shot_placement(
            target=body.target.to_coordinate(),
            current_position=body.position.to_coordinate(),
            pin=body.pin.to_coordinate() if body.pin is not None else None,
            hole_number=body.holeNumber,
        )
    except AlreadyInFlight as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (InvalidCoordinate, TargetTooFar) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PlacementOut.from_view(view)


@router.post("/activate", response_model=PlacementOut)
def activate_shot(engine: ShotPlacementEngine = Depends(get_engine)) -> PlacementOut:
    try:
        view = engine.activate()
    except NoActivePlacement as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return PlacementOut.from_view(view)


@router.post("/cancel", response_model=ShotStateOut)
def cancel_shot(engine: ShotPlacementEngine = Depends(get_engine)) -> ShotStateOut:
    engine.cancel()
    return _state(engine)


@router.post("/location", response_model=ShotStateOut)
def post_location(
    body: FixIn, engine: ShotPlacementEngine = Depends(get_engine)
) -> ShotStateOut:
    try:
        position = body.to_coordinate()
    except InvalidCoordinate as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    snapshot = engine.on_location_update(position)
    if snapshot is None:
        return _state(engine, changed=False)
    # A completed snapshot is reported as-is; the engine has already reset.
    return ShotStateOut(
        state=snapshot.state,
        placement=(
            PlacementOut.from_view(snapshot.placement)
            if snapshot.placement is not None
            else None
        ),
    )


@router.post("/skill", response_model=ShotStateOut)
def post_skill_context(
    body: SkillContextIn, engine: ShotPlacementEngine = Depends(get_engine)
) -> ShotStateOut:
    try:
        engine.update_skill_context(body.skillTier, body.shotCategory)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _state(engine)


@router.get("/current", response_model=ShotStateOut)
def get_current(engine: ShotPlacementEngine = Depends(get_engine)) -> ShotStateOut:
    return _state(engine, changed=False)
