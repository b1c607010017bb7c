"""Request and response bodies for the HTTP surface."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from golfnav.models import Coordinate, ShotState
from golfnav.shots import ShotPlacementView
from golfnav.skill import SkillVerdict


class PointIn(BaseModel):
    lat: float
    lon: float
    accuracyM: Optional[float] = None
    capturedAtMs: int = 0

    def to_coordinate(self) -> Coordinate:
        return Coordinate(
            latitude=self.lat,
            longitude=self.lon,
            accuracy_m=self.accuracyM,
            captured_at_ms=self.capturedAtMs,
        )


class FixIn(PointIn):
    """A live GPS fix; the capture time orders fixes, so it is mandatory."""

    capturedAtMs: int


class PointOut(BaseModel):
    lat: float
    lon: float
    accuracyM: Optional[float] = None
    capturedAtMs: int = 0

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "PointOut":
        return cls(
            lat=coordinate.latitude,
            lon=coordinate.longitude,
            accuracyM=coordinate.accuracy_m,
            capturedAtMs=coordinate.captured_at_ms,
        )


def _point(coordinate: Optional[Coordinate]) -> Optional[PointOut]:
    return PointOut.from_coordinate(coordinate) if coordinate is not None else None


class ProximityIn(PointIn):
    thresholdM: Optional[float] = Field(default=None, gt=0)


class CreateShotIn(BaseModel):
    target: PointIn
    position: PointIn
    pin: Optional[PointIn] = None
    holeNumber: Optional[int] = Field(default=None, ge=1)


class SkillContextIn(BaseModel):
    skillTier: str
    shotCategory: Optional[str] = None


class PlacementOut(BaseModel):
    id: str
    state: ShotState
    target: PointOut
    origin: PointOut
    currentPosition: PointOut
    pin: Optional[PointOut] = None
    distanceToTargetM: float
    distanceToTargetYards: int
    distanceToPinM: Optional[float] = None
    distanceToPinYards: Optional[int] = None
    holeNumber: Optional[int] = None
    clubRecommendation: Optional[str] = None
    skillVerdict: Optional[SkillVerdict] = None
    landing: Optional[PointOut] = None
    fixQuality: str
    gpsStable: bool

    @classmethod
    def from_view(cls, view: ShotPlacementView) -> "PlacementOut":
        return cls(
            id=view.id,
            state=view.state,
            target=PointOut.from_coordinate(view.target),
            origin=PointOut.from_coordinate(view.origin),
            currentPosition=PointOut.from_coordinate(view.current_position),
            pin=_point(view.pin),
            distanceToTargetM=round(view.distance_to_target_m, 1),
            distanceToTargetYards=view.distance_to_target_yards,
            distanceToPinM=(
                round(view.distance_to_pin_m, 1)
                if view.distance_to_pin_m is not None
                else None
            ),
            distanceToPinYards=view.distance_to_pin_yards,
            holeNumber=view.hole_number,
            clubRecommendation=view.club_recommendation,
            skillVerdict=view.skill_verdict,
            landing=_point(view.landing),
            fixQuality=view.fix_quality.value,
            gpsStable=view.gps_stable,
        )


class ShotStateOut(BaseModel):
    state: ShotState
    placement: Optional[PlacementOut] = None
    changed: bool = True


__all__ = [
    "CreateShotIn",
    "FixIn",
    "PlacementOut",
    "PointIn",
    "PointOut",
    "ProximityIn",
    "ShotStateOut",
    "SkillContextIn",
]
