"""The mutable shot placement record and the immutable views handed out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from golfnav.geo import meters_to_yards
from golfnav.gps import FixQuality
from golfnav.models import Coordinate, ShotState
from golfnav.skill import SkillVerdict


@dataclass(frozen=True)
class ShotPlacementView:
    id: str
    generation: int
    state: ShotState
    target: Coordinate
    origin: Coordinate
    current_position: Coordinate
    distance_to_target_m: float
    pin: Optional[Coordinate] = None
    distance_to_pin_m: Optional[float] = None
    hole_number: Optional[int] = None
    club_recommendation: Optional[str] = None
    skill_verdict: Optional[SkillVerdict] = None
    landing: Optional[Coordinate] = None
    completed_reason: Optional[str] = None
    fix_quality: FixQuality = FixQuality.UNKNOWN
    gps_stable: bool = False

    @property
    def distance_to_target_yards(self) -> int:
        return int(round(meters_to_yards(self.distance_to_target_m)))

    @property
    def distance_to_pin_yards(self) -> Optional[int]:
        if self.distance_to_pin_m is None:
            return None
        return int(round(meters_to_yards(self.distance_to_pin_m)))


@dataclass(frozen=True)
class EngineSnapshot:
    sequence: int
    state: ShotState
    placement: Optional[ShotPlacementView] = None


@dataclass(slots=True)
class ShotPlacement:
    """Engine-owned record for the one shot in flight.

    ``origin`` is fixed at creation; distances are only ever written by the
    engine's recomputation from ``current_position``.
    """

    id: str
    generation: int
    target: Coordinate
    origin: Coordinate
    pin: Optional[Coordinate] = None
    hole_number: Optional[int] = None
    state: ShotState = ShotState.PLACED
    current_position: Optional[Coordinate] = None
    distance_to_target_m: float = 0.0
    distance_to_pin_m: Optional[float] = None
    club_recommendation: Optional[str] = None
    skill_verdict: Optional[SkillVerdict] = None
    landing: Optional[Coordinate] = None
    activated_at: Optional[float] = None
    completed_reason: Optional[str] = None
    fix_quality: FixQuality = field(default=FixQuality.UNKNOWN)
    gps_stable: bool = False

    def __setattr__(self, name: str, value: object) -> None:
        if name == "origin":
            try:
                object.__getattribute__(self, "origin")
            except AttributeError:
                pass
            else:
                raise AttributeError("origin is immutable once a placement exists")
        object.__setattr__(self, name, value)

    def view(self) -> ShotPlacementView:
        return ShotPlacementView(
            id=self.id,
            generation=self.generation,
            state=self.state,
            target=self.target,
            origin=self.origin,
            current_position=self.current_position or self.origin,
            distance_to_target_m=self.distance_to_target_m,
            pin=self.pin,
            distance_to_pin_m=self.distance_to_pin_m,
            hole_number=self.hole_number,
            club_recommendation=self.club_recommendation,
            skill_verdict=self.skill_verdict,
            landing=self.landing,
            completed_reason=self.completed_reason,
            fix_quality=self.fix_quality,
            gps_stable=self.gps_stable,
        )


__all__ = ["EngineSnapshot", "ShotPlacement", "ShotPlacementView"]
