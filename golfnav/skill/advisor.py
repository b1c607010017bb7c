"""Skill-aware distance suggestions and plausibility checks."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from golfnav.geo import meters_to_yards

from .tables import ShotCategory, SkillTier, lookup

# Anything beyond this multiple of the tier's longest typical shot is flagged.
AMBITIOUS_FACTOR = 1.5


class DistanceCheck(BaseModel):
    is_realistic: bool = Field(alias="isRealistic")
    note: Optional[str] = None
    closest_typical_yards: Optional[int] = Field(
        default=None, alias="closestTypicalYards"
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class SkillVerdict(BaseModel):
    suggested_distances: List[int] = Field(alias="suggestedDistances")
    club_suggestions: List[str] = Field(alias="clubSuggestions")
    is_realistic: bool = Field(alias="isRealistic")
    note: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def suggested_distances(
    tier: SkillTier | str, category: ShotCategory | str | None = None
) -> List[int]:
    """Typical distances in yards, shortest first."""

    return list(lookup(tier, category).typical_yards)


def club_suggestions(
    tier: SkillTier | str, category: ShotCategory | str | None = None
) -> List[str]:
    return list(lookup(tier, category).clubs)


def plausible_range(
    tier: SkillTier | str, category: ShotCategory | str | None = None
) -> tuple[int, int]:
    """Inclusive (floor, ceiling) in yards a tier can plausibly hit."""

    profile = lookup(tier, category)
    return profile.shortest // 2, int(profile.longest * AMBITIOUS_FACTOR)


def validate_distance(
    observed_yards: int,
    tier: SkillTier | str,
    category: ShotCategory | str | None = None,
) -> DistanceCheck:
    """Flag distances far outside what the tier typically hits."""

    if isinstance(observed_yards, bool) or not isinstance(observed_yards, int):
        raise TypeError("observed_yards must be an integer")
    if observed_yards < 0:
        raise ValueError("observed_yards must be non-negative")

    skill = SkillTier.parse(tier)
    profile = lookup(skill, category)
    floor, ceiling = plausible_range(skill, category)
    if floor <= observed_yards <= ceiling:
        return DistanceCheck(is_realistic=True)

    closest = min(profile.typical_yards, key=lambda typical: abs(typical - observed_yards))
    if observed_yards < floor:
        note = (
            f"For {skill.value} level, consider a longer shot "
            f"({profile.shortest}+ yards)."
        )
    else:
        note = (
            f"That's quite ambitious for {skill.value} level. "
            f"Try around {closest} yards."
        )
    return DistanceCheck(is_realistic=False, note=note, closest_typical_yards=closest)


def build_verdict(
    distance_m: float,
    tier: SkillTier | str,
    category: ShotCategory | str | None = None,
) -> SkillVerdict:
    """Verdict for a distance measured in meters (converted to yards here)."""

    if distance_m < 0:
        raise ValueError("distance_m must be non-negative")
    observed_yards = int(round(meters_to_yards(distance_m)))
    check = validate_distance(observed_yards, tier, category)
    return SkillVerdict(
        suggested_distances=suggested_distances(tier, category),
        club_suggestions=club_suggestions(tier, category),
        is_realistic=check.is_realistic,
        note=check.note,
    )


class SkillAdvisor:
    """Object facade so callers can swap in a different advisor."""

    def suggested_distances(
        self, tier: SkillTier | str, category: ShotCategory | str | None = None
    ) -> List[int]:
        return suggested_distances(tier, category)

    def validate_distance(
        self,
        observed_yards: int,
        tier: SkillTier | str,
        category: ShotCategory | str | None = None,
    ) -> DistanceCheck:
        return validate_distance(observed_yards, tier, category)

    def verdict(
        self,
        distance_m: float,
        tier: SkillTier | str,
        category: ShotCategory | str | None = None,
    ) -> SkillVerdict:
        return build_verdict(distance_m, tier, category)


__all__ = [
    "AMBITIOUS_FACTOR",
    "DistanceCheck",
    "SkillAdvisor",
    "SkillVerdict",
    "build_verdict",
    "club_suggestions",
    "plausible_range",
    "suggested_distances",
    "validate_distance",
]
