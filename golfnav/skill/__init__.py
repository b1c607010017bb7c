from .advisor import (
    AMBITIOUS_FACTOR,
    DistanceCheck,
    SkillAdvisor,
    SkillVerdict,
    build_verdict,
    club_suggestions,
    plausible_range,
    suggested_distances,
    validate_distance,
)
from .tables import DISTANCE_TABLE, DistanceProfile, ShotCategory, SkillTier

__all__ = [
    "AMBITIOUS_FACTOR",
    "DISTANCE_TABLE",
    "DistanceCheck",
    "DistanceProfile",
    "ShotCategory",
    "SkillAdvisor",
    "SkillTier",
    "SkillVerdict",
    "build_verdict",
    "club_suggestions",
    "plausible_range",
    "suggested_distances",
    "validate_distance",
]
