"""Typical shot distances (yards) and club hints per skill tier and category."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class SkillTier(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"

    @classmethod
    def parse(cls, value: "SkillTier | str") -> "SkillTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown skill tier: {value!r}") from None


class ShotCategory(str, Enum):
    TEE = "tee"
    APPROACH = "approach"
    SHORT = "short"

    @classmethod
    def parse(cls, value: "ShotCategory | str | None") -> "ShotCategory":
        """Resolve a category, falling back to approach for unknown input."""

        if isinstance(value, cls):
            return value
        if value is None:
            return cls.APPROACH
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.APPROACH


@dataclass(frozen=True)
class DistanceProfile:
    typical_yards: Tuple[int, ...]
    clubs: Tuple[str, ...]

    @property
    def shortest(self) -> int:
        return self.typical_yards[0]

    @property
    def longest(self) -> int:
        return self.typical_yards[-1]


DISTANCE_TABLE: Dict[SkillTier, Dict[ShotCategory, DistanceProfile]] = {
    SkillTier.BEGINNER: {
        ShotCategory.TEE: DistanceProfile(
            (100, 120, 140, 160, 180), ("7-iron", "5-iron", "hybrid")
        ),
        ShotCategory.APPROACH: DistanceProfile(
            (60, 80, 100, 120, 140), ("wedge", "9-iron", "7-iron")
        ),
        ShotCategory.SHORT: DistanceProfile(
            (20, 35, 50, 65, 80), ("wedge", "pitching wedge", "9-iron")
        ),
    },
    SkillTier.INTERMEDIATE: {
        ShotCategory.TEE: DistanceProfile(
            (140, 160, 180, 200, 220), ("6-iron", "4-iron", "3-wood")
        ),
        ShotCategory.APPROACH: DistanceProfile(
            (80, 100, 120, 140, 160), ("9-iron", "6-iron", "4-iron")
        ),
        ShotCategory.SHORT: DistanceProfile(
            (30, 45, 60, 75, 90), ("lob wedge", "sand wedge", "9-iron")
        ),
    },
    SkillTier.ADVANCED: {
        ShotCategory.TEE: DistanceProfile(
            (180, 200, 220, 240, 260), ("5-iron", "3-iron", "driver")
        ),
        ShotCategory.APPROACH: DistanceProfile(
            (100, 120, 140, 160, 180), ("8-iron", "5-iron", "3-iron")
        ),
        ShotCategory.SHORT: DistanceProfile(
            (40, 55, 70, 85, 100), ("lob wedge", "gap wedge", "8-iron")
        ),
    },
    SkillTier.PROFESSIONAL: {
        ShotCategory.TEE: DistanceProfile(
            (220, 240, 260, 280, 300), ("4-iron", "driver", "3-wood")
        ),
        ShotCategory.APPROACH: DistanceProfile(
            (120, 145, 170, 195, 220), ("7-iron", "4-iron", "2-iron")
        ),
        ShotCategory.SHORT: DistanceProfile(
            (50, 70, 90, 110, 130), ("60° wedge", "52° wedge", "7-iron")
        ),
    },
}


def lookup(
    tier: SkillTier | str, category: ShotCategory | str | None = None
) -> DistanceProfile:
    return DISTANCE_TABLE[SkillTier.parse(tier)][ShotCategory.parse(category)]


__all__ = [
    "DISTANCE_TABLE",
    "DistanceProfile",
    "ShotCategory",
    "SkillTier",
    "lookup",
]
