"""Shot placement engine and its advisory collaborators."""

from .advisory import (
    ClubAdvisor,
    ClubRequest,
    DEFAULT_CARRIES_M,
    HttpClubAdvisor,
    LocalClubAdvisor,
)
from .engine import ShotPlacementEngine
from .placement import EngineSnapshot, ShotPlacement, ShotPlacementView

__all__ = [
    "ClubAdvisor",
    "ClubRequest",
    "DEFAULT_CARRIES_M",
    "EngineSnapshot",
    "HttpClubAdvisor",
    "LocalClubAdvisor",
    "ShotPlacement",
    "ShotPlacementEngine",
    "ShotPlacementView",
]
