from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from golfnav.skill import (
    ShotCategory,
    SkillTier,
    club_suggestions,
    plausible_range,
    suggested_distances,
)

router = APIRouter(prefix="/api/skill", tags=["skill"])


class SkillDistancesOut(BaseModel):
    skillTier: str
    shotCategory: str
    suggestedDistances: List[int]
    clubSuggestions: List[str]
    minYards: int
    maxYards: int


@router.get("/distances", response_model=SkillDistancesOut)
def get_skill_distances(
    tier: str = Query(...), category: Optional[str] = Query(default=None)
) -> SkillDistancesOut:
    try:
        skill = SkillTier.parse(tier)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    shot_category = ShotCategory.parse(category)
    floor, ceiling = plausible_range(skill, shot_category)
    return SkillDistancesOut(
        skillTier=skill.value,
        shotCategory=shot_category.value,
        suggestedDistances=suggested_distances(skill, shot_category),
        clubSuggestions=club_suggestions(skill, shot_category),
        minYards=floor,
        maxYards=ceiling,
    )
