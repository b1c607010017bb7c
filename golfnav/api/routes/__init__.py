from .proximity import router as proximity_router
from .shots import router as shots_router
from .skill import router as skill_router

__all__ = ["proximity_router", "shots_router", "skill_router"]
