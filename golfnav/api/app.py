from __future__ import annotations

from fastapi import APIRouter, FastAPI, Request

from golfnav.metrics import metrics_app

from .routes import proximity_router, shots_router, skill_router

app = FastAPI(title="golfnav")

_metrics_router = APIRouter()


@_metrics_router.get("/metrics", include_in_schema=False)
async def _metrics_endpoint(request: Request):
    return await metrics_app(request)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(_metrics_router)
app.include_router(proximity_router)
app.include_router(shots_router)
app.include_router(skill_router)
