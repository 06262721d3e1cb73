"""API v1 router and endpoint organization."""

from fastapi import APIRouter

from app.api.v1.endpoints import content_score

router = APIRouter(prefix="/api/v1", tags=["v1"])

# Include domain-specific routers
router.include_router(
    content_score.router,
    prefix="/content-score",
    tags=["Content Score"],
)
