"""
API Router — Combines all endpoint groups.

Advisor (9 endpoints):  /api/v1/resampling/{recommend,weights,blend-color,fold-color,
                        fold-analysis,params/update,phase-charts/{chart},palette,health}
"""

from fastapi import APIRouter

from app.api.v1.advisor import router as advisor_router

api_router = APIRouter()

api_router.include_router(
    advisor_router,
    prefix="/resampling",
    tags=["Resampling Advisor"],
)
