from fastapi import APIRouter, Depends

from neurorelief.core.error_handling import internal_errors
from neurorelief.dependencies import AuthContext, get_analytics, get_auth_context
from neurorelief.schemas.report import WeeklyStatsResponse
from neurorelief.services.analytics import AnalyticsService

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/weekly", response_model=WeeklyStatsResponse)
def get_weekly_stats(
    auth: AuthContext = Depends(get_auth_context),
    analytics: AnalyticsService = Depends(get_analytics)
):
    """Episode/medication counts, mean duration and daily peak intensity for the last 7 days"""
    with internal_errors("fetch weekly stats"):
        return analytics.get_weekly_stats(auth.user_id)
