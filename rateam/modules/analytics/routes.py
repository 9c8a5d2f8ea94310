from fastapi import APIRouter, Depends
from rateam.database.supabase_client import get_admin_supabase
from rateam.modules.analytics.schemas import AnalyticsResponse
from rateam.modules.analytics.service import AnalyticsService
from rateam.modules.auth.schemas import CurrentUser
from rateam.core.dependencies import require_permission
from supabase import Client

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(supabase: Client = Depends(get_admin_supabase)) -> AnalyticsService:
    return AnalyticsService(supabase)


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    current_user: CurrentUser = Depends(require_permission("analytics:read")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Admin dashboard totals and 30-day growth"""
    return service.get_analytics()
