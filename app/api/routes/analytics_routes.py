"""
Analytics Routes

GET /analytics - Total students, average grade by subject, recent additions
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_analytics_service
from app.core.auth import get_current_user
from app.schemas.schemas import AnalyticsResponse, ApiResponse
from app.services.analytics_service import AnalyticsService

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ApiResponse[AnalyticsResponse], response_model_exclude_none=True)
def get_analytics(service: AnalyticsService = Depends(get_analytics_service)):
    """Dashboard statistics computed from the current roster."""
    analytics = AnalyticsResponse(**service.compute())
    return ApiResponse(data=analytics, message="Analytics retrieved successfully")
