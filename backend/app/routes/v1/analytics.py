# backend/app/routes/v1/analytics.py
"""
Analytics routes - API v1

Endpoints:
    GET /dashboard/analytics → Calling trainer's dashboard rollups
"""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies.auth import get_current_trainer
from ...api.dependencies.services import get_analytics_service
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.analytics import DashboardAnalyticsResponse
from ...services.analytics_service import AnalyticsService
from ._errors import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics-v1"])


@router.get("/dashboard/analytics", response_model=DashboardAnalyticsResponse)
def get_dashboard_analytics(
    current_user: User = Depends(get_current_trainer),
    service: AnalyticsService = Depends(get_analytics_service),
) -> DashboardAnalyticsResponse:
    """
    Weekly, monthly and yearly booked-vs-attended summaries with charts and
    trends, popular slots per month, the next session and hours this week.
    """
    try:
        return service.dashboard(current_user.id)
    except DomainException as e:
        handle_domain_exception(e)
