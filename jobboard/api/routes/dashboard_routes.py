"""
Dashboard Routes

GET /dashboard - Role-specific dashboard (admin, manager, candidate)
GET /metrics - Charts and statistics (admin, manager)
"""

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_api, require_route
from jobboard.schemas.schemas import DashboardView, MetricsView, User
from jobboard.services.api_client import ApiClient
from jobboard.services.view_service import build_dashboard, build_metrics

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardView)
async def dashboard(
    user: User = Depends(require_route("dashboard")),
    api: ApiClient = Depends(get_api),
):
    """Dashboard for the current role. Widgets that fail are listed in `failedWidgets`."""
    return await build_dashboard(api, user)


@router.get("/metrics", response_model=MetricsView)
async def metrics(
    user: User = Depends(require_route("metrics")),
    api: ApiClient = Depends(get_api),
):
    """Vacancy, application and (admin only) user statistics."""
    return await build_metrics(api, user)
