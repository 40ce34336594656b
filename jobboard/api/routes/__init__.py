"""
Page Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.auth_routes import router as auth_router
from jobboard.api.routes.dashboard_routes import router as dashboard_router
from jobboard.api.routes.user_routes import router as user_router
from jobboard.api.routes.vacancy_routes import router as vacancy_router
from jobboard.api.routes.application_routes import router as application_router
from jobboard.api.routes.profile_routes import router as profile_router

# Main router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
api_router.include_router(user_router)
api_router.include_router(vacancy_router)
api_router.include_router(application_router)
api_router.include_router(profile_router)
