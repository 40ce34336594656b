"""
Application Routes

GET /applications - Applications visible to the current role
PATCH /applications/{application_id}/status - Update status (admin, manager)
DELETE /applications/{application_id} - Delete (admin: any, candidate: own)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from jobboard.core.auth import get_api, require_roles, require_route
from jobboard.core.navigation import STAFF
from jobboard.schemas.schemas import (
    Application, ApplicationRow, ApplicationsView, ApplicationStatusUpdate, MessageResponse,
    Notice, User, UserRole
)
from jobboard.services.api_client import ApiClient
from jobboard.services.eligibility import can_delete_application
from jobboard.services.resource_service import ApplicationService
from jobboard.services.view_service import filter_applications

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=ApplicationsView)
async def list_applications(
    search: Optional[str] = Query(None, description="Search by vacancy, company or candidate"),
    user: User = Depends(require_route("applications")),
    api: ApiClient = Depends(get_api),
):
    """Candidates see their own applications; staff see all of them."""
    is_candidate = user.role == UserRole.candidate
    applications = filter_applications(await ApplicationService(api).list(), search)
    return ApplicationsView(
        title="My Applications" if is_candidate else "Manage Applications",
        show_candidate=not is_candidate,
        applications=[
            ApplicationRow(application=a, can_delete=can_delete_application(a, user))
            for a in applications
        ],
        total=len(applications),
        search=search,
    )


@router.patch("/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    user: User = Depends(require_roles(*STAFF)),
    api: ApiClient = Depends(get_api),
):
    """Returns the application as the API left it."""
    return await ApplicationService(api).update_status(application_id, update.status)


@router.delete("/{application_id}", response_model=MessageResponse)
async def delete_application(
    application_id: str,
    user: User = Depends(require_roles(UserRole.admin, UserRole.candidate)),
    api: ApiClient = Depends(get_api),
):
    service = ApplicationService(api)
    application = await service.get(application_id)
    if not can_delete_application(application, user):
        raise HTTPException(status_code=403, detail="You can only delete your own applications")

    await service.delete(application_id)
    return MessageResponse(
        message="Application deleted",
        notice=Notice(icon="success", title="Application deleted"),
    )
