"""
Profile Routes

GET /profile - Current user's profile
PUT /profile - Update own name, email and password (never the role)
"""

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_api, get_session, require_roles, require_route
from jobboard.core.navigation import ALL_ROLES
from jobboard.core.session import SessionStore
from jobboard.schemas.schemas import ProfileUpdate, ProfileView, User
from jobboard.services.api_client import ApiClient
from jobboard.services.auth_service import AuthService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileView)
async def get_profile(user: User = Depends(require_route("profile"))):
    return ProfileView(user=user)


@router.put("", response_model=ProfileView)
async def update_profile(
    data: ProfileUpdate,
    user: User = Depends(require_roles(*ALL_ROLES)),
    api: ApiClient = Depends(get_api),
    session: SessionStore = Depends(get_session),
):
    changes = {"name": data.name, "email": data.email}
    if data.password:
        changes["password"] = data.password

    updated = await AuthService(api, session).refresh_profile(changes)
    return ProfileView(user=updated)
