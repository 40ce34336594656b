"""
User Management Routes (admin only)

GET /users - List users (search by name/email, filter by role)
POST /users - Create user
PUT /users/{user_id} - Update user (empty password keeps the current one)
DELETE /users/{user_id} - Delete user (not your own account)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from jobboard.core.auth import get_api, require_roles, require_route
from jobboard.schemas.schemas import (
    MessageResponse, Notice, User, UserCreate, UserRole, UsersView, UserUpdate
)
from jobboard.services.api_client import ApiClient
from jobboard.services.resource_service import UserService
from jobboard.services.view_service import filter_users

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UsersView)
async def list_users(
    search: Optional[str] = Query(None, description="Search in name or email"),
    role: Optional[UserRole] = Query(None),
    user: User = Depends(require_route("users")),
    api: ApiClient = Depends(get_api),
):
    users = filter_users(await UserService(api).list(), search, role)
    return UsersView(users=users, total=len(users), search=search, role=role)


@router.post("", response_model=MessageResponse, status_code=201)
async def create_user(
    data: UserCreate,
    admin: User = Depends(require_roles(UserRole.admin)),
    api: ApiClient = Depends(get_api),
):
    created = await UserService(api).create(data)
    return MessageResponse(
        message=f"User {created.email} created",
        notice=Notice(icon="success", title="User created"),
    )


@router.put("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    admin: User = Depends(require_roles(UserRole.admin)),
    api: ApiClient = Depends(get_api),
):
    """Only an admin changes roles. The password is sent only when filled in."""
    changes = {"name": data.name, "email": data.email, "role": data.role.value}
    if data.password:
        changes["password"] = data.password

    await UserService(api).update(user_id, changes)
    return MessageResponse(message="User updated", notice=Notice(icon="success", title="User updated"))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    admin: User = Depends(require_roles(UserRole.admin)),
    api: ApiClient = Depends(get_api),
):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    await UserService(api).delete(user_id)
    return MessageResponse(message="User deleted", notice=Notice(icon="success", title="User deleted"))
