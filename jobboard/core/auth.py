"""
Session and role dependencies for the page routes.

Provides:
- FastAPI dependencies for the session store and the API client
- require_route(): gate a page by the navigation table
- require_roles(): gate an action by role
"""

from typing import Callable

from fastapi import Depends, HTTPException

from jobboard.core.exceptions import AuthenticationError, NavigationRedirect
from jobboard.core.navigation import LOGIN_PATH, resolve_redirect
from jobboard.core.session import SessionStore, get_session_store
from jobboard.schemas.schemas import User, UserRole
from jobboard.services.api_client import ApiClient, get_api_client


def get_session() -> SessionStore:
    """FastAPI dependency - the process session store."""
    return get_session_store()


def get_api() -> ApiClient:
    """FastAPI dependency - the API gateway client."""
    return get_api_client()


def require_route(route_name: str) -> Callable[..., User]:
    """
    Dependency factory - render `route_name` only for permitted roles.

    Usage:
        @router.get("/users")
        async def users_page(user: User = Depends(require_route("users"))):
            ...
    """

    async def dependency(session: SessionStore = Depends(get_session)) -> User:
        redirect = resolve_redirect(route_name, session.is_authenticated, session.role)
        if redirect == LOGIN_PATH:
            raise NavigationRedirect(redirect, "Please log in")
        if redirect is not None:
            raise NavigationRedirect(redirect, "You do not have access to that page")
        return session.user

    return dependency


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Dependency factory - actions (not pages) restricted to `roles`.

    Anonymous callers get a 401 carrying `redirect: /login`.
    """

    async def dependency(session: SessionStore = Depends(get_session)) -> User:
        if not session.is_authenticated:
            raise AuthenticationError("Please log in")
        if not session.has_role(roles):
            raise HTTPException(status_code=403, detail="You do not have permission to perform this action")
        return session.user

    return dependency
