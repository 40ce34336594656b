"""
Authentication Routes

GET /login - Login page (authenticated operators go to the dashboard)
POST /login - Login and store the session
POST /register - Register a new candidate account
POST /logout - Clear the session
GET /navigation - Sidebar entries for the current role
"""

from fastapi import APIRouter, Depends

from jobboard.core.auth import get_api, get_session
from jobboard.core.exceptions import NavigationRedirect
from jobboard.core.navigation import DEFAULT_LANDING_PATH, LOGIN_PATH, visible_items
from jobboard.core.session import SessionStore
from jobboard.schemas.schemas import (
    LoginForm, LoginResult, MessageResponse, NavigationResponse, Notice, RegisterForm
)
from jobboard.services.api_client import ApiClient
from jobboard.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.get("/login")
async def login_page(session: SessionStore = Depends(get_session)):
    """Login page. Already logged in -> dashboard."""
    if session.is_authenticated:
        raise NavigationRedirect(DEFAULT_LANDING_PATH)
    return {"view": "login"}


@router.post("/login", response_model=LoginResult)
async def login(
    form: LoginForm,
    api: ApiClient = Depends(get_api),
    session: SessionStore = Depends(get_session),
):
    """
    Login against the API. The token and user are kept in the session store
    and sent as `Authorization: Bearer <token>` on every later API call.
    """
    user = await AuthService(api, session).login(form)
    return LoginResult(
        user=user,
        redirect=DEFAULT_LANDING_PATH,
        notice=Notice(icon="success", title="Welcome!", text=f"Hello {user.name}"),
    )


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    form: RegisterForm,
    api: ApiClient = Depends(get_api),
    session: SessionStore = Depends(get_session),
):
    """Register a new account. Login afterwards."""
    await AuthService(api, session).register(form)
    return MessageResponse(
        message="Your account has been created. You can now log in.",
        notice=Notice(icon="success", title="Registration successful!"),
        redirect=LOGIN_PATH,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    api: ApiClient = Depends(get_api),
    session: SessionStore = Depends(get_session),
):
    AuthService(api, session).logout()
    return MessageResponse(message="Logged out", redirect=LOGIN_PATH)


@router.get("/navigation", response_model=NavigationResponse)
async def navigation(session: SessionStore = Depends(get_session)):
    """Sidebar: the routes the current role may open."""
    if not session.is_authenticated:
        raise NavigationRedirect(LOGIN_PATH, "Please log in")
    return NavigationResponse(user=session.user, items=visible_items(session.role))
