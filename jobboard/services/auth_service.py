"""
Auth Service - the only writer of the session store besides the 401 handler.

login -> POST /auth/login, store token + user
register -> POST /auth/register (does not log in)
logout -> clear session
refresh_profile -> PATCH /users/{id}, store the returned user
"""

import logging
from typing import Any, Dict

from jobboard.core.exceptions import AuthenticationError, LoginFailedError
from jobboard.core.session import SessionStore
from jobboard.schemas.schemas import LoginForm, LoginResponse, RegisterForm, User
from jobboard.services.api_client import ApiClient

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, api: ApiClient, session: SessionStore):
        self.api = api
        self.session = session

    async def login(self, form: LoginForm) -> User:
        try:
            data = await self.api.post(
                "/auth/login", json={"email": form.email, "password": form.password}
            )
        except AuthenticationError as e:
            raise LoginFailedError(e.message) from e
        response = LoginResponse.model_validate(data)
        self.session.login(response.access_token, response.user)
        return response.user

    async def register(self, form: RegisterForm) -> User:
        data = await self.api.post(
            "/auth/register",
            json={
                "name": form.name,
                "email": form.email,
                "password": form.password,
                "role": form.role.value,
            },
        )
        user = User.model_validate(data)
        logger.info("Registered %s as %s", user.email, user.role.value)
        return user

    def logout(self) -> None:
        self.session.teardown()

    async def refresh_profile(self, changes: Dict[str, Any]) -> User:
        """Update the logged-in user's own record and cache the result."""
        current = self.session.user
        data = await self.api.patch(f"/users/{current.id}", json=changes)
        updated = User.model_validate(data)
        self.session.update_user(updated)
        return updated
