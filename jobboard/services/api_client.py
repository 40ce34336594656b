"""
API Gateway Client

One httpx.AsyncClient for the whole process, configured with:
- base URL and static `x-api-key` header from settings
- `Authorization: Bearer <token>` injected per request from the session store

Response translation:
- 401 -> session cleared, AuthenticationError
- 403 -> PermissionDeniedError (session kept)
- other non-2xx -> ApiError carrying the API's own message
- transport failures -> ApiUnavailableError
"""

import logging
from typing import Any, Optional

import httpx

from jobboard.core.config import get_settings
from jobboard.core.exceptions import (
    ApiError,
    ApiUnavailableError,
    AuthenticationError,
    PermissionDeniedError,
)
from jobboard.core.session import SessionStore, get_session_store

logger = logging.getLogger(__name__)


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """
    Pull the human-readable message out of an API error body.

    The API answers `{"statusCode", "message", "error"}` where `message`
    is either a string or a list of validation messages (first one wins).
    """
    try:
        body = response.json()
    except ValueError:
        return fallback

    if not isinstance(body, dict):
        return fallback

    message = body.get("message")
    if isinstance(message, list):
        message = message[0] if message else None
    if isinstance(message, str) and message.strip():
        return message
    error = body.get("error")
    if isinstance(error, str) and error.strip():
        return error
    return fallback


class ApiClient:
    """
    Thin async wrapper around the external REST API.
    """

    def __init__(
        self,
        session: SessionStore,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.session = session
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            headers={
                "Content-Type": "application/json",
                "x-api-key": api_key if api_key is not None else settings.api_key,
            },
            timeout=timeout or settings.request_timeout_seconds,
            transport=transport,
        )

    def _auth_headers(self) -> dict:
        token = self.session.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None when empty)."""
        try:
            response = await self.client.request(
                method, path, json=json, params=params, headers=self._auth_headers()
            )
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ApiUnavailableError() from e

        if response.status_code == 401:
            logger.warning("%s %s rejected with 401, clearing session", method, path)
            self.session.teardown()
            raise AuthenticationError(
                extract_error_message(response, AuthenticationError().message)
            )

        if response.status_code == 403:
            logger.warning("%s %s rejected with 403", method, path)
            raise PermissionDeniedError(
                extract_error_message(response, PermissionDeniedError().message)
            )

        if response.is_error:
            message = extract_error_message(response, f"Request failed ({response.status_code})")
            logger.info("%s %s -> %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(response.status_code, "Invalid response from server") from e

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def ping(self) -> bool:
        """True when the API answers at all (any HTTP status)."""
        try:
            await self.client.get("/", headers=self._auth_headers())
            return True
        except httpx.HTTPError as e:
            logger.warning("API ping failed: %s", e)
            return False

    async def close(self) -> None:
        await self.client.aclose()


# Singleton instance
_api_client: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    """Get or create the API client (singleton pattern)"""
    global _api_client
    if _api_client is None:
        _api_client = ApiClient(get_session_store())
    return _api_client


async def close_api_client() -> None:
    global _api_client
    if _api_client is not None:
        await _api_client.close()
        _api_client = None
