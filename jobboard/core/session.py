"""
Session Store - the authenticated identity for the process lifetime.

Holds token + user profile, persisted to a local JSON key/value file
(the front-end's "local storage") so a restart keeps the operator logged in.

Single writer: only the auth flow (login / profile refresh / logout) and the
API client's 401 handler call login(), update_user() and teardown().
Everything else reads.
"""

import json
import logging
import os
import time
from typing import Iterable, Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from jobboard.core.config import get_settings
from jobboard.schemas.schemas import User, UserRole

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class LocalStorage:
    """
    String key/value storage backed by one JSON file.

    Missing or unreadable file reads as empty.
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Local storage at %s unreadable, starting empty: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


def token_is_expired(token: str, now: Optional[float] = None) -> bool:
    """
    True when the JWT's `exp` claim has passed or the token is not a JWT.

    The signature is not checked here; the API does that on every request.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return True

    exp = claims.get("exp")
    if exp is None:
        return False
    try:
        return float(exp) <= (now if now is not None else time.time())
    except (TypeError, ValueError):
        return True


class SessionStore:
    """
    Authenticated identity (token, user) with an explicit lifecycle:
    init() at startup, login() after authentication, teardown() on
    logout or when the API answers 401.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._token: Optional[str] = None
        self._user: Optional[User] = None

    # ---------------- lifecycle ----------------

    def init(self) -> None:
        """Hydrate from local storage. Expired or corrupt state is cleared."""
        token = self.storage.get_item(TOKEN_KEY)
        user = self._read_stored_user()

        if not token or user is None:
            if token or user is not None:
                logger.info("Incomplete stored session, clearing it")
                self.teardown()
            return

        if token_is_expired(token):
            logger.info("Stored token expired, clearing session")
            self.teardown()
            return

        self._token = token
        self._user = user
        logger.info("Session restored for %s (%s)", user.email, user.role.value)

    def login(self, token: str, user: User) -> None:
        self._token = token
        self._user = user
        self.storage.set_item(TOKEN_KEY, token)
        self.storage.set_item(USER_KEY, user.model_dump_json(by_alias=True))
        logger.info("Logged in as %s (%s)", user.email, user.role.value)

    def update_user(self, user: User) -> None:
        """Replace the cached profile after the operator edits it."""
        if self._token is None:
            return
        self._user = user
        self.storage.set_item(USER_KEY, user.model_dump_json(by_alias=True))

    def teardown(self) -> None:
        if self._user is not None:
            logger.info("Session cleared for %s", self._user.email)
        self._token = None
        self._user = None
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)

    # ---------------- read access ----------------

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def role(self) -> Optional[UserRole]:
        return self._user.role if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None and self._user is not None

    def has_role(self, roles: Iterable[UserRole]) -> bool:
        return self.role is not None and self.role in set(roles)

    def _read_stored_user(self) -> Optional[User]:
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError:
            logger.warning("Stored user profile is corrupt, ignoring it")
            return None


# Singleton instance
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get or create the process-wide session store (singleton pattern)"""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(LocalStorage(get_settings().session_file))
    return _session_store
