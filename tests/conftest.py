"""
Shared fixtures: a fake job board API (httpx.MockTransport), a session store
backed by a temp file, and a FastAPI TestClient wired to both.
"""

import os
import time

# Settings are read once; point them at harmless values before any import.
os.environ.setdefault("API_BASE_URL", "http://api.test")
os.environ.setdefault("API_KEY", "test-api-key")

import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from jobboard.core.auth import get_api, get_session
from jobboard.core.session import LocalStorage, SessionStore
from jobboard.schemas.schemas import User
from jobboard.services.api_client import ApiClient


# ============================================================
# WIRE-FORMAT BUILDERS (camelCase, as the API sends them)
# ============================================================

def make_user(user_id="u-1", role="CODER", name="Ana Coder", email=None):
    return {
        "id": user_id,
        "name": name,
        "email": email or f"{user_id}@example.com",
        "role": role,
        "createdAt": "2024-05-01T10:00:00Z",
    }


def make_application(app_id="a-1", user_id="u-1", vacancy_id="v-1", user=None, vacancy=None):
    data = {
        "id": app_id,
        "userId": user_id,
        "vacancyId": vacancy_id,
        "appliedAt": "2024-05-02T10:00:00Z",
    }
    if user is not None:
        data["user"] = user
    if vacancy is not None:
        data["vacancy"] = vacancy
    return data


def make_vacancy(vacancy_id="v-1", title="Backend Developer", company="Acme", max_applicants=5,
                 applications=0, is_active=True, modality="REMOTE", technologies="Python, FastAPI"):
    return {
        "id": vacancy_id,
        "title": title,
        "description": "Build and maintain the public REST API.",
        "technologies": technologies,
        "seniority": "Mid",
        "softSkills": None,
        "location": "Medellin",
        "modality": modality,
        "salaryRange": "4M - 6M",
        "company": company,
        "maxApplicants": max_applicants,
        "isActive": is_active,
        "createdAt": "2024-04-01T10:00:00Z",
        "applications": [
            make_application(app_id=f"{vacancy_id}-a{i}", user_id=f"other-{i}", vacancy_id=vacancy_id)
            for i in range(applications)
        ],
    }


def make_token(sub="u-1", expires_in=3600):
    return jwt.encode({"sub": sub, "exp": int(time.time()) + expires_in}, "test-secret", algorithm="HS256")


# ============================================================
# FAKE API
# ============================================================

class FakeApi:
    """
    Routes (METHOD, path) -> (status, json) or a callable(request) -> httpx.Response.
    Every request received is kept in `requests`.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, json=None, handler=None):
        self.routes[(method, path)] = handler or (status, json)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"statusCode": 404, "message": "Not Found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    def last(self, method, path):
        for request in reversed(self.requests):
            if request.method == method and request.url.path == path:
                return request
        return None


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "session.json"))


@pytest.fixture
def session(storage):
    return SessionStore(storage)


@pytest.fixture
def api_client(session, fake_api):
    return ApiClient(
        session,
        base_url="http://api.test",
        api_key="test-api-key",
        transport=httpx.MockTransport(fake_api.handle),
    )


@pytest.fixture
def login_as(session):
    """Log the session in as a user with the given role."""

    def _login(role="CODER", user_id="u-1", name=None):
        user = User.model_validate(make_user(user_id=user_id, role=role, name=name or f"{role.title()} User"))
        session.login(make_token(sub=user_id), user)
        return user

    return _login


@pytest.fixture
def client(session, api_client):
    """FastAPI test client using the fake API and the temp session."""
    from jobboard.main import app

    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_api] = lambda: api_client
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()
