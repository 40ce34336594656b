"""
Tests for login/logout, navigation redirects and the global error responses.
"""

from conftest import make_token, make_user


def test_root_redirects_to_login_when_anonymous(client):
    response = client.get("/")
    assert response.status_code == 307
    assert response.headers["location"] == "/login"


def test_root_redirects_to_dashboard_when_logged_in(client, login_as):
    login_as("CODER")
    response = client.get("/")
    assert response.headers["location"] == "/dashboard"


def test_login_page_redirects_when_logged_in(client, login_as):
    login_as("ADMIN")
    response = client.get("/login")
    assert response.status_code == 307
    assert response.headers["location"] == "/dashboard"


def test_login_page_anonymous(client):
    response = client.get("/login")
    assert response.status_code == 200
    assert response.json() == {"view": "login"}


def test_login_stores_session(client, fake_api, session):
    token = make_token(sub="u-9")
    fake_api.on("POST", "/auth/login", status=201, json={
        "access_token": token,
        "user": make_user(user_id="u-9", role="GESTOR", name="Gina"),
    })

    response = client.post("/login", json={"email": "gina@example.com", "password": "secret1"})

    assert response.status_code == 200
    data = response.json()
    assert data["redirect"] == "/dashboard"
    assert data["notice"]["text"] == "Hello Gina"
    assert session.token == token
    assert session.user.id == "u-9"


def test_login_failure_surfaces_api_message(client, fake_api, session):
    fake_api.on("POST", "/auth/login", status=401, json={"statusCode": 401, "message": "Invalid credentials"})

    response = client.post("/login", json={"email": "x@example.com", "password": "wrong-pass"})

    assert response.status_code == 401
    data = response.json()
    assert data["detail"] == "Invalid credentials"
    assert data["notice"]["title"] == "Login failed"
    assert data["notice"]["text"] == "Invalid credentials"
    assert data["redirect"] == "/login"
    assert not session.is_authenticated


def test_login_validation_errors_are_per_field(client, fake_api):
    response = client.post("/login", json={"email": "not-an-email", "password": "123"})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert set(errors) == {"email", "password"}
    assert fake_api.requests == []


def test_register_defaults_to_candidate(client, fake_api):
    fake_api.on("POST", "/auth/register", status=201, json=make_user(user_id="new", role="CODER"))

    response = client.post("/register", json={"name": "Nuevo", "email": "new@example.com", "password": "secret1"})

    assert response.status_code == 201
    assert response.json()["redirect"] == "/login"
    assert b'"role":"CODER"' in fake_api.last("POST", "/auth/register").read().replace(b" ", b"")


def test_logout_clears_session(client, login_as, session):
    login_as("CODER")
    response = client.post("/logout")
    assert response.status_code == 200
    assert not session.is_authenticated


def test_protected_page_redirects_anonymous(client):
    response = client.get("/dashboard")
    assert response.status_code == 307
    assert response.headers["location"] == "/login"


def test_wrong_role_redirects_to_dashboard(client, login_as, fake_api):
    login_as("CODER")
    response = client.get("/users")
    assert response.status_code == 307
    assert response.headers["location"] == "/dashboard"
    assert fake_api.requests == []


def test_navigation_lists_role_items(client, login_as):
    login_as("GESTOR")
    data = client.get("/navigation").json()
    assert [item["route"] for item in data["items"]] == [
        "dashboard", "vacancies", "applications", "metrics", "profile"
    ]


def test_expired_token_mid_session_clears_session(client, login_as, fake_api, session):
    login_as("ADMIN")
    fake_api.on("GET", "/users", status=401, json={"statusCode": 401, "message": "Unauthorized"})

    response = client.get("/users")

    assert response.status_code == 401
    assert response.json()["redirect"] == "/login"
    assert response.json()["notice"]["title"] == "Session expired"
    assert response.json()["detail"] == "Unauthorized"
    assert not session.is_authenticated


def test_forbidden_keeps_session(client, login_as, fake_api, session):
    login_as("GESTOR")
    fake_api.on("GET", "/vacancies", status=403, json={"statusCode": 403, "message": "Forbidden resource"})

    response = client.get("/vacancies")

    assert response.status_code == 403
    assert response.json()["notice"]["title"] == "Access denied"
    assert session.is_authenticated


def test_unknown_path_renders_not_found(client):
    response = client.get("/this/does/not/exist")
    assert response.status_code == 404
    assert response.json()["view"] == "not_found"


def test_health_reports_api(client, fake_api):
    fake_api.on("GET", "/", json={"ok": True})
    data = client.get("/health").json()
    assert data == {"status": "healthy", "api": "reachable", "authenticated": False}
