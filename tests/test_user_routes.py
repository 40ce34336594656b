"""
Tests for the user management page and its actions (admin only).
"""

from conftest import make_user


# ============================================================
# USERS (admin)
# ============================================================

def test_list_users_search_and_role(client, login_as, fake_api):
    login_as("ADMIN", user_id="admin")
    fake_api.on("GET", "/users", json=[
        make_user(user_id="u-1", name="Ana Coder", role="CODER"),
        make_user(user_id="u-2", name="Ana Gestora", role="GESTOR"),
        make_user(user_id="u-3", name="Bruno", role="CODER"),
    ])

    data = client.get("/users", params={"search": "ana", "role": "coder"}).json()

    assert [u["id"] for u in data["users"]] == ["u-1"]
    assert data["role"] == "CODER"


def test_create_user(client, login_as, fake_api):
    login_as("ADMIN", user_id="admin")
    fake_api.on("POST", "/users", status=201, json=make_user(user_id="u-5", role="GESTOR"))

    response = client.post("/users", json={
        "name": "Gestor", "email": "u-5@example.com", "password": "secret1", "role": "GESTOR",
    })

    assert response.status_code == 201
    assert response.json()["message"] == "User u-5@example.com created"


def test_update_user_without_password(client, login_as, fake_api):
    login_as("ADMIN", user_id="admin")
    fake_api.on("PATCH", "/users/u-1", json=make_user(role="GESTOR"))

    response = client.put("/users/u-1", json={
        "name": "Ana Coder", "email": "u-1@example.com", "password": "", "role": "GESTOR",
    })

    assert response.status_code == 200
    body = fake_api.last("PATCH", "/users/u-1").read()
    assert b"password" not in body


def test_update_user_short_password(client, login_as, fake_api):
    login_as("ADMIN", user_id="admin")

    response = client.put("/users/u-1", json={
        "name": "Ana Coder", "email": "u-1@example.com", "password": "123", "role": "CODER",
    })

    assert response.status_code == 422
    assert response.json()["errors"]["password"] == "Password must be at least 6 characters"


def test_admin_cannot_delete_self(client, login_as, fake_api):
    login_as("ADMIN", user_id="admin")

    response = client.delete("/users/admin")

    assert response.status_code == 400
    assert response.json()["detail"] == "You cannot delete your own account"
    assert fake_api.requests == []


def test_admin_deletes_other_user(client, login_as, fake_api):
    login_as("ADMIN", user_id="admin")
    fake_api.on("DELETE", "/users/u-2", json={"message": "ok"})

    response = client.delete("/users/u-2")

    assert response.status_code == 200
    assert fake_api.last("DELETE", "/users/u-2") is not None
