"""
Name: User/Auth API Tests (HTTP)

Responsibilities:
  - Register/login status codes (201, 400, 401, 409)
  - Self-service rules for /api/users (403 on other accounts)
  - Password changes require the current password (401 otherwise)
  - password_hash never leaves the API
"""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit


def _register(client, email="alice@example.com", password="secret1", **extra):
    res = client.post(
        "/api/auth/register", json={"email": email, "password": password, **extra}
    )
    assert res.status_code == 201, res.text
    return res.json()


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_register_returns_token_and_public_user(client):
    body = _register(client, email="  Alice@Example.COM ", name="Alice")

    assert body["token_type"] == "bearer"
    assert body["expires_in"] > 0
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["name"] == "Alice"
    assert "password_hash" not in body["user"]


def test_register_duplicate_email_is_409(client):
    _register(client)

    res = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "secret2"},
    )

    assert res.status_code == 409


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "alice@example.com", "password": "12345"},
        {"email": "not-an-email", "password": "secret1"},
        {"email": "alice@example.com"},
    ],
)
def test_register_validation_is_400(client, payload):
    res = client.post("/api/auth/register", json=payload)

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize(
    "email,password",
    [("alice@example.com", "wrong-pass"), ("nobody@example.com", "secret1")],
)
def test_login_bad_credentials_is_401(client, email, password):
    _register(client)

    res = client.post("/api/auth/login", json={"email": email, "password": password})

    assert res.status_code == 401
    assert res.json()["code"] == "UNAUTHORIZED"


def test_me_returns_caller(client):
    body = _register(client)

    res = client.get("/api/auth/me", headers=_auth(body["token"]))

    assert res.status_code == 200
    assert res.json()["id"] == body["user"]["id"]


def test_list_and_get_users(client):
    alice = _register(client)
    bob = _register(client, email="bob@example.com")

    listing = client.get("/api/users", headers=_auth(alice["token"])).json()
    assert listing["count"] == 2
    assert {u["id"] for u in listing["users"]} == {
        alice["user"]["id"],
        bob["user"]["id"],
    }
    assert all("password_hash" not in u for u in listing["users"])

    single = client.get(
        f"/api/users/{bob['user']['id']}", headers=_auth(alice["token"])
    )
    assert single.status_code == 200
    assert single.json()["email"] == "bob@example.com"


def test_update_own_account_and_login_with_new_password(client):
    alice = _register(client)
    user_id = alice["user"]["id"]

    res = client.put(
        f"/api/users/{user_id}",
        json={
            "name": "Alice A.",
            "password": "newsecret",
            "current_password": "secret1",
        },
        headers=_auth(alice["token"]),
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Alice A."

    old = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret1"}
    )
    new = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "newsecret"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_password_without_current_password_is_401(client):
    alice = _register(client)

    res = client.put(
        f"/api/users/{alice['user']['id']}",
        json={"password": "newsecret"},
        headers=_auth(alice["token"]),
    )

    assert res.status_code == 401
    login = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret1"}
    )
    assert login.status_code == 200


def test_change_password_then_login(client):
    alice = _register(client)

    res = client.put(
        "/api/auth/change-password",
        json={"current_password": "secret1", "new_password": "newsecret"},
        headers=_auth(alice["token"]),
    )

    assert res.status_code == 200
    assert res.json()["id"] == alice["user"]["id"]
    assert "password_hash" not in res.json()
    login = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "newsecret"}
    )
    assert login.status_code == 200


def test_change_password_with_wrong_current_is_401(client):
    alice = _register(client)

    res = client.put(
        "/api/auth/change-password",
        json={"current_password": "not-mine", "new_password": "newsecret"},
        headers=_auth(alice["token"]),
    )

    assert res.status_code == 401
    assert res.json()["code"] == "UNAUTHORIZED"


@pytest.mark.parametrize(
    "payload",
    [
        {"new_password": "newsecret"},
        {"current_password": "secret1", "new_password": "123"},
    ],
)
def test_change_password_validation_is_400(client, payload):
    alice = _register(client)

    res = client.put(
        "/api/auth/change-password", json=payload, headers=_auth(alice["token"])
    )

    assert res.status_code == 400


def test_change_password_requires_token(client):
    res = client.put(
        "/api/auth/change-password",
        json={"current_password": "secret1", "new_password": "newsecret"},
    )

    assert res.status_code == 401


def test_update_with_empty_body_is_400(client):
    alice = _register(client)

    res = client.put(
        f"/api/users/{alice['user']['id']}", json={}, headers=_auth(alice["token"])
    )

    assert res.status_code == 400


def test_update_to_existing_email_is_409(client):
    alice = _register(client)
    _register(client, email="bob@example.com")

    res = client.put(
        f"/api/users/{alice['user']['id']}",
        json={"email": "bob@example.com"},
        headers=_auth(alice["token"]),
    )

    assert res.status_code == 409


def test_mutating_other_account_is_403(client):
    alice = _register(client)
    bob = _register(client, email="bob@example.com")
    bob_url = f"/api/users/{bob['user']['id']}"

    assert (
        client.put(bob_url, json={"name": "x"}, headers=_auth(alice["token"]))
        .status_code
        == 403
    )
    assert client.delete(bob_url, headers=_auth(alice["token"])).status_code == 403
    assert (
        client.get(f"{bob_url}/processes", headers=_auth(alice["token"])).status_code
        == 403
    )


def test_user_processes_lists_every_estado(client):
    alice = _register(client)
    token = alice["token"]
    first = client.post(
        "/api/processes", json={"repertorio": "REP-1"}, headers=_auth(token)
    ).json()
    client.post("/api/processes", json={"repertorio": "REP-2"}, headers=_auth(token))
    client.put(
        f"/api/processes/{first['id']}/estado",
        json={"estado": "Pausado"},
        headers=_auth(token),
    )

    res = client.get(f"/api/users/{alice['user']['id']}/processes", headers=_auth(token))

    assert res.status_code == 200
    assert res.json()["count"] == 2
