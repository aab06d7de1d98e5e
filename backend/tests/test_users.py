"""
test_users.py: user registration, login and owner-only CRUD.
"""

import jwt

from bookshelf.core.security import create_access_token
from tests.helpers import bearer, login, register


# ── Create ───────────────────────────────────────────────────────────


def test_create_user(client):
    resp = client.post(
        "/users",
        json={"name": "Lee Mujin", "email": "Mujin@Example.com ", "password": "28122000"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "success create new user, please login to get token"
    assert body["user"]["name"] == "Lee Mujin"
    assert body["user"]["email"] == "mujin@example.com"
    assert "password" not in body["user"]
    assert isinstance(body["user"]["id"], int)


def test_create_user_duplicate_email(client):
    register(client)
    resp = client.post(
        "/users",
        json={"name": "Someone Else", "email": "mujin@example.com", "password": "x"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "bad request"
    assert "error" in resp.json()


def test_create_user_malformed_json(client):
    resp = client.post(
        "/users",
        content=b'{"name": Lee, "email": x}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Error when parsing data"


def test_create_user_missing_field(client):
    resp = client.post("/users", json={"name": "No Email", "password": "x"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Error when parsing data"
    assert "email" in resp.json()["error"]


# ── Login ────────────────────────────────────────────────────────────


def test_login_returns_token(client):
    user = register(client)
    resp = client.post("/users/login", json={"email": "mujin@example.com", "password": "28122000"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Success Login"
    assert body["user_id"] == user["id"]
    claims = jwt.decode(body["token"], "test-secret", algorithms=["HS256"])
    assert claims["user_id"] == user["id"]


def test_login_wrong_password(client):
    register(client)
    resp = client.post("/users/login", json={"email": "mujin@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "email or password does not match"


def test_login_unknown_email(client):
    resp = client.post("/users/login", json={"email": "ghost@example.com", "password": "x"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "email or password does not match"


def test_login_email_is_case_insensitive(client):
    register(client)
    token = login(client, email="MUJIN@example.com")
    assert token


# ── List ─────────────────────────────────────────────────────────────


def test_list_users(client, user, other_user):
    resp = client.get("/users", headers=user["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "success get all users"
    assert [u["id"] for u in body["users"]] == [user["id"], other_user["id"]]


def test_list_users_without_token(client, user):
    resp = client.get("/users")
    assert resp.status_code == 401
    assert resp.json()["message"] == "need authorization token"


def test_list_users_with_invalid_token(client, user):
    for header in ("InvalidTokenFormat", "Bearer InvalidToken"):
        resp = client.get("/users", headers={"Authorization": header})
        assert resp.status_code == 401
        assert resp.json()["message"] == "invalid authorization token"


def test_list_users_raw_token_without_bearer(client, user):
    resp = client.get("/users", headers={"Authorization": user["token"]})
    assert resp.status_code == 200


def test_list_users_token_in_query(client, user):
    resp = client.get("/users", params={"token": user["token"]})
    assert resp.status_code == 200


def test_token_without_user_id_claim(client, user):
    token = jwt.encode({"sub": "someone"}, "test-secret", algorithm="HS256")
    resp = client.get("/users", headers=bearer(token))
    assert resp.status_code == 500
    assert resp.json()["message"] == "Token does not match user ID"


# ── Get one ──────────────────────────────────────────────────────────


def test_get_own_user(client, user):
    resp = client.get(f"/users/{user['id']}", headers=user["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "success get user"
    assert body["user"]["id"] == user["id"]
    assert body["user"]["email"] == "mujin@example.com"


def test_get_other_user_is_forbidden(client, user, other_user):
    resp = client.get(f"/users/{other_user['id']}", headers=user["headers"])
    assert resp.status_code == 403
    assert resp.json()["message"] == "You do not have access to this data"


def test_get_user_without_token(client, user):
    resp = client.get(f"/users/{user['id']}")
    assert resp.status_code == 401


def test_get_user_invalid_id(client, user):
    resp = client.get("/users/abc", headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "invalid id"


def test_get_user_not_found(client):
    token = create_access_token(999)
    resp = client.get("/users/999", headers=bearer(token))
    assert resp.status_code == 404
    assert resp.json()["message"] == "user not found"


# ── Update ───────────────────────────────────────────────────────────


def test_update_user_partial(client, user):
    resp = client.put(f"/users/{user['id']}", json={"name": "Mujin Lee"}, headers=user["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Success Update data"
    assert body["user"]["name"] == "Mujin Lee"
    assert body["user"]["email"] == "mujin@example.com"


def test_update_user_password_is_rehashed(client, user):
    resp = client.put(
        f"/users/{user['id']}", json={"password": "new-password"}, headers=user["headers"]
    )
    assert resp.status_code == 200

    old = client.post("/users/login", json={"email": "mujin@example.com", "password": "28122000"})
    assert old.status_code == 401
    assert login(client, password="new-password")


def test_update_user_email_conflict(client, user, other_user):
    resp = client.put(
        f"/users/{user['id']}", json={"email": "other@example.com"}, headers=user["headers"]
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Failed to update user"


def test_update_other_user_is_forbidden(client, user, other_user):
    resp = client.put(f"/users/{other_user['id']}", json={"name": "Hacked"}, headers=user["headers"])
    assert resp.status_code == 403

    own = client.get(f"/users/{other_user['id']}", headers=other_user["headers"])
    assert own.json()["user"]["name"] == "Other Person"


def test_update_user_invalid_token(client, user):
    resp = client.put(
        f"/users/{user['id']}", json={"name": "x"}, headers={"Authorization": "InvalidToken"}
    )
    assert resp.status_code == 401


# ── Delete ───────────────────────────────────────────────────────────


def test_delete_user(client, user):
    resp = client.delete(f"/users/{user['id']}", headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"message": "success delete data"}

    again = client.get(f"/users/{user['id']}", headers=user["headers"])
    assert again.status_code == 404


def test_delete_other_user_is_forbidden(client, user, other_user):
    resp = client.delete(f"/users/{other_user['id']}", headers=user["headers"])
    assert resp.status_code == 403


def test_delete_user_not_found(client):
    resp = client.delete("/users/5", headers=bearer(create_access_token(5)))
    assert resp.status_code == 404


def test_oversized_user_id_is_invalid(client, user):
    resp = client.get("/users/99999999999999999999", headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "invalid id"

    resp = client.put("/users/99999999999999999999", json={"name": "x"}, headers=user["headers"])
    assert resp.status_code == 400


def test_login_odd_credentials_are_unauthorized(client, user):
    for creds in (
        {"email": "a", "password": "28122000"},
        {"email": "mujin@example.com", "password": ""},
        {"email": "mujin@example.com", "password": "x" * 200},
    ):
        resp = client.post("/users/login", json=creds)
        assert resp.status_code == 401
        assert resp.json()["message"] == "email or password does not match"
