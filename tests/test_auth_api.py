from __future__ import annotations

import pytest

from jobly.core.auth.models import IdentityClaims
from jobly.core.auth.provider import TokenVerifier

REGISTRATION = {
    "username": "new",
    "password": "password-new",
    "firstName": "First",
    "lastName": "Last",
    "email": "new@email.com",
}


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_token_for_valid_credentials(client, passwords, jwt_cfg):
    r = client.post("/auth/token", json={"username": "u1", "password": passwords["u1"]})
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    assert TokenVerifier(jwt_cfg).verify(token) == IdentityClaims(subject_id="u1", is_admin=False)


def test_token_carries_admin_flag(client, passwords, jwt_cfg):
    r = client.post("/auth/token", json={"username": "admin", "password": passwords["admin"]})
    assert TokenVerifier(jwt_cfg).verify(r.json()["token"]) == IdentityClaims(subject_id="admin", is_admin=True)


def test_token_wrong_password(client):
    r = client.post("/auth/token", json={"username": "u1", "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"error": {"message": "Invalid username/password", "status": 401}}


def test_token_unknown_user_same_answer(client):
    r = client.post("/auth/token", json={"username": "ghost", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid username/password"


@pytest.mark.parametrize("body", [{"username": "u1"}, {"password": "x"}, {"username": 1, "password": "x"}, {}])
def test_token_bad_body(client, body):
    assert client.post("/auth/token", json=body).status_code == 400


def test_token_then_self_service(client, passwords):
    token = client.post("/auth/token", json={"username": "u2", "password": passwords["u2"]}).json()["token"]
    assert client.get("/users/u2", headers=_bearer(token)).status_code == 200
    assert client.get("/users/u1", headers=_bearer(token)).status_code == 403


def test_register(client, jwt_cfg):
    r = client.post("/auth/register", json=REGISTRATION)
    assert r.status_code == 201, r.text
    token = r.json()["token"]
    assert TokenVerifier(jwt_cfg).verify(token) == IdentityClaims(subject_id="new", is_admin=False)

    me = client.get("/auth/me", headers=_bearer(token))
    assert me.json()["user"] == {
        "username": "new",
        "firstName": "First",
        "lastName": "Last",
        "email": "new@email.com",
        "isAdmin": False,
    }

    r = client.post("/auth/token", json={"username": "new", "password": "password-new"})
    assert r.status_code == 200


def test_register_cannot_grant_admin(client):
    r = client.post("/auth/register", json={**REGISTRATION, "isAdmin": True})
    assert r.status_code == 400


def test_register_duplicate(client):
    r = client.post("/auth/register", json={**REGISTRATION, "username": "u1"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Duplicate username: u1"


@pytest.mark.parametrize(
    "change",
    [{"password": "pw"}, {"password": "x" * 73}, {"email": "not-an-email"}, {"firstName": ""}],
)
def test_register_invalid(client, change):
    assert client.post("/auth/register", json={**REGISTRATION, **change}).status_code == 400


def test_me_requires_login(client):
    r = client.get("/auth/me")
    assert r.status_code == 401


def test_me_ignores_bad_token(client):
    assert client.get("/auth/me", headers=_bearer("garbage")).status_code == 401


def test_me_for_any_logged_in_user(client, u1_headers, admin_headers):
    assert client.get("/auth/me", headers=u1_headers).json()["user"]["username"] == "u1"
    assert client.get("/auth/me", headers=admin_headers).json()["user"]["isAdmin"] is True
