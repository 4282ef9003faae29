# test_auth.py

from datetime import timedelta

import jwt
import pytest
from fastapi.testclient import TestClient

from config import get_settings
from jobly.app.auth import (
    TokenUser,
    create_access_token,
    decode_token,
    ensure_admin,
    ensure_correct_user_or_admin,
    ensure_logged_in,
    get_current_user,
    hash_password,
    verify_password,
)
from jobly.app.errors import UnauthorizedError
from jobly.app.main import app

client = TestClient(app)

USER = TokenUser(username="u1", is_admin=False)
ADMIN = TokenUser(username="u2", is_admin=True)


def test_login_ok():
    resp = client.post("/auth/token", json={"username": "u1", "password": "password1"})
    assert resp.status_code == 200
    claims = decode_token(resp.json()["data"]["token"])
    assert claims == TokenUser(username="u1", is_admin=False)


def test_login_admin_claim():
    resp = client.post("/auth/token", json={"username": "u2", "password": "password2"})
    assert decode_token(resp.json()["data"]["token"]).is_admin is True


@pytest.mark.parametrize(
    "body",
    [
        {"username": "u1", "password": "wrong"},
        {"username": "no-such-user", "password": "password1"},
    ],
)
def test_login_bad_credentials(body):
    resp = client.post("/auth/token", json=body)
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid username/password"


@pytest.mark.parametrize(
    "body",
    [
        {"username": "u1"},
        {"username": 42, "password": "password1"},
        {"username": "u1", "password": "password1", "extra": True},
    ],
)
def test_login_bad_request(body):
    assert client.post("/auth/token", json=body).status_code == 400


def test_register_ok():
    resp = client.post(
        "/auth/register",
        json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        },
    )
    assert resp.status_code == 201
    claims = decode_token(resp.json()["data"]["token"])
    assert claims == TokenUser(username="new", is_admin=False)


def test_register_cannot_set_admin():
    resp = client.post(
        "/auth/register",
        json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
            "isAdmin": True,
        },
    )
    assert resp.status_code == 400


def test_register_duplicate():
    resp = client.post(
        "/auth/register",
        json={
            "username": "u1",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        },
    )
    assert resp.status_code == 400


def test_token_claims_and_expiry():
    settings = get_settings()
    token = create_access_token("u", is_admin=True, expires_delta=timedelta(seconds=60))
    data = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    assert data["sub"] == "u"
    assert data["is_admin"] is True
    expired = create_access_token("u", expires_delta=timedelta(seconds=-1))
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(expired)


def test_get_current_user_ignores_bad_tokens():
    assert get_current_user(None) is None
    assert get_current_user("garbage") is None
    forged = jwt.encode({"sub": "u2", "is_admin": True}, "wrong-key", algorithm="HS256")
    assert get_current_user(forged) is None
    assert get_current_user(create_access_token("u1")) == USER


def test_token_without_subject_is_ignored():
    settings = get_settings()
    token = jwt.encode({"is_admin": True}, settings.secret_key, algorithm="HS256")
    assert get_current_user(token) is None


def test_ensure_logged_in():
    assert ensure_logged_in(USER) == USER
    with pytest.raises(UnauthorizedError):
        ensure_logged_in(None)


def test_ensure_admin():
    assert ensure_admin(ADMIN) == ADMIN
    with pytest.raises(UnauthorizedError):
        ensure_admin(USER)


def test_ensure_correct_user_or_admin():
    assert ensure_correct_user_or_admin("u1", USER) == USER
    assert ensure_correct_user_or_admin("u1", ADMIN) == ADMIN
    with pytest.raises(UnauthorizedError, match="same user"):
        ensure_correct_user_or_admin("u3", USER)


@pytest.mark.parametrize(
    "method, path",
    [("post", "/companies"), ("get", "/users"), ("get", "/users/u1")],
)
def test_guards_require_login_first(method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Unauthorized"


def test_password_hashing():
    hashed = hash_password("pw")
    assert hashed != "pw"
    assert verify_password("pw", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("pw", "not-a-hash")
