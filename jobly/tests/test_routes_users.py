# test_routes_users.py

from fastapi.testclient import TestClient

from jobly.app.auth import decode_token
from jobly.app.main import app

client = TestClient(app)

NEW_USER = {
    "username": "u-new",
    "firstName": "First-new",
    "lastName": "Last-new",
    "password": "password-new",
    "email": "new@email.com",
    "isAdmin": False,
}


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_create_for_admin(admin_token):
    resp = client.post("/users", json=NEW_USER, headers=_auth(admin_token))
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["user"] == {
        "username": "u-new",
        "firstName": "First-new",
        "lastName": "Last-new",
        "email": "new@email.com",
        "isAdmin": False,
    }
    assert decode_token(data["token"]).username == "u-new"


def test_create_admin_for_admin(admin_token):
    resp = client.post(
        "/users", json={**NEW_USER, "isAdmin": True}, headers=_auth(admin_token)
    )
    assert resp.status_code == 201
    assert decode_token(resp.json()["data"]["token"]).is_admin is True


def test_create_unauth_for_non_admin(u1_token):
    resp = client.post("/users", json=NEW_USER, headers=_auth(u1_token))
    assert resp.status_code == 401


def test_create_bad_email(admin_token):
    resp = client.post(
        "/users", json={**NEW_USER, "email": "not-an-email"}, headers=_auth(admin_token)
    )
    assert resp.status_code == 400


def test_list_for_admin(admin_token):
    resp = client.get("/users", headers=_auth(admin_token))
    assert resp.status_code == 200
    assert [u["username"] for u in resp.json()["data"]["users"]] == ["u1", "u2", "u3"]


def test_list_unauth_for_non_admin(u1_token):
    assert client.get("/users", headers=_auth(u1_token)).status_code == 401


def test_get_self(u1_token):
    resp = client.get("/users/u1", headers=_auth(u1_token))
    assert resp.status_code == 200
    assert resp.json()["data"]["user"] == {
        "username": "u1",
        "firstName": "U1F",
        "lastName": "U1L",
        "email": "user1@user.com",
        "isAdmin": False,
    }


def test_get_other_user_unauth(u1_token):
    assert client.get("/users/u3", headers=_auth(u1_token)).status_code == 401


def test_get_other_user_as_admin(admin_token):
    assert client.get("/users/u3", headers=_auth(admin_token)).status_code == 200


def test_get_not_found(admin_token):
    assert client.get("/users/nope", headers=_auth(admin_token)).status_code == 404


def test_update_self(u1_token):
    resp = client.patch("/users/u1", json={"firstName": "New"}, headers=_auth(u1_token))
    assert resp.status_code == 200
    assert resp.json()["data"]["user"]["firstName"] == "New"


def test_update_password_allows_new_login(u1_token):
    resp = client.patch(
        "/users/u1", json={"password": "new-password"}, headers=_auth(u1_token)
    )
    assert resp.status_code == 200
    login = client.post(
        "/auth/token", json={"username": "u1", "password": "new-password"}
    )
    assert login.status_code == 200


def test_update_cannot_grant_admin(u1_token):
    resp = client.patch("/users/u1", json={"isAdmin": True}, headers=_auth(u1_token))
    assert resp.status_code == 400


def test_admin_cannot_patch_admin_flag(admin_token):
    resp = client.patch("/users/u1", json={"isAdmin": True}, headers=_auth(admin_token))
    assert resp.status_code == 400
    user = client.get("/users/u1", headers=_auth(admin_token)).json()["data"]["user"]
    assert user["isAdmin"] is False


def test_update_other_user_unauth(u1_token):
    resp = client.patch("/users/u3", json={"firstName": "x"}, headers=_auth(u1_token))
    assert resp.status_code == 401


def test_update_empty_body(u1_token):
    resp = client.patch("/users/u1", json={}, headers=_auth(u1_token))
    assert resp.status_code == 400


def test_delete_self(u1_token):
    resp = client.delete("/users/u1", headers=_auth(u1_token))
    assert resp.json() == {"ok": True, "data": {"deleted": "u1"}}


def test_delete_anon():
    assert client.delete("/users/u1").status_code == 401


def test_delete_not_found(admin_token):
    assert client.delete("/users/nope", headers=_auth(admin_token)).status_code == 404
