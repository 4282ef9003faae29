from fastapi.testclient import TestClient

from jobly.app.main import app


def test_health_ok():
    client = TestClient(app)
    resp = client.get("/health", headers={"X-Request-ID": "abc"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "data": {"status": "ok"}}
    assert resp.headers["X-Request-ID"] == "abc"


def test_malformed_request_id_replaced():
    client = TestClient(app)
    resp = client.get("/health", headers={"X-Request-ID": "bad id\twith spaces"})
    assert resp.headers["X-Request-ID"] != "bad id\twith spaces"
    assert len(resp.headers["X-Request-ID"]) == 36


def test_not_found_returns_err():
    client = TestClient(app)
    resp = client.get("/missing")
    assert resp.status_code == 404
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["code"] == 404


def test_error_carries_request_id():
    client = TestClient(app)
    resp = client.get("/companies/nope", headers={"X-Request-ID": "req-1"})
    body = resp.json()
    assert body["request_id"] == "req-1"
    assert body["error"] == {"code": 404, "message": "No company: nope"}


def test_validation_error_lists_fields():
    client = TestClient(app)
    resp = client.post("/auth/token", json={"username": "u1"})
    assert resp.status_code == 400
    messages = resp.json()["error"]["message"]
    assert any(m.startswith("body.password") for m in messages)
