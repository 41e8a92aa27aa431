from fastapi.testclient import TestClient
from jobly.api.main import app


def test_request_id_header_roundtrip():
    c = TestClient(app)
    r = c.get("/health")
    assert r.status_code == 200
    assert "X-Request-Id" in r.headers
    assert len(r.headers["X-Request-Id"]) > 10


def test_request_id_passthrough():
    c = TestClient(app)
    rid = "test-rid-123"
    r = c.get("/health", headers={"X-Request-Id": rid})
    assert r.headers.get("X-Request-Id") == rid


def test_request_id_on_error_responses(client):
    r = client.get("/companies/nope", headers={"X-Request-Id": "rid-404"})
    assert r.status_code == 404
    assert r.headers.get("X-Request-Id") == "rid-404"
