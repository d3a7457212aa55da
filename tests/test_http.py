import pytest
from fastapi.testclient import TestClient

from gsd.config import settings
from gsd.core.color_pool import ColorPool, get_color_pool
from gsd.database import get_db
from gsd.main import app
from gsd.security import create_access_token
from tests.conftest import TestingSessionLocal


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    pool = ColorPool()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_color_pool] = lambda: pool
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def dev_auth(monkeypatch):
    monkeypatch.setattr(settings, "DEV_AUTH_ENABLED", True)


def test_health_endpoints(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["uptime"] >= 0

    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"
    assert response.json()["checks"] == {"database": "up"}


def test_unauthenticated_request_returns_error_envelope(client):
    response = client.get("/lists", headers={"X-Request-ID": "req-123"})
    assert response.status_code == 401
    assert response.headers["X-Request-ID"] == "req-123"
    body = response.json()
    assert body["status_code"] == 401
    assert body["message"] == "Not authenticated"
    assert body["error"] == "Unauthorized"
    assert body["path"] == "/lists"
    assert body["request_id"] == "req-123"
    assert "timestamp" in body
    assert "errors" not in body


def test_invalid_bearer_token_is_rejected(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired session"


def test_dev_login_is_hidden_unless_enabled(client):
    response = client.post("/auth/dev-login", json={"email": "dev@example.com"})
    assert response.status_code == 404


def test_dev_login_sets_session_cookie_and_onboards(client, dev_auth):
    response = client.post("/auth/dev-login", json={"email": "dev@example.com", "name": "Dev"})
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "dev@example.com"
    assert body["expires_in"] == settings.jwt_expires_seconds
    assert settings.AUTH_COOKIE_NAME in response.cookies

    me = client.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["name"] == "Dev"

    lists = client.get("/lists").json()["lists"]
    assert [item["name"] for item in lists] == ["Backlog", "Today"]

    again = client.post("/auth/dev-login", json={"email": "dev@example.com"})
    assert again.json()["user"]["id"] == body["user"]["id"]
    assert len(client.get("/lists?include_done=true").json()["lists"]) == 3


def test_bearer_token_and_task_flow(client, dev_auth):
    user_id = client.post("/auth/dev-login", json={"email": "flow@example.com"}).json()["user"]["id"]
    client.cookies.clear()
    headers = {"Authorization": f"Bearer {create_access_token(user_id)}"}

    lists = client.get("/lists", headers=headers).json()["lists"]
    today = next(item for item in lists if item["name"] == "Today")

    created = client.post("/tasks", json={"title": "Write tests", "list_id": today["id"]}, headers=headers)
    assert created.status_code == 201
    task = created.json()
    assert task["color"] == "#3B82F6"

    completed = client.post(f"/tasks/{task['id']}/complete", headers=headers)
    assert completed.status_code == 200
    assert completed.json()["is_completed"] is True

    done = client.get("/done", headers=headers).json()
    assert done["total"] == 1
    assert done["tasks"][0]["title"] == "Write tests"

    deleted = client.delete(f"/lists/{today['id']}", headers=headers)
    assert deleted.status_code == 204


def test_validation_errors_list_fields(client, dev_auth):
    client.post("/auth/dev-login", json={"email": "val@example.com"})

    response = client.post("/lists", json={"name": ""})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "name"


def test_domain_errors_use_fixed_messages(client, dev_auth):
    client.post("/auth/dev-login", json={"email": "done@example.com"})
    done_list = next(item for item in client.get("/lists?include_done=true").json()["lists"] if item["is_done"])

    response = client.delete(f"/lists/{done_list['id']}")
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete Done list"
    assert response.json()["error"] == "Bad Request"


def test_logout_clears_cookie(client, dev_auth):
    client.post("/auth/dev-login", json={"email": "bye@example.com"})
    response = client.post("/auth/logout")
    assert response.status_code == 200
    client.cookies.clear()
    assert client.get("/auth/me").status_code == 401
