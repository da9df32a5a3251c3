from __future__ import annotations

from fastapi.testclient import TestClient

from todolist.config import Settings
from todolist.errors import StoreConnectionError
from todolist.main import create_app, get_store


def test_root(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "App is working"}


def test_create_and_list(client) -> None:
    resp = client.post("/tasks", json={"title": " Buy milk ", "description": "2% reduced fat"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["title"] == "Buy milk"
    assert body["description"] == "2% reduced fat"
    assert body["completed"] is False
    assert set(body) == {"id", "title", "description", "completed", "createdAt"}

    listed = client.get("/tasks").json()
    assert [t["id"] for t in listed] == [body["id"]]


def test_create_without_description(client) -> None:
    resp = client.post("/tasks", json={"title": "Walk"})
    assert resp.status_code == 201
    assert resp.json()["description"] == ""


def test_create_validation_failures_return_400(client) -> None:
    assert client.post("/tasks", json={}).status_code == 400
    resp = client.post("/tasks", json={"title": "   "})
    assert resp.status_code == 400
    assert "title" in resp.json()["detail"]
    assert client.get("/tasks").json() == []


def test_get_single_task(client) -> None:
    created = client.post("/tasks", json={"title": "One"}).json()
    assert client.get(f"/tasks/{created['id']}").json()["title"] == "One"
    assert client.get("/tasks/nope").status_code == 404


def test_update_keeps_completed_flag(client) -> None:
    created = client.post("/tasks", json={"title": "Buy milk"}).json()
    client.patch(f"/tasks/{created['id']}/toggle", json={"completed": True})

    resp = client.put(f"/tasks/{created['id']}", json={"title": "Buy oat milk"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Buy oat milk"
    assert body["completed"] is True
    assert body["createdAt"] == created["createdAt"]


def test_update_blank_title_is_400(client) -> None:
    created = client.post("/tasks", json={"title": "Keep me"}).json()
    resp = client.put(f"/tasks/{created['id']}", json={"title": " "})
    assert resp.status_code == 400
    assert client.get(f"/tasks/{created['id']}").json()["title"] == "Keep me"


def test_toggle(client) -> None:
    created = client.post("/tasks", json={"title": "Toggle me"}).json()

    resp = client.patch(f"/tasks/{created['id']}/toggle", json={"completed": True})
    assert resp.status_code == 200
    assert resp.json()["completed"] is True

    resp = client.patch(f"/tasks/{created['id']}/toggle", json={"completed": False})
    assert resp.json()["completed"] is False


def test_toggle_requires_flag(client) -> None:
    created = client.post("/tasks", json={"title": "x"}).json()
    assert client.patch(f"/tasks/{created['id']}/toggle", json={}).status_code == 400


def test_unknown_id_is_404(client) -> None:
    assert client.put("/tasks/nope", json={"title": "x"}).status_code == 404
    assert client.patch("/tasks/nope/toggle", json={"completed": True}).status_code == 404
    resp = client.delete("/tasks/nope")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Task nope not found"


def test_delete(client) -> None:
    created = client.post("/tasks", json={"title": "Remove me"}).json()

    resp = client.delete(f"/tasks/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Task deleted successfully", "id": created["id"]}
    assert client.get("/tasks").json() == []
    assert client.delete(f"/tasks/{created['id']}").status_code == 404


class _UnreachableStore:
    def get_all(self):
        raise StoreConnectionError("connection refused")


def test_store_connection_failure_is_500(app, client) -> None:
    app.dependency_overrides[get_store] = _UnreachableStore
    try:
        resp = client.get("/tasks")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "connection refused"}


def test_metrics_exposed(client) -> None:
    client.get("/tasks")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")


def test_created_at_carries_utc_offset(client) -> None:
    created = client.post("/tasks", json={"title": "Stamp me"}).json()
    listed = client.get("/tasks").json()[0]

    assert created["createdAt"].endswith("+00:00") or created["createdAt"].endswith("Z")
    assert listed["createdAt"] == created["createdAt"]


def test_in_memory_database_serves_requests() -> None:
    settings = Settings(database_url="sqlite:///:memory:", metrics_enabled=False)
    with TestClient(create_app(settings)) as c:
        created = c.post("/tasks", json={"title": "x"})
        assert created.status_code == 201
        assert [t["id"] for t in c.get("/tasks").json()] == [created.json()["id"]]
