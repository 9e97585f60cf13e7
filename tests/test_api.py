"""Tests for the JSON routes of the Flask app."""

import pytest

import website

from .fakes import FakeDataStore


@pytest.fixture
def client(data_store: FakeDataStore, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(website, "DATA_STORE", data_store)
    website.app.config["TESTING"] = True
    return website.app.test_client()


def test_api_data(client, data_store: FakeDataStore) -> None:
    response = client.get("/api/data")

    assert response.status_code == 200
    body = response.get_json()
    assert [task["id"] for task in body["tasks"]] == ["t1", "t2", "t3"]
    assert [person["name"] for person in body["people"]] == ["Alice", "Bob"]
    assert body["project"]["dates"][0] == website.SETTINGS.first_date
    assert "created_at" not in body["tasks"][0]


def test_api_tasks_list(client) -> None:
    response = client.get("/api/tasks")

    assert response.status_code == 200
    assert response.get_json()[2]["executor"] == ["Alice", "Bob"]


def test_api_people(client) -> None:
    response = client.get("/api/people")

    assert response.get_json() == [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]


def test_api_create_task(client, data_store: FakeDataStore) -> None:
    response = client.post(
        "/api/tasks",
        json={"title": "Prepare brief", "priority": "2", "executor": "Alice, Bob ,  ", "category": "legal"},
    )

    assert response.status_code == 201
    task = response.get_json()
    assert task["id"].startswith("custom-")
    assert task["executor"] == ["Alice", "Bob"]
    assert task["priority"] == 2
    assert task["status"] == "pending"
    assert task["risks"] is None
    assert data_store.tasks[-1]["title"] == "Prepare brief"


def test_api_create_task_requires_title(client, data_store: FakeDataStore) -> None:
    response = client.post("/api/tasks", json={"title": "  "})

    assert response.status_code == 400
    assert data_store.calls == []


def test_api_create_task_rejects_bad_priority(client) -> None:
    response = client.post("/api/tasks", json={"title": "Prepare brief", "priority": "high"})

    assert response.status_code == 400


def test_api_create_task_rejects_non_object(client) -> None:
    response = client.post("/api/tasks", json=["Prepare brief"])

    assert response.status_code == 400


def test_api_create_task_failure(client, data_store: FakeDataStore) -> None:
    data_store.failing.add("insert_task")

    response = client.post("/api/tasks", json={"title": "Prepare brief"})

    assert response.status_code == 502
    assert response.get_json() == {"error": "Failed to create task"}


def test_api_update_status(client, data_store: FakeDataStore) -> None:
    response = client.put("/api/tasks/t1/status", json={"status": "blocked"})

    assert response.status_code == 200
    assert data_store.calls == [("update_task_status", ("t1", "blocked"))]


def test_api_update_status_rejects_unknown_status(client, data_store: FakeDataStore) -> None:
    response = client.put("/api/tasks/t1/status", json={"status": "archived"})

    assert response.status_code == 400
    assert data_store.calls == []


def test_api_data_store_failure_returns_502(client, data_store: FakeDataStore) -> None:
    data_store.failing.add("list_tasks")

    response = client.get("/api/tasks")

    assert response.status_code == 502
    assert response.get_json() == {"error": "list_tasks failed"}


def test_api_db_health(client, data_store: FakeDataStore) -> None:
    assert client.get("/api/db-health").get_json() == {"ok": True}

    data_store.failing.add("ping")
    assert client.get("/api/db-health").get_json() == {"ok": False}
