"""
Task Tracker API - Task CRUD Tests

CI-safe tests for task management without MongoDB.
"""

import uuid
from datetime import datetime

import pytest


def _timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _create(client, headers, title="Test Task", description=None):
    body = {"title": title}
    if description is not None:
        body["description"] = description
    response = client.post("/tasks", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestCreateTask:
    """Tests for POST /tasks."""

    def test_create_task_minimal(self, client, auth_headers):
        response = client.post("/tasks", json={"title": "Test Task"}, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Test Task"
        assert data["description"] is None
        assert data["id"]
        assert data["owner"]
        assert data["created_at"] == data["updated_at"]

    def test_create_task_with_description(self, client, auth_headers):
        data = _create(client, auth_headers, "Full Task", "A detailed description")
        assert data["description"] == "A detailed description"

    def test_owner_is_authenticated_user(self, client, auth_headers):
        me = client.get("/auth/me", headers=auth_headers).json()
        data = _create(client, auth_headers)
        assert data["owner"] == me["id"]

    def test_client_cannot_supply_owner(self, client, auth_headers):
        response = client.post(
            "/tasks",
            json={"title": "Sneaky", "owner": "someone-else"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_create_task_requires_auth(self, client):
        response = client.post("/tasks", json={"title": "Unauthorized"})
        assert response.status_code == 401

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_create_task_blank_title(self, client, auth_headers, title):
        response = client.post("/tasks", json={"title": title}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Task title cannot be empty"

    def test_create_task_missing_title(self, client, auth_headers):
        response = client.post("/tasks", json={"description": "no title"}, headers=auth_headers)
        assert response.status_code == 400


class TestListTasks:
    """Tests for GET /tasks."""

    def test_list_tasks_empty(self, client, auth_headers):
        response = client.get("/tasks", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_list_tasks_in_creation_order(self, client, auth_headers):
        for i in range(3):
            _create(client, auth_headers, f"Task {i}")

        response = client.get("/tasks", headers=auth_headers)
        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["Task 0", "Task 1", "Task 2"]

    def test_list_tasks_requires_auth(self, client):
        assert client.get("/tasks").status_code == 401


class TestGetTask:
    """Tests for GET /tasks/{task_id}."""

    def test_get_task_success(self, client, auth_headers):
        task_id = _create(client, auth_headers, "Retrievable Task")["id"]
        response = client.get(f"/tasks/{task_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["title"] == "Retrievable Task"

    def test_get_task_not_found(self, client, auth_headers):
        response = client.get("/tasks/nonexistent-id", headers=auth_headers)
        assert response.status_code == 404


class TestUpdateTask:
    """Tests for PUT /tasks/{task_id}."""

    def test_update_task(self, client, auth_headers):
        created = _create(client, auth_headers, "Old title", "old")
        response = client.put(
            f"/tasks/{created['id']}",
            json={"title": "New title", "description": "new"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "New title"
        assert data["description"] == "new"
        assert data["id"] == created["id"]
        assert data["owner"] == created["owner"]
        assert data["created_at"] == created["created_at"]
        assert _timestamp(data["updated_at"]) >= _timestamp(created["updated_at"])

    def test_update_without_description_clears_it(self, client, auth_headers):
        created = _create(client, auth_headers, "Title", "to be cleared")
        response = client.put(
            f"/tasks/{created['id']}",
            json={"title": "Title"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["description"] is None

    def test_update_empty_title(self, client, auth_headers):
        created = _create(client, auth_headers, "Keep me")
        response = client.put(
            f"/tasks/{created['id']}",
            json={"title": ""},
            headers=auth_headers,
        )
        assert response.status_code == 400

        stored = client.get(f"/tasks/{created['id']}", headers=auth_headers).json()
        assert stored["title"] == "Keep me"

    def test_update_not_found(self, client, auth_headers):
        response = client.put(
            f"/tasks/{uuid.uuid4()}",
            json={"title": "Nothing"},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_update_requires_auth(self, client, auth_headers):
        created = _create(client, auth_headers)
        response = client.put(f"/tasks/{created['id']}", json={"title": "x"})
        assert response.status_code == 401


class TestDeleteTask:
    """Tests for DELETE /tasks/{task_id}."""

    def test_delete_task(self, client, auth_headers):
        created = _create(client, auth_headers)
        response = client.delete(f"/tasks/{created['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""

        assert client.get(f"/tasks/{created['id']}", headers=auth_headers).status_code == 404
        assert client.get("/tasks", headers=auth_headers).json() == []

    def test_delete_twice(self, client, auth_headers):
        created = _create(client, auth_headers)
        client.delete(f"/tasks/{created['id']}", headers=auth_headers)
        response = client.delete(f"/tasks/{created['id']}", headers=auth_headers)
        assert response.status_code == 404

    def test_delete_requires_auth(self, client, auth_headers):
        created = _create(client, auth_headers)
        assert client.delete(f"/tasks/{created['id']}").status_code == 401


class TestOwnershipIsolation:
    """A user's tasks are invisible and immutable to every other user."""

    @pytest.fixture
    def foreign_task(self, client, auth_headers):
        return _create(client, auth_headers, "Ann's secret", "private")

    def test_list_excludes_other_users_tasks(self, client, foreign_task, second_auth_headers):
        response = client.get("/tasks", headers=second_auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_get_foreign_task_looks_missing(self, client, foreign_task, second_auth_headers):
        foreign = client.get(f"/tasks/{foreign_task['id']}", headers=second_auth_headers)
        missing = client.get(f"/tasks/{uuid.uuid4()}", headers=second_auth_headers)
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

    def test_update_foreign_task_looks_missing(self, client, auth_headers, foreign_task, second_auth_headers):
        foreign = client.put(
            f"/tasks/{foreign_task['id']}",
            json={"title": "Hijacked"},
            headers=second_auth_headers,
        )
        missing = client.put(
            f"/tasks/{uuid.uuid4()}",
            json={"title": "Hijacked"},
            headers=second_auth_headers,
        )
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

        stored = client.get(f"/tasks/{foreign_task['id']}", headers=auth_headers).json()
        assert stored == foreign_task

    def test_delete_foreign_task_looks_missing(self, client, auth_headers, foreign_task, second_auth_headers):
        foreign = client.delete(f"/tasks/{foreign_task['id']}", headers=second_auth_headers)
        missing = client.delete(f"/tasks/{uuid.uuid4()}", headers=second_auth_headers)
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

        assert client.get(f"/tasks/{foreign_task['id']}", headers=auth_headers).status_code == 200

    def test_each_user_sees_only_their_own(self, client, auth_headers, second_auth_headers):
        _create(client, auth_headers, "Ann 1")
        _create(client, second_auth_headers, "Bob 1")
        _create(client, auth_headers, "Ann 2")

        ann = [t["title"] for t in client.get("/tasks", headers=auth_headers).json()]
        bob = [t["title"] for t in client.get("/tasks", headers=second_auth_headers).json()]
        assert ann == ["Ann 1", "Ann 2"]
        assert bob == ["Bob 1"]
