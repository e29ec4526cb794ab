"""
Task API tests - create/read/update/delete, filtering, pagination, per-user listing.
"""

import pytest
from httpx import AsyncClient


async def _create_task(client: AsyncClient, user_id: int, **fields) -> dict:
    payload = {"title": "Task", "user_id": user_id, **fields}
    response = await client.post("/api/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_create_task(client: AsyncClient, test_user: dict):
    response = await client.post(
        "/api/tasks",
        json={
            "title": "  Test Task ",
            "description": "This is a test task",
            "status": "in_progress",
            "deadline": "2024-12-31",
            "user_id": str(test_user["id"]),
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Task created successfully"
    data = body["data"]
    assert data["title"] == "Test Task"
    assert data["status"] == "in_progress"
    assert data["deadline"] == "2024-12-31"
    assert data["user_id"] == test_user["id"]


@pytest.mark.asyncio
async def test_create_task_minimal(client: AsyncClient, test_user: dict):
    data = await _create_task(client, test_user["id"], title="Minimal Task")
    assert data["status"] == "pending"
    assert data["description"] is None
    assert data["deadline"] is None


@pytest.mark.asyncio
async def test_create_task_for_unknown_user(client: AsyncClient, test_user: dict):
    response = await client.post("/api/tasks", json={"title": "Orphan", "user_id": 99999})
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Assigned user not found"}

    listing = await client.get("/api/tasks")
    assert listing.json()["pagination"]["totalCount"] == 0


@pytest.mark.asyncio
async def test_create_task_validation(client: AsyncClient, test_user: dict):
    response = await client.post(
        "/api/tasks",
        json={"description": "No title", "status": "invalid_status", "deadline": "invalid-date", "user_id": test_user["id"]},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == [
        "Title is required and must be a non-empty string",
        "Status must be one of: pending, in_progress, completed",
        "Deadline must be a valid date in YYYY-MM-DD format",
    ]


@pytest.mark.asyncio
async def test_title_length_boundary(client: AsyncClient, test_user: dict):
    ok = await client.post("/api/tasks", json={"title": "x" * 200, "user_id": test_user["id"]})
    assert ok.status_code == 201

    too_long = await client.post("/api/tasks", json={"title": "x" * 201, "user_id": test_user["id"]})
    assert too_long.status_code == 400
    assert too_long.json()["errors"] == ["Title must be less than 200 characters"]


@pytest.mark.asyncio
async def test_get_task_with_user(client: AsyncClient, test_user: dict, test_task: dict):
    response = await client.get(f"/api/tasks/{test_task['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task retrieved successfully"
    data = body["data"]
    assert data["id"] == test_task["id"]
    assert data["user"] == {"id": test_user["id"], "name": "Test User", "email": "test@example.com"}

    again = await client.get(f"/api/tasks/{test_task['id']}")
    assert again.json() == body


@pytest.mark.asyncio
async def test_get_task_invalid_and_missing(client: AsyncClient):
    invalid = await client.get("/api/tasks/invalid-id")
    assert invalid.status_code == 400
    assert "Invalid ID parameter" in invalid.json()["message"]
    assert "errors" not in invalid.json()

    missing = await client.get("/api/tasks/99999")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Task not found"


@pytest.mark.asyncio
async def test_list_tasks_embeds_user_and_paginates(client: AsyncClient, test_user: dict):
    for i in range(7):
        await _create_task(client, test_user["id"], title=f"T{i}")

    response = await client.get("/api/tasks", params={"page": 2, "limit": 3})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Tasks retrieved successfully"
    assert [t["title"] for t in body["data"]] == ["T3", "T2", "T1"]
    assert body["data"][0]["user"]["email"] == "test@example.com"
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalCount": 7,
        "hasNextPage": True,
        "hasPrevPage": True,
        "limit": 3,
    }


@pytest.mark.asyncio
async def test_list_tasks_default_pagination(client: AsyncClient, test_user: dict):
    await _create_task(client, test_user["id"])
    body = (await client.get("/api/tasks")).json()
    assert body["pagination"]["currentPage"] == 1
    assert body["pagination"]["limit"] == 10
    assert body["pagination"]["hasPrevPage"] is False


@pytest.mark.asyncio
async def test_filters_are_conjunctive(client: AsyncClient, test_user: dict):
    other = (await client.post("/api/users", json={"name": "Bob", "email": "bob@x.com"})).json()["data"]
    await _create_task(client, test_user["id"], title="mine pending", status="pending")
    await _create_task(client, test_user["id"], title="mine done", status="completed")
    await _create_task(client, other["id"], title="bob pending", status="pending")

    response = await client.get("/api/tasks", params={"status": "pending", "user_id": test_user["id"]})
    body = response.json()
    assert [t["title"] for t in body["data"]] == ["mine pending"]
    assert body["pagination"]["totalCount"] == 1

    by_deadline = await client.get("/api/tasks", params={"deadline": "2030-01-01"})
    assert by_deadline.json()["data"] == []


@pytest.mark.asyncio
async def test_invalid_query_parameters(client: AsyncClient):
    response = await client.get("/api/tasks", params={"status": "invalid_status", "limit": 500})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid query parameters"
    assert "Status filter must be one of: pending, in_progress, completed" in body["errors"]
    assert "Limit must be a positive integer between 1 and 100" in body["errors"]


@pytest.mark.asyncio
async def test_partial_update(client: AsyncClient, test_task: dict):
    response = await client.put(f"/api/tasks/{test_task['id']}", json={"status": "completed"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task updated successfully"
    data = body["data"]
    assert data["status"] == "completed"
    assert data["title"] == test_task["title"]
    assert data["description"] == test_task["description"]
    assert data["deadline"] == test_task["deadline"]
    assert data["user"]["name"] == "Test User"


@pytest.mark.asyncio
async def test_update_ignores_user_id(client: AsyncClient, test_user: dict, test_task: dict):
    response = await client.put(
        f"/api/tasks/{test_task['id']}", json={"title": "Renamed", "user_id": 12345}
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == test_user["id"]


@pytest.mark.asyncio
async def test_empty_update_rejected(client: AsyncClient, test_task: dict):
    response = await client.put(f"/api/tasks/{test_task['id']}", json={})
    assert response.status_code == 400
    assert response.json()["errors"] == [
        "At least one field (title, description, status, deadline) must be provided for update"
    ]


@pytest.mark.asyncio
async def test_update_missing_task(client: AsyncClient):
    response = await client.put("/api/tasks/99999", json={"title": "Updated Title"})
    assert response.status_code == 404
    assert response.json()["message"] == "Task not found"


@pytest.mark.asyncio
async def test_delete_task(client: AsyncClient, test_task: dict):
    response = await client.delete(f"/api/tasks/{test_task['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Task deleted successfully"}

    gone = await client.get(f"/api/tasks/{test_task['id']}")
    assert gone.status_code == 404
    again = await client.delete(f"/api/tasks/{test_task['id']}")
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_list_tasks_by_user(client: AsyncClient, test_user: dict):
    other = (await client.post("/api/users", json={"name": "Bob", "email": "bob@x.com"})).json()["data"]
    await _create_task(client, test_user["id"], title="mine")
    await _create_task(client, other["id"], title="bob's")

    # user_id in the query string cannot widen the listing
    response = await client.get(f"/api/tasks/user/{test_user['id']}", params={"user_id": other["id"]})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User tasks retrieved successfully"
    assert [t["title"] for t in body["data"]] == ["mine"]
    assert body["pagination"]["totalCount"] == 1


@pytest.mark.asyncio
async def test_list_tasks_by_user_errors(client: AsyncClient):
    invalid = await client.get("/api/tasks/user/abc")
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid user ID parameter. User ID must be a positive integer"

    missing = await client.get("/api/tasks/user/9999")
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_deleting_user_hides_their_tasks(client: AsyncClient, test_user: dict, test_task: dict):
    await client.delete(f"/api/users/{test_user['id']}")

    assert (await client.get(f"/api/tasks/{test_task['id']}")).status_code == 404
    assert (await client.get("/api/tasks")).json()["data"] == []


@pytest.mark.asyncio
async def test_create_task_with_null_deadline(client: AsyncClient, test_user: dict):
    response = await client.post(
        "/api/tasks", json={"title": "No deadline", "user_id": test_user["id"], "deadline": None}
    )
    assert response.status_code == 201
    assert response.json()["data"]["deadline"] is None


@pytest.mark.asyncio
async def test_update_with_null_deadline_clears_it(client: AsyncClient, test_task: dict):
    assert test_task["deadline"] == "2024-12-31"

    response = await client.put(f"/api/tasks/{test_task['id']}", json={"title": "Undated", "deadline": None})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Undated"
    assert data["deadline"] is None

    stored = (await client.get(f"/api/tasks/{test_task['id']}")).json()["data"]
    assert stored["deadline"] is None


@pytest.mark.asyncio
async def test_null_deadline_alone_is_not_an_update(client: AsyncClient, test_task: dict):
    response = await client.put(f"/api/tasks/{test_task['id']}", json={"deadline": None})
    assert response.status_code == 400
    assert response.json()["errors"] == [
        "At least one field (title, description, status, deadline) must be provided for update"
    ]


@pytest.mark.asyncio
async def test_description_length_boundary(client: AsyncClient, test_user: dict):
    ok = await client.post(
        "/api/tasks", json={"title": "x", "description": "d" * 1000, "user_id": test_user["id"]}
    )
    assert ok.status_code == 201
    assert len(ok.json()["data"]["description"]) == 1000

    too_long = await client.post(
        "/api/tasks", json={"title": "x", "description": "d" * 1001, "user_id": test_user["id"]}
    )
    assert too_long.status_code == 400
    assert too_long.json()["errors"] == ["Description must be less than 1000 characters"]


@pytest.mark.asyncio
async def test_create_task_from_form_body(client: AsyncClient, test_user: dict):
    response = await client.post(
        "/api/tasks",
        data={"title": "Form task", "status": "completed", "deadline": "2025-03-01", "user_id": str(test_user["id"])},
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert (data["title"], data["status"], data["deadline"]) == ("Form task", "completed", "2025-03-01")
    assert data["user_id"] == test_user["id"]
