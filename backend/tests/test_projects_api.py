# ruff: noqa

from uuid import uuid4

import pytest

from conftest import create_project, create_task, register


async def test_create_project_sets_owner_and_defaults(client):
    ada = await register(client, "Ada")
    project = await create_project(client, ada, tags=["web", " web ", ""])
    assert project["owner"] == {"id": ada.id, "name": "Ada", "email": "ada@taskboard.io"}
    assert project["status"] == "planning"
    assert project["tags"] == ["web"]
    assert project["startDate"].startswith("2026-01-05T09:00:00")


async def test_project_dates_are_stored_as_utc(client):
    ada = await register(client, "Ada")
    project = await create_project(
        client,
        ada,
        startDate="2026-01-05T11:00:00+02:00",
        endDate="2026-03-01T00:00:00",
    )
    assert project["startDate"] == "2026-01-05T09:00:00Z"
    assert project["endDate"] == "2026-03-01T00:00:00Z"
    assert project["createdAt"].endswith("Z")

    response = await client.get(f"/api/projects/{project['id']}", headers=ada.headers)
    stored = response.json()["data"]["project"]
    assert stored["startDate"] == "2026-01-05T09:00:00Z"
    assert stored["endDate"] == "2026-03-01T00:00:00Z"
    assert stored["createdAt"] == project["createdAt"]


async def test_create_project_validates_payload(client):
    ada = await register(client, "Ada")
    response = await client.post(
        "/api/projects",
        json={"name": "x" * 101, "description": "d", "startDate": "2026-01-01", "status": "nope"},
        headers=ada.headers,
    )
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"description": "d", "startDate": "2026-01-01"}, "Please provide a project name"),
        (
            {"name": "x" * 101, "description": "d", "startDate": "2026-01-01"},
            "Project name cannot be more than 100 characters",
        ),
        (
            {"name": "p", "description": "d", "startDate": "2026-01-01", "budget": -5},
            "Budget cannot be negative",
        ),
        (
            {"name": "  "},
            "Please provide a project name, Please provide a project description, "
            "Please provide a start date",
        ),
    ],
)
async def test_create_project_reports_field_messages(client, payload, message):
    ada = await register(client, "Ada")
    response = await client.post("/api/projects", json=payload, headers=ada.headers)
    assert response.status_code == 400
    assert response.json()["message"] == message


async def test_create_project_requires_token(client):
    response = await client.post("/api/projects", json={"name": "p"})
    assert response.status_code == 401


async def test_owner_reads_project_stranger_is_forbidden(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    project = await create_project(client, ada)

    own = await client.get(f"/api/projects/{project['id']}", headers=ada.headers)
    assert own.status_code == 200
    assert own.json()["data"]["project"]["id"] == project["id"]

    other = await client.get(f"/api/projects/{project['id']}", headers=bob.headers)
    assert other.status_code == 403
    assert other.json()["message"] == "Not authorized to access this project"


async def test_get_project_includes_owner_and_tasks(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    project = await create_project(client, ada)
    task = await create_task(client, ada, project["id"], assignedTo=bob.id)

    response = await client.get(f"/api/projects/{project['id']}", headers=ada.headers)
    body = response.json()
    assert "message" not in body
    detail = body["data"]["project"]
    assert detail["owner"] == {"id": ada.id, "name": "Ada", "email": "ada@taskboard.io"}
    assert [t["id"] for t in detail["tasks"]] == [task["id"]]
    assert detail["tasks"][0]["assignedTo"]["name"] == "Bob"
    assert detail["tasks"][0]["project"]["name"] == project["name"]


async def test_admin_reads_any_project(client):
    ada = await register(client, "Ada")
    root = await register(client, "Root", role="admin")
    project = await create_project(client, ada)
    response = await client.get(f"/api/projects/{project['id']}", headers=root.headers)
    assert response.status_code == 200


async def test_missing_project_is_404_even_for_stranger(client):
    ada = await register(client, "Ada")
    response = await client.get(f"/api/projects/{uuid4()}", headers=ada.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Project not found"


async def test_malformed_project_id_is_404(client):
    ada = await register(client, "Ada")
    response = await client.get("/api/projects/not-an-id", headers=ada.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Resource not found"


async def test_list_projects_is_scoped_and_paginated(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    for index in range(3):
        await create_project(client, ada, name=f"ada-{index}")
    await create_project(client, bob, name="bob-0")

    response = await client.get("/api/projects?page=2&limit=2", headers=ada.headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["count"] == 1
    assert body["page"] == 2
    assert body["pages"] == 2
    assert all(p["owner"]["id"] == ada.id for p in body["data"]["projects"])


async def test_list_projects_for_admin_includes_everyone(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    root = await register(client, "Root", role="admin")
    await create_project(client, ada)
    await create_project(client, bob)
    response = await client.get("/api/projects", headers=root.headers)
    assert response.json()["total"] == 2


async def test_list_projects_filters_by_status_and_tags(client):
    ada = await register(client, "Ada")
    await create_project(client, ada, name="a", status="active", tags=["web"])
    await create_project(client, ada, name="b", status="active", tags=["ops"])
    await create_project(client, ada, name="c", tags=["web"])

    response = await client.get("/api/projects?status=active&tags=web", headers=ada.headers)
    names = [p["name"] for p in response.json()["data"]["projects"]]
    assert names == ["a"]


async def test_list_projects_rejects_bad_page(client):
    ada = await register(client, "Ada")
    response = await client.get("/api/projects?page=0", headers=ada.headers)
    assert response.status_code == 400


@pytest.mark.parametrize(
    "query",
    ["limit=101", "limit=100000000000000000000", "page=10000000000", "page=1e400"],
)
async def test_list_projects_rejects_out_of_range_pagination(client, query):
    ada = await register(client, "Ada")
    response = await client.get(f"/api/projects?{query}", headers=ada.headers)
    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_list_projects_accepts_largest_page_size(client):
    ada = await register(client, "Ada")
    await create_project(client, ada)
    response = await client.get("/api/projects?limit=100&page=1000000", headers=ada.headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 0
    assert body["total"] == 1
    assert body["pages"] == 1


async def test_update_project_by_owner(client):
    ada = await register(client, "Ada")
    project = await create_project(client, ada, budget=100)
    response = await client.put(
        f"/api/projects/{project['id']}",
        json={"status": "active", "budget": None},
        headers=ada.headers,
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Project updated successfully"
    updated = response.json()["data"]["project"]
    assert updated["status"] == "active"
    assert updated["budget"] is None
    assert updated["name"] == project["name"]


async def test_update_project_rejects_null_required_field(client):
    ada = await register(client, "Ada")
    project = await create_project(client, ada)
    response = await client.put(
        f"/api/projects/{project['id']}",
        json={"name": None},
        headers=ada.headers,
    )
    assert response.status_code == 400


async def test_update_project_cannot_change_owner(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    project = await create_project(client, ada)
    response = await client.put(
        f"/api/projects/{project['id']}",
        json={"owner": bob.id},
        headers=ada.headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["project"]["owner"]["id"] == ada.id


async def test_update_project_by_stranger_is_forbidden(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    project = await create_project(client, ada)
    response = await client.put(
        f"/api/projects/{project['id']}",
        json={"status": "active"},
        headers=bob.headers,
    )
    assert response.status_code == 403


async def test_delete_project_removes_its_tasks(client):
    ada = await register(client, "Ada")
    project = await create_project(client, ada)
    task = await create_task(client, ada, project["id"])

    response = await client.delete(f"/api/projects/{project['id']}", headers=ada.headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Project deleted successfully",
        "data": {},
    }

    gone = await client.get(f"/api/projects/{project['id']}", headers=ada.headers)
    assert gone.status_code == 404
    orphan = await client.get(f"/api/tasks/{task['id']}", headers=ada.headers)
    assert orphan.status_code == 404


async def test_delete_project_by_stranger_is_forbidden(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    project = await create_project(client, ada)
    response = await client.delete(f"/api/projects/{project['id']}", headers=bob.headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized to delete this project"


async def test_project_stats(client):
    ada = await register(client, "Ada")
    project = await create_project(client, ada)
    await create_task(client, ada, project["id"], status="done", priority="high", estimatedHours=3)
    await create_task(client, ada, project["id"], estimatedHours=2, actualHours=1.5)

    response = await client.get(f"/api/projects/{project['id']}/stats", headers=ada.headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["project"]["id"] == project["id"]
    assert data["project"]["owner"]["email"] == "ada@taskboard.io"
    assert len(data["project"]["tasks"]) == 2
    stats = data["stats"]
    assert stats["totalTasks"] == 2
    assert stats["tasksByStatus"] == {"todo": 1, "inProgress": 0, "review": 0, "done": 1}
    assert stats["tasksByPriority"] == {"low": 0, "medium": 1, "high": 1, "urgent": 0}
    assert stats["totalEstimatedHours"] == 5
    assert stats["totalActualHours"] == 1.5


async def test_project_stats_forbidden_for_stranger(client):
    ada, bob = await register(client, "Ada"), await register(client, "Bob")
    project = await create_project(client, ada)
    response = await client.get(f"/api/projects/{project['id']}/stats", headers=bob.headers)
    assert response.status_code == 403
