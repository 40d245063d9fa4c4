# ruff: noqa

from taskboard.core.errors import ApiError, DuplicateError, NotFoundError


def test_api_error_defaults_to_class_message():
    error = NotFoundError()
    assert error.status_code == 404
    assert error.message == "Resource not found"
    assert str(error) == "Resource not found"


def test_api_error_keeps_custom_message():
    error = DuplicateError("User already exists")
    assert error.status_code == 400
    assert error.message == "User already exists"
    assert isinstance(error, ApiError)


async def test_health_endpoint(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "ok"
    assert body["message"] == "API is running"
    assert "timestamp" in body


async def test_root_lists_endpoints(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["tasks"] == "/api/tasks"


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not Found"


async def test_missing_token_uses_error_envelope(client):
    response = await client.get("/api/projects")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not authorized to access this route"
    assert "stack" in body


async def test_stack_is_hidden_in_production(client, monkeypatch):
    from taskboard.core.config import settings

    monkeypatch.setattr(settings, "environment", "production")
    response = await client.get("/api/projects")
    assert response.status_code == 401
    assert "stack" not in response.json()


async def test_validation_errors_name_the_field(client):
    response = await client.post("/api/auth/login", content="{not json")
    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_type_errors_are_prefixed_with_the_field(client):
    from conftest import register

    ada = await register(client, "Ada")
    response = await client.post(
        "/api/projects",
        json={"name": "p", "description": "d", "startDate": "2026-01-01", "status": "nope"},
        headers=ada.headers,
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("status: ")


async def test_successful_reads_omit_message(client):
    from conftest import register

    ada = await register(client, "Ada")
    response = await client.get("/api/projects", headers=ada.headers)
    assert response.status_code == 200
    assert "message" not in response.json()
