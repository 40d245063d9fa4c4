# ruff: noqa

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard import models  # noqa: F401
from taskboard.db.session import get_session
from taskboard.main import app

PASSWORD = "secret123"


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    async def _get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class Account:
    def __init__(self, user: dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token

    @property
    def id(self) -> str:
        return self.user["id"]

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


async def register(
    client: AsyncClient,
    name: str,
    *,
    role: str | None = None,
    password: str = PASSWORD,
) -> Account:
    body: dict[str, Any] = {
        "name": name,
        "email": f"{name.lower()}@taskboard.io",
        "password": password,
    }
    if role is not None:
        body["role"] = role
    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return Account(data["user"], data["token"])


async def create_project(client: AsyncClient, owner: Account, **overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "name": "Website relaunch",
        "description": "Rebuild the marketing site",
        "startDate": "2026-01-05T09:00:00Z",
    }
    body.update(overrides)
    response = await client.post("/api/projects", json=body, headers=owner.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["project"]


async def create_task(
    client: AsyncClient,
    actor: Account,
    project_id: str,
    **overrides: Any,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "title": "Draft copy",
        "description": "Write the landing page copy",
        "project": project_id,
    }
    body.update(overrides)
    response = await client.post("/api/tasks", json=body, headers=actor.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["task"]
