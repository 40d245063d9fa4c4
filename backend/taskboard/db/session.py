"""Process-wide async engine and per-request sessions."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard import models  # noqa: F401  (registers tables on SQLModel.metadata)
from taskboard.core.config import settings
from taskboard.core.logging import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_async_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.database_url)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """Verify the store is reachable and, if configured, create missing tables."""
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if settings.db_auto_create:
            await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("db.ready auto_create=%s", settings.db_auto_create)


async def close_db() -> None:
    await engine.dispose()
