"""Small persistence helpers shared by the resource services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import delete as sa_delete
from sqlmodel import SQLModel

from taskboard.core.time import utcnow

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.sql.elements import ColumnElement
    from sqlmodel.ext.asyncio.session import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


async def get_by_id(session: AsyncSession, model: type[ModelT], obj_id: object) -> ModelT | None:
    return await session.get(model, obj_id)


async def save(session: AsyncSession, obj: ModelT) -> ModelT:
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj


async def create(session: AsyncSession, model: type[ModelT], **values: Any) -> ModelT:
    return await save(session, model(**values))


async def patch(session: AsyncSession, obj: ModelT, updates: Mapping[str, Any]) -> ModelT:
    for key, value in updates.items():
        setattr(obj, key, value)
    if hasattr(obj, "updated_at"):
        obj.updated_at = utcnow()  # type: ignore[attr-defined]
    return await save(session, obj)


async def delete_where(
    session: AsyncSession,
    model: type[SQLModel],
    *criteria: ColumnElement[bool],
    commit: bool = True,
) -> None:
    await session.execute(sa_delete(model).where(*criteria))
    if commit:
        await session.commit()
