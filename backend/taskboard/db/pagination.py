"""Page/limit pagination on top of fastapi-pagination's limit-offset machinery."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from fastapi import Query
from fastapi_pagination.bases import AbstractPage, AbstractParams, RawParams
from fastapi_pagination.ext.sqlmodel import apaginate
from pydantic import BaseModel

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession
    from sqlmodel.sql.expression import SelectOfScalar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = 1_000_000


class PageParams(BaseModel, AbstractParams):
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_PAGE, description="Page number")
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Page size")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def to_raw_params(self) -> RawParams:
        return RawParams(limit=self.limit, offset=self.skip)


class PageResult(AbstractPage[T], Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    limit: int
    pages: int

    __params_type__ = PageParams

    @property
    def count(self) -> int:
        return len(self.items)

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        params: AbstractParams,
        *,
        total: int | None = None,
        **kwargs: Any,
    ) -> PageResult[T]:
        if not isinstance(params, PageParams):
            msg = "PageResult should be used with PageParams"
            raise TypeError(msg)
        total = total or 0
        return cls(
            items=list(items),
            total=total,
            page=params.page,
            limit=params.limit,
            pages=math.ceil(total / params.limit),
            **kwargs,
        )


async def paginate(
    session: AsyncSession,
    statement: SelectOfScalar[T],
    params: PageParams,
) -> PageResult[T]:
    return await apaginate(session, statement, params)
