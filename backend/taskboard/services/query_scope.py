"""List-query construction: typed filters plus one visibility scope per resource."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Text, cast, or_
from sqlmodel import SQLModel, col, select

from taskboard.core.errors import ValidationError
from taskboard.models.projects import Project
from taskboard.models.tasks import Task

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy.sql.elements import ColumnElement
    from sqlmodel.ext.asyncio.session import AsyncSession
    from sqlmodel.sql.expression import SelectOfScalar

    from taskboard.services.authorization import Actor

ModelT = TypeVar("ModelT", bound=SQLModel)

DEFAULT_SORT = "-createdAt"

PROJECT_SORT_FIELDS: dict[str, Any] = {
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
    "name": Project.name,
    "status": Project.status,
    "startDate": Project.start_date,
    "endDate": Project.end_date,
    "budget": Project.budget,
}

TASK_SORT_FIELDS: dict[str, Any] = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "title": Task.title,
    "status": Task.status,
    "priority": Task.priority,
    "dueDate": Task.due_date,
    "estimatedHours": Task.estimated_hours,
    "actualHours": Task.actual_hours,
}


def split_tags(raw: str | None) -> tuple[str, ...]:
    """Parse the ``tags`` query parameter (comma separated) into a tuple."""
    if not raw:
        return ()
    return tuple(tag.strip() for tag in raw.split(",") if tag.strip())


@dataclass(frozen=True, slots=True)
class ProjectFilters:
    status: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TaskFilters:
    project_id: UUID | None = None
    status: str | None = None
    priority: str | None = None
    assigned_to_id: UUID | None = None
    tags: tuple[str, ...] = ()
    sort: str = DEFAULT_SORT


@dataclass(frozen=True, slots=True)
class MyTaskFilters:
    status: str | None = None
    priority: str | None = None


@dataclass(frozen=True, slots=True)
class ScopedQuery(Generic[ModelT]):
    model: type[ModelT]
    predicates: tuple[ColumnElement[bool], ...] = ()
    ordering: tuple[Any, ...] = field(default_factory=tuple)

    def statement(self) -> SelectOfScalar[ModelT]:
        statement = select(self.model)
        if self.predicates:
            statement = statement.where(*self.predicates)
        if self.ordering:
            statement = statement.order_by(*self.ordering)
        return statement


def tags_predicate(column: Any, tags: Iterable[str]) -> ColumnElement[bool] | None:
    """Match rows whose JSON tag list contains any of ``tags``.

    Tags are stored as a JSON array, so each tag appears in the serialized text
    as its JSON string literal (quotes included).
    """
    clauses = [
        cast(column, Text).contains(json.dumps(tag), autoescape=True) for tag in tags
    ]
    if not clauses:
        return None
    return or_(*clauses)


def parse_sort(sort: str | None, fields: Mapping[str, Any]) -> tuple[Any, ...]:
    """Turn ``"-createdAt"`` / ``"priority,-dueDate"`` into ORDER BY clauses."""
    tokens = [token for token in re.split(r"[,\s]+", sort or DEFAULT_SORT) if token]
    ordering: list[Any] = []
    for token in tokens:
        descending = token.startswith("-")
        name = token.lstrip("-+")
        column = fields.get(name)
        if column is None:
            allowed = ", ".join(sorted(fields))
            raise ValidationError(f"Invalid sort field '{name}'. Allowed: {allowed}")
        ordering.append(col(column).desc() if descending else col(column).asc())
    return tuple(ordering)


def project_filter_predicates(filters: ProjectFilters) -> list[ColumnElement[bool]]:
    predicates: list[ColumnElement[bool]] = []
    if filters.status:
        predicates.append(col(Project.status) == filters.status)
    tag_clause = tags_predicate(Project.tags, filters.tags)
    if tag_clause is not None:
        predicates.append(tag_clause)
    return predicates


def task_filter_predicates(filters: TaskFilters) -> list[ColumnElement[bool]]:
    predicates: list[ColumnElement[bool]] = []
    if filters.project_id is not None:
        predicates.append(col(Task.project_id) == filters.project_id)
    if filters.status:
        predicates.append(col(Task.status) == filters.status)
    if filters.priority:
        predicates.append(col(Task.priority) == filters.priority)
    if filters.assigned_to_id is not None:
        predicates.append(col(Task.assigned_to_id) == filters.assigned_to_id)
    tag_clause = tags_predicate(Task.tags, filters.tags)
    if tag_clause is not None:
        predicates.append(tag_clause)
    return predicates


def project_scope(actor: Actor) -> ColumnElement[bool] | None:
    if actor.is_admin:
        return None
    return col(Project.owner_id) == actor.id


def task_scope(actor: Actor, owned_project_ids: Sequence[UUID]) -> ColumnElement[bool] | None:
    if actor.is_admin:
        return None
    return or_(
        col(Task.project_id).in_(list(owned_project_ids)),
        col(Task.assigned_to_id) == actor.id,
        col(Task.created_by_id) == actor.id,
    )


def _with_scope(
    scope: ColumnElement[bool] | None,
    predicates: list[ColumnElement[bool]],
) -> tuple[ColumnElement[bool], ...]:
    if scope is None:
        return tuple(predicates)
    return (*predicates, scope)


def scope_project_query(actor: Actor, filters: ProjectFilters) -> ScopedQuery[Project]:
    return ScopedQuery(
        model=Project,
        predicates=_with_scope(project_scope(actor), project_filter_predicates(filters)),
        ordering=parse_sort(DEFAULT_SORT, PROJECT_SORT_FIELDS),
    )


def build_task_query(
    actor: Actor,
    filters: TaskFilters,
    owned_project_ids: Sequence[UUID] = (),
) -> ScopedQuery[Task]:
    return ScopedQuery(
        model=Task,
        predicates=_with_scope(task_scope(actor, owned_project_ids), task_filter_predicates(filters)),
        ordering=parse_sort(filters.sort, TASK_SORT_FIELDS),
    )


async def owned_project_ids(session: AsyncSession, actor: Actor) -> list[UUID]:
    statement = select(Project.id).where(col(Project.owner_id) == actor.id)
    return list(await session.exec(statement))


async def scope_task_query(
    session: AsyncSession,
    actor: Actor,
    filters: TaskFilters,
) -> ScopedQuery[Task]:
    """Build the task list query, resolving the actor's owned projects first."""
    if actor.is_admin:
        return build_task_query(actor, filters)
    return build_task_query(actor, filters, await owned_project_ids(session, actor))


def scope_my_tasks_query(actor: Actor, filters: MyTaskFilters) -> ScopedQuery[Task]:
    predicates: list[ColumnElement[bool]] = [col(Task.assigned_to_id) == actor.id]
    if filters.status:
        predicates.append(col(Task.status) == filters.status)
    if filters.priority:
        predicates.append(col(Task.priority) == filters.priority)
    return ScopedQuery(
        model=Task,
        predicates=tuple(predicates),
        ordering=parse_sort(DEFAULT_SORT, TASK_SORT_FIELDS),
    )
