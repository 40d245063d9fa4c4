"""Project resource service: existence, then authorization, then the store operation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import col, select

from taskboard.core.errors import NotFoundError
from taskboard.core.logging import get_logger
from taskboard.db import crud
from taskboard.db.pagination import PageParams, PageResult, paginate
from taskboard.models.projects import Project
from taskboard.models.tasks import Task
from taskboard.services.authorization import Action, ProjectResource, require_access
from taskboard.services.project_stats import compute_project_stats
from taskboard.services.query_scope import ProjectFilters, scope_project_query

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.schemas.projects import ProjectCreate, ProjectStats, ProjectUpdate
    from taskboard.services.authorization import Actor

logger = get_logger(__name__)


async def require_project(session: AsyncSession, project_id: UUID) -> Project:
    project = await crud.get_by_id(session, Project, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


async def get_project_for(
    session: AsyncSession,
    actor: Actor,
    project_id: UUID,
    action: Action = Action.READ,
) -> Project:
    project = await require_project(session, project_id)
    require_access(actor, ProjectResource.of(project), action)
    return project


async def list_projects(
    session: AsyncSession,
    actor: Actor,
    filters: ProjectFilters,
    params: PageParams,
) -> PageResult[Project]:
    query = scope_project_query(actor, filters)
    return await paginate(session, query.statement(), params)


async def create_project(session: AsyncSession, actor: Actor, payload: ProjectCreate) -> Project:
    data = payload.model_dump()
    project = await crud.create(session, Project, **data, owner_id=actor.id)
    logger.info("project.created project_id=%s owner_id=%s", project.id, actor.id)
    return project


async def update_project(
    session: AsyncSession,
    actor: Actor,
    project_id: UUID,
    payload: ProjectUpdate,
) -> Project:
    project = await get_project_for(session, actor, project_id, Action.UPDATE)
    updates = payload.updates()
    project = await crud.patch(session, project, updates)
    logger.info(
        "project.updated project_id=%s actor_id=%s fields=%s",
        project.id,
        actor.id,
        ",".join(sorted(updates)),
    )
    return project


async def delete_project(session: AsyncSession, actor: Actor, project_id: UUID) -> None:
    project = await get_project_for(session, actor, project_id, Action.DELETE)
    # Tasks reference the project, so remove them first.
    await crud.delete_where(session, Task, col(Task.project_id) == project.id, commit=False)
    await session.delete(project)
    await session.commit()
    logger.info("project.deleted project_id=%s actor_id=%s", project_id, actor.id)


async def project_tasks(session: AsyncSession, project_id: UUID) -> list[Task]:
    statement = (
        select(Task)
        .where(col(Task.project_id) == project_id)
        .order_by(col(Task.created_at))
    )
    return list(await session.exec(statement))


async def get_project_stats(
    session: AsyncSession,
    actor: Actor,
    project_id: UUID,
) -> tuple[Project, list[Task], ProjectStats]:
    project = await get_project_for(session, actor, project_id, Action.READ)
    tasks = await project_tasks(session, project.id)
    return project, tasks, compute_project_stats(tasks)
