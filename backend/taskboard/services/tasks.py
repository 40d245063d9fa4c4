"""Task resource service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from taskboard.core.errors import NotFoundError
from taskboard.core.logging import get_logger
from taskboard.db import crud
from taskboard.db.pagination import PageParams, PageResult, paginate
from taskboard.models.projects import Project
from taskboard.models.tasks import Task
from taskboard.models.users import User
from taskboard.services.authorization import (
    Action,
    ProjectResource,
    TaskResource,
    require_access,
)
from taskboard.services.projects import require_project
from taskboard.services.query_scope import (
    MyTaskFilters,
    TaskFilters,
    scope_my_tasks_query,
    scope_task_query,
)

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.schemas.tasks import TaskCreate, TaskUpdate
    from taskboard.services.authorization import Actor

logger = get_logger(__name__)

# Payload field name -> Task column.
_REFERENCE_COLUMNS = {
    "project": "project_id",
    "assigned_to": "assigned_to_id",
}


async def require_task(session: AsyncSession, task_id: UUID) -> Task:
    task = await crud.get_by_id(session, Task, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


async def _require_assignee(session: AsyncSession, user_id: UUID | None) -> None:
    if user_id is None:
        return
    if await crud.get_by_id(session, User, user_id) is None:
        raise NotFoundError("Assigned user not found")


async def get_task_for(
    session: AsyncSession,
    actor: Actor,
    task_id: UUID,
    action: Action = Action.READ,
) -> Task:
    task = await require_task(session, task_id)
    project = await crud.get_by_id(session, Project, task.project_id)
    require_access(actor, TaskResource.of(task, project), action)
    return task


async def list_tasks(
    session: AsyncSession,
    actor: Actor,
    filters: TaskFilters,
    params: PageParams,
) -> PageResult[Task]:
    query = await scope_task_query(session, actor, filters)
    return await paginate(session, query.statement(), params)


async def list_my_tasks(session: AsyncSession, actor: Actor, filters: MyTaskFilters) -> list[Task]:
    query = scope_my_tasks_query(actor, filters)
    return list(await session.exec(query.statement()))


async def create_task(session: AsyncSession, actor: Actor, payload: TaskCreate) -> Task:
    project = await require_project(session, payload.project)
    require_access(actor, ProjectResource.of(project), Action.CREATE_TASK_UNDER)
    await _require_assignee(session, payload.assigned_to)

    data = payload.model_dump(exclude={"project", "assigned_to"})
    task = await crud.create(
        session,
        Task,
        **data,
        project_id=project.id,
        assigned_to_id=payload.assigned_to,
        created_by_id=actor.id,
    )
    logger.info(
        "task.created task_id=%s project_id=%s actor_id=%s",
        task.id,
        project.id,
        actor.id,
    )
    return task


async def update_task(
    session: AsyncSession,
    actor: Actor,
    task_id: UUID,
    payload: TaskUpdate,
) -> Task:
    task = await get_task_for(session, actor, task_id, Action.UPDATE)
    updates: dict[str, Any] = {}
    for key, value in payload.updates().items():
        updates[_REFERENCE_COLUMNS.get(key, key)] = value

    new_project_id = updates.get("project_id")
    if new_project_id is not None and new_project_id != task.project_id:
        target = await require_project(session, new_project_id)
        require_access(actor, ProjectResource.of(target), Action.CREATE_TASK_UNDER)
    if "assigned_to_id" in updates:
        await _require_assignee(session, updates["assigned_to_id"])

    task = await crud.patch(session, task, updates)
    logger.info(
        "task.updated task_id=%s actor_id=%s fields=%s",
        task.id,
        actor.id,
        ",".join(sorted(updates)),
    )
    return task


async def delete_task(session: AsyncSession, actor: Actor, task_id: UUID) -> None:
    task = await get_task_for(session, actor, task_id, Action.DELETE)
    await session.delete(task)
    await session.commit()
    logger.info("task.deleted task_id=%s actor_id=%s", task_id, actor.id)
