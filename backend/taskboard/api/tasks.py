from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard.api.deps import ACTOR_DEP, PAGE_DEP, SESSION_DEP, TASK_ID_DEP
from taskboard.db.pagination import PageParams
from taskboard.schemas.common import CountEnvelope, EmptyData, Envelope, PageEnvelope
from taskboard.schemas.tasks import (
    TaskCreate,
    TaskData,
    TaskListData,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from taskboard.services import presenters
from taskboard.services import tasks as task_service
from taskboard.services.authorization import Actor
from taskboard.services.query_scope import DEFAULT_SORT, MyTaskFilters, TaskFilters, split_tags

router = APIRouter(prefix="/tasks", tags=["tasks"])

TAGS_QUERY = Query(default=None, description="Comma separated; matches any.")
SORT_QUERY = Query(default=DEFAULT_SORT, alias="sortBy")


@router.get("", response_model=PageEnvelope[TaskListData])
async def list_tasks(
    project: UUID | None = Query(default=None),
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    priority: TaskPriority | None = Query(default=None),
    assigned_to: UUID | None = Query(default=None, alias="assignedTo"),
    tags: str | None = TAGS_QUERY,
    sort_by: str = SORT_QUERY,
    params: PageParams = PAGE_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> PageEnvelope[TaskListData]:
    """List tasks in projects the caller owns, or assigned to / created by the caller."""
    filters = TaskFilters(
        project_id=project,
        status=status_filter,
        priority=priority,
        assigned_to_id=assigned_to,
        tags=split_tags(tags),
        sort=sort_by,
    )
    result = await task_service.list_tasks(session, actor, filters, params)
    return PageEnvelope(
        count=result.count,
        total=result.total,
        page=result.page,
        pages=result.pages,
        data=TaskListData(tasks=await presenters.present_tasks(session, result.items)),
    )


@router.get("/my-tasks", response_model=CountEnvelope[TaskListData])
async def list_my_tasks(
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    priority: TaskPriority | None = Query(default=None),
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> CountEnvelope[TaskListData]:
    tasks = await task_service.list_my_tasks(
        session,
        actor,
        MyTaskFilters(status=status_filter, priority=priority),
    )
    return CountEnvelope(
        count=len(tasks),
        data=TaskListData(tasks=await presenters.present_tasks(session, tasks)),
    )


@router.get("/{task_id}", response_model=Envelope[TaskData])
async def get_task(
    task_id: UUID = TASK_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[TaskData]:
    task = await task_service.get_task_for(session, actor, task_id)
    return Envelope(data=TaskData(task=await presenters.present_task(session, task)))


@router.post("", response_model=Envelope[TaskData], status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[TaskData]:
    """Create a task in a project the caller owns; the caller becomes its creator."""
    task = await task_service.create_task(session, actor, payload)
    return Envelope(
        message="Task created successfully",
        data=TaskData(task=await presenters.present_task(session, task)),
    )


@router.put("/{task_id}", response_model=Envelope[TaskData])
async def update_task(
    payload: TaskUpdate,
    task_id: UUID = TASK_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[TaskData]:
    task = await task_service.update_task(session, actor, task_id, payload)
    return Envelope(
        message="Task updated successfully",
        data=TaskData(task=await presenters.present_task(session, task)),
    )


@router.delete("/{task_id}", response_model=Envelope[EmptyData])
async def delete_task(
    task_id: UUID = TASK_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[EmptyData]:
    await task_service.delete_task(session, actor, task_id)
    return Envelope(message="Task deleted successfully", data=EmptyData())
