from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from taskboard.api.deps import ACTOR_DEP, PAGE_DEP, PROJECT_ID_DEP, SESSION_DEP
from taskboard.db.pagination import PageParams
from taskboard.schemas.common import EmptyData, Envelope, PageEnvelope
from taskboard.schemas.projects import (
    ProjectCreate,
    ProjectData,
    ProjectDetailData,
    ProjectListData,
    ProjectStatsData,
    ProjectStatus,
    ProjectUpdate,
)
from taskboard.services import presenters
from taskboard.services import projects as project_service
from taskboard.services.authorization import Actor
from taskboard.services.query_scope import ProjectFilters, split_tags

router = APIRouter(prefix="/projects", tags=["projects"])

TAGS_QUERY = Query(default=None, description="Comma separated; matches any.")


@router.get("", response_model=PageEnvelope[ProjectListData])
async def list_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    tags: str | None = TAGS_QUERY,
    params: PageParams = PAGE_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> PageEnvelope[ProjectListData]:
    """List projects visible to the caller (all for admins, owned otherwise)."""
    result = await project_service.list_projects(
        session,
        actor,
        ProjectFilters(status=status_filter, tags=split_tags(tags)),
        params,
    )
    return PageEnvelope(
        count=result.count,
        total=result.total,
        page=result.page,
        pages=result.pages,
        data=ProjectListData(projects=await presenters.present_projects(session, result.items)),
    )


@router.get("/{project_id}", response_model=Envelope[ProjectDetailData])
async def get_project(
    project_id: UUID = PROJECT_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[ProjectDetailData]:
    project = await project_service.get_project_for(session, actor, project_id)
    tasks = await project_service.project_tasks(session, project.id)
    detail = await presenters.present_project_detail(session, project, tasks)
    return Envelope(data=ProjectDetailData(project=detail))


@router.post("", response_model=Envelope[ProjectData], status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[ProjectData]:
    """Create a project owned by the caller."""
    project = await project_service.create_project(session, actor, payload)
    return Envelope(
        message="Project created successfully",
        data=ProjectData(project=await presenters.present_project(session, project)),
    )


@router.put("/{project_id}", response_model=Envelope[ProjectData])
async def update_project(
    payload: ProjectUpdate,
    project_id: UUID = PROJECT_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[ProjectData]:
    project = await project_service.update_project(session, actor, project_id, payload)
    return Envelope(
        message="Project updated successfully",
        data=ProjectData(project=await presenters.present_project(session, project)),
    )


@router.delete("/{project_id}", response_model=Envelope[EmptyData])
async def delete_project(
    project_id: UUID = PROJECT_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[EmptyData]:
    """Delete a project together with its tasks."""
    await project_service.delete_project(session, actor, project_id)
    return Envelope(message="Project deleted successfully", data=EmptyData())


@router.get("/{project_id}/stats", response_model=Envelope[ProjectStatsData])
async def get_project_stats(
    project_id: UUID = PROJECT_ID_DEP,
    session: AsyncSession = SESSION_DEP,
    actor: Actor = ACTOR_DEP,
) -> Envelope[ProjectStatsData]:
    project, tasks, stats = await project_service.get_project_stats(session, actor, project_id)
    detail = await presenters.present_project_detail(session, project, tasks)
    return Envelope(data=ProjectStatsData(project=detail, stats=stats))
