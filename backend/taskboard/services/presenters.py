"""Build response models with their user and project references filled in.

References are resolved in one query per referenced table, so a page of tasks
costs at most two extra lookups regardless of its size.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from sqlmodel import SQLModel, col, select

from taskboard.models.projects import Project
from taskboard.models.users import User
from taskboard.schemas.projects import ProjectDetailRead, ProjectRead
from taskboard.schemas.tasks import ProjectSummary, TaskRead
from taskboard.schemas.users import UserSummary

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from taskboard.models.tasks import Task

ModelT = TypeVar("ModelT", bound=SQLModel)


async def _load_by_id(
    session: AsyncSession,
    model: type[ModelT],
    ids: Iterable[UUID | None],
) -> dict[UUID, ModelT]:
    wanted = {obj_id for obj_id in ids if obj_id is not None}
    if not wanted:
        return {}
    statement = select(model).where(col(model.id).in_(list(wanted)))  # type: ignore[attr-defined]
    return {row.id: row for row in await session.exec(statement)}  # type: ignore[attr-defined]


def _user_summary(users: dict[UUID, User], user_id: UUID | None) -> UserSummary | None:
    user = users.get(user_id) if user_id is not None else None
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name, email=user.email)


def _project_summary(projects: dict[UUID, Project], project_id: UUID) -> ProjectSummary | None:
    project = projects.get(project_id)
    if project is None:
        return None
    return ProjectSummary(id=project.id, name=project.name, status=project.status)


def _task_read(
    task: Task,
    users: dict[UUID, User],
    projects: dict[UUID, Project],
) -> TaskRead:
    return TaskRead.model_validate(
        {
            **task.model_dump(exclude={"project_id", "assigned_to_id", "created_by_id"}),
            "project": _project_summary(projects, task.project_id),
            "assigned_to": _user_summary(users, task.assigned_to_id),
            "created_by": _user_summary(users, task.created_by_id),
        },
    )


def _project_fields(project: Project, users: dict[UUID, User]) -> dict[str, object]:
    return {
        **project.model_dump(exclude={"owner_id"}),
        "owner": _user_summary(users, project.owner_id),
    }


async def present_tasks(session: AsyncSession, tasks: Sequence[Task]) -> list[TaskRead]:
    users = await _load_by_id(
        session,
        User,
        [task.assigned_to_id for task in tasks] + [task.created_by_id for task in tasks],
    )
    projects = await _load_by_id(session, Project, [task.project_id for task in tasks])
    return [_task_read(task, users, projects) for task in tasks]


async def present_task(session: AsyncSession, task: Task) -> TaskRead:
    return (await present_tasks(session, [task]))[0]


async def present_projects(session: AsyncSession, projects: Sequence[Project]) -> list[ProjectRead]:
    users = await _load_by_id(session, User, [project.owner_id for project in projects])
    return [ProjectRead.model_validate(_project_fields(project, users)) for project in projects]


async def present_project(session: AsyncSession, project: Project) -> ProjectRead:
    return (await present_projects(session, [project]))[0]


async def present_project_detail(
    session: AsyncSession,
    project: Project,
    tasks: Sequence[Task],
) -> ProjectDetailRead:
    users = await _load_by_id(session, User, [project.owner_id])
    return ProjectDetailRead.model_validate(
        {**_project_fields(project, users), "tasks": await present_tasks(session, tasks)},
    )
