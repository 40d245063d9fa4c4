"""Ownership-based access decisions for projects and tasks.

The policy is a pure function of the acting user and a small set of ownership
facts about the target resource. It performs no I/O; callers are expected to
have resolved the resource (and returned 404 when it does not exist) before
asking for a decision.

Rules, evaluated in order (first match decides):

1. Admins are always permitted.
2. A project can be read, updated or deleted by its owner.
3. A task can be read by the parent project's owner, its assignee or its creator.
4. A task can be updated or deleted by the parent project's owner or its creator.
   Being the assignee grants visibility but not mutation rights.
5. A task can be created under a project only by that project's owner.
6. Everything else is denied.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from taskboard.core.errors import AuthorizationError
from taskboard.models.users import ROLE_ADMIN

if TYPE_CHECKING:
    from taskboard.models.projects import Project
    from taskboard.models.tasks import Task
    from taskboard.models.users import User


class Action(StrEnum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_TASK_UNDER = "createTaskUnder"


@dataclass(frozen=True, slots=True)
class Actor:
    id: UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_user(cls, user: User) -> Actor:
        return cls(id=user.id, role=user.role)


@dataclass(frozen=True, slots=True)
class ProjectResource:
    owner_id: UUID

    @classmethod
    def of(cls, project: Project) -> ProjectResource:
        return cls(owner_id=project.owner_id)


@dataclass(frozen=True, slots=True)
class TaskResource:
    project_owner_id: UUID | None
    assigned_to_id: UUID | None
    created_by_id: UUID

    @classmethod
    def of(cls, task: Task, project: Project | None) -> TaskResource:
        return cls(
            project_owner_id=project.owner_id if project is not None else None,
            assigned_to_id=task.assigned_to_id,
            created_by_id=task.created_by_id,
        )


Resource = ProjectResource | TaskResource

_TASK_READERS = ("project_owner_id", "assigned_to_id", "created_by_id")
_TASK_WRITERS = ("project_owner_id", "created_by_id")


def _task_actor_ids(resource: TaskResource, fields: tuple[str, ...]) -> set[UUID]:
    return {value for value in (getattr(resource, name) for name in fields) if value is not None}


def can_access(actor: Actor, resource: Resource, action: Action) -> bool:
    if actor.is_admin:
        return True

    if isinstance(resource, ProjectResource):
        if action in (Action.READ, Action.UPDATE, Action.DELETE, Action.CREATE_TASK_UNDER):
            return resource.owner_id == actor.id
        return False

    if isinstance(resource, TaskResource):
        if action == Action.READ:
            return actor.id in _task_actor_ids(resource, _TASK_READERS)
        if action in (Action.UPDATE, Action.DELETE):
            return actor.id in _task_actor_ids(resource, _TASK_WRITERS)
        return False

    return False


_DENIAL_MESSAGES: dict[tuple[type, Action], str] = {
    (ProjectResource, Action.READ): "Not authorized to access this project",
    (ProjectResource, Action.UPDATE): "Not authorized to update this project",
    (ProjectResource, Action.DELETE): "Not authorized to delete this project",
    (ProjectResource, Action.CREATE_TASK_UNDER): "Not authorized to create tasks in this project",
    (TaskResource, Action.READ): "Not authorized to access this task",
    (TaskResource, Action.UPDATE): "Not authorized to update this task",
    (TaskResource, Action.DELETE): "Not authorized to delete this task",
}


def denial_message(resource: Resource, action: Action) -> str:
    return _DENIAL_MESSAGES.get((type(resource), action), AuthorizationError.default_message)


def require_access(actor: Actor, resource: Resource, action: Action) -> None:
    """Raise ``AuthorizationError`` (403) unless ``actor`` may perform ``action``."""
    if not can_access(actor, resource, action):
        raise AuthorizationError(denial_message(resource, action))
