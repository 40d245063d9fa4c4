"""Shared request dependencies for the API routers."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends

from taskboard.core.auth import get_actor, get_auth_context
from taskboard.core.errors import NotFoundError
from taskboard.db.pagination import PageParams
from taskboard.db.session import get_session

SESSION_DEP = Depends(get_session)
AUTH_DEP = Depends(get_auth_context)
ACTOR_DEP = Depends(get_actor)


def parse_resource_id(value: str) -> UUID:
    """Parse a path id; ids that cannot exist are reported as missing resources."""
    try:
        return UUID(value)
    except ValueError as exc:
        raise NotFoundError("Resource not found") from exc


def project_id_path(project_id: str) -> UUID:
    return parse_resource_id(project_id)


def task_id_path(task_id: str) -> UUID:
    return parse_resource_id(task_id)


PROJECT_ID_DEP = Depends(project_id_path)
TASK_ID_DEP = Depends(task_id_path)
PAGE_DEP = Depends(PageParams)
