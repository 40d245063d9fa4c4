from __future__ import annotations

from uuid import UUID

from taskboard.schemas.common import ApiModel, UtcDateTime


class UserSummary(ApiModel):
    """Reference to a user as embedded in project and task payloads."""

    id: UUID
    name: str
    email: str


class UserRead(ApiModel):
    id: UUID
    name: str
    email: str
    role: str
    created_at: UtcDateTime


class UserData(ApiModel):
    user: UserRead
