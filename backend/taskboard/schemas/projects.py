from __future__ import annotations

from typing import Annotated, ClassVar, Literal
from uuid import UUID

from pydantic import Field, StringConstraints

from taskboard.schemas.common import (
    ApiModel,
    CreateModel,
    PatchModel,
    Tags,
    UtcDateTime,
    max_length,
    non_negative,
)
from taskboard.schemas.tasks import TaskRead
from taskboard.schemas.users import UserSummary

ProjectStatus = Literal["planning", "active", "on-hold", "completed", "cancelled"]
ProjectName = Annotated[
    str,
    StringConstraints(strip_whitespace=True),
    max_length(100, "Project name cannot be more than 100 characters"),
]
ProjectDescription = Annotated[
    str,
    max_length(1000, "Description cannot be more than 1000 characters"),
]
Budget = Annotated[float, non_negative("Budget cannot be negative")]

PROJECT_REQUIRED_MESSAGES = {
    "name": "Please provide a project name",
    "description": "Please provide a project description",
    "start_date": "Please provide a start date",
}


class ProjectCreate(CreateModel):
    required_messages: ClassVar[dict[str, str]] = PROJECT_REQUIRED_MESSAGES

    name: ProjectName | None = None
    description: ProjectDescription | None = None
    status: ProjectStatus = "planning"
    start_date: UtcDateTime | None = None
    end_date: UtcDateTime | None = None
    budget: Budget | None = None
    tags: Tags = Field(default_factory=list)


class ProjectUpdate(PatchModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"end_date", "budget"})
    required_messages: ClassVar[dict[str, str]] = PROJECT_REQUIRED_MESSAGES

    name: ProjectName | None = None
    description: ProjectDescription | None = None
    status: ProjectStatus | None = None
    start_date: UtcDateTime | None = None
    end_date: UtcDateTime | None = None
    budget: Budget | None = None
    tags: Tags | None = None


class ProjectRead(ApiModel):
    id: UUID
    name: str
    description: str
    owner: UserSummary | None = None
    status: str
    start_date: UtcDateTime
    end_date: UtcDateTime | None = None
    budget: float | None = None
    tags: list[str]
    created_at: UtcDateTime
    updated_at: UtcDateTime


class ProjectDetailRead(ProjectRead):
    """A single project together with its tasks."""

    tasks: list[TaskRead] = Field(default_factory=list)


class ProjectData(ApiModel):
    project: ProjectRead


class ProjectDetailData(ApiModel):
    project: ProjectDetailRead


class ProjectListData(ApiModel):
    projects: list[ProjectRead]


class StatusCounts(ApiModel):
    todo: int = 0
    in_progress: int = 0
    review: int = 0
    done: int = 0


class PriorityCounts(ApiModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    urgent: int = 0


class ProjectStats(ApiModel):
    total_tasks: int
    tasks_by_status: StatusCounts
    tasks_by_priority: PriorityCounts
    total_estimated_hours: float
    total_actual_hours: float


class ProjectStatsData(ApiModel):
    project: ProjectDetailRead
    stats: ProjectStats
