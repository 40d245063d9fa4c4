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
from taskboard.schemas.users import UserSummary

TaskStatus = Literal["todo", "in-progress", "review", "done"]
TaskPriority = Literal["low", "medium", "high", "urgent"]
TaskTitle = Annotated[
    str,
    StringConstraints(strip_whitespace=True),
    max_length(200, "Task title cannot be more than 200 characters"),
]
TaskDescription = Annotated[
    str,
    max_length(2000, "Description cannot be more than 2000 characters"),
]
EstimatedHours = Annotated[float, non_negative("Estimated hours cannot be negative")]
ActualHours = Annotated[float, non_negative("Actual hours cannot be negative")]

TASK_REQUIRED_MESSAGES = {
    "title": "Please provide a task title",
    "description": "Please provide a task description",
    "project": "Task must belong to a project",
}


class TaskCreate(CreateModel):
    required_messages: ClassVar[dict[str, str]] = TASK_REQUIRED_MESSAGES

    title: TaskTitle | None = None
    description: TaskDescription | None = None
    project: UUID | None = None
    assigned_to: UUID | None = None
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: UtcDateTime | None = None
    estimated_hours: EstimatedHours | None = None
    actual_hours: ActualHours | None = None
    tags: Tags = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)


class TaskUpdate(PatchModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset(
        {"assigned_to", "due_date", "estimated_hours", "actual_hours"},
    )
    required_messages: ClassVar[dict[str, str]] = TASK_REQUIRED_MESSAGES

    title: TaskTitle | None = None
    description: TaskDescription | None = None
    project: UUID | None = None
    assigned_to: UUID | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: UtcDateTime | None = None
    estimated_hours: EstimatedHours | None = None
    actual_hours: ActualHours | None = None
    tags: Tags | None = None
    attachments: list[str] | None = None


class ProjectSummary(ApiModel):
    """Reference to a task's project."""

    id: UUID
    name: str
    status: str


class TaskRead(ApiModel):
    id: UUID
    title: str
    description: str
    project: ProjectSummary | None = None
    assigned_to: UserSummary | None = None
    created_by: UserSummary | None = None
    status: str
    priority: str
    due_date: UtcDateTime | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None
    tags: list[str]
    attachments: list[str]
    created_at: UtcDateTime
    updated_at: UtcDateTime


class TaskData(ApiModel):
    task: TaskRead


class TaskListData(ApiModel):
    tasks: list[TaskRead]
