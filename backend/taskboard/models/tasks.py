from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index
from sqlmodel import Field, SQLModel

from taskboard.core.time import utcnow


class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_project_id_status", "project_id", "status"),
        Index("ix_tasks_assigned_to_id_status", "assigned_to_id", "status"),
        Index("ix_tasks_priority_due_date", "priority", "due_date"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    description: str = Field(max_length=2000)

    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE")
    assigned_to_id: UUID | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    created_by_id: UUID = Field(foreign_key="users.id", index=True)

    status: str = Field(default="todo")
    priority: str = Field(default="medium")
    due_date: datetime | None = None

    estimated_hours: float | None = None
    actual_hours: float | None = None

    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    attachments: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
