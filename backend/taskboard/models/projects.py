from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index
from sqlmodel import Field, SQLModel

from taskboard.core.time import utcnow


class Project(SQLModel, table=True):
    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_owner_id_status", "owner_id", "status"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    description: str = Field(max_length=1000)
    status: str = Field(default="planning")

    # Ownership: a project belongs to the user who created it.
    owner_id: UUID = Field(foreign_key="users.id", index=True)

    start_date: datetime
    end_date: datetime | None = None
    budget: float | None = None
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
