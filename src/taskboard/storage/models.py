"""SQLAlchemy ORM models for the board: portable across dialects.

The models use SQLAlchemy 2.0 ``Mapped[T]`` syntax and no database-specific
column types, so the same schema runs on PostgreSQL, SQLite and MySQL.
Lists (project columns, task labels) are stored as JSON text.
"""
from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import UTC, date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from taskboard.core.types import (
    DEFAULT_COLUMNS,
    DEFAULT_TASK_STATUS,
    ActivityEntry,
    BugReport,
    Comment,
    Person,
    Project,
    ProjectMember,
    Task,
    TaskPriority,
)
from taskboard.utils.validation import decode_labels, normalize_columns


class Base(DeclarativeBase):
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ProjectModel(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    manager: Mapped[str | None] = mapped_column(String(255), nullable=True)
    members_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sprint_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    template_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # JSON text; NULL and "" both read back as the default columns
    columns_json: Mapped[str | None] = mapped_column("columns", Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def to_domain(self, default_columns: Sequence[str] = DEFAULT_COLUMNS) -> Project:
        return Project(
            id=self.id,
            name=self.name,
            description=self.description or "",
            manager=self.manager,
            members_count=self.members_count or 0,
            sprint_length=self.sprint_length,
            template_id=self.template_id,
            columns=normalize_columns(self.columns_json, default_columns),
            created_at=self.created_at or _utcnow(),
            updated_at=self.updated_at or _utcnow(),
        )


class PersonModel(Base):
    __tablename__ = "people"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def to_domain(self) -> Person:
        return Person(id=self.id, name=self.name, email=self.email)


class ProjectMemberModel(Base):
    __tablename__ = "project_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="Member")
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def to_domain(self) -> ProjectMember:
        return ProjectMember(
            id=self.id,
            project_id=self.project_id,
            name=self.name,
            role=self.role,
            user_id=self.user_id,
        )


class TaskModel(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_TASK_STATUS)
    priority: Mapped[str] = mapped_column(
        String(50), nullable=False, default=TaskPriority.LOW.value
    )
    estimate: Mapped[float | None] = mapped_column(Float, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    labels_json: Mapped[str] = mapped_column("labels", Text, nullable=False, default="[]")
    assignee_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            project_id=self.project_id,
            title=self.title,
            status=self.status,
            priority=self.priority,
            estimate=self.estimate,
            due_date=self.due_date,
            description=self.description,
            labels=decode_labels(self.labels_json),
            assignee_id=self.assignee_id,
            created_at=self.created_at or _utcnow(),
            updated_at=self.updated_at or _utcnow(),
        )


class TaskAssigneeModel(Base):
    __tablename__ = "task_assignees"
    __table_args__ = (UniqueConstraint("task_id", "user_id", name="uq_task_assignee"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # no FK: links may name people managed outside this service
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TaskActivityModel(Base):
    __tablename__ = "task_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def to_domain(self) -> ActivityEntry:
        return ActivityEntry(
            id=self.id, task_id=self.task_id, message=self.message, created_at=self.created_at
        )


class TaskCommentModel(Base):
    __tablename__ = "task_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def to_domain(self) -> Comment:
        return Comment(
            id=self.id,
            task_id=self.task_id,
            text=self.text,
            author_id=self.author_id,
            created_at=self.created_at,
        )


class TaskBugModel(Base):
    __tablename__ = "task_bugs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reporter_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def to_domain(self) -> BugReport:
        return BugReport(
            id=self.id,
            task_id=self.task_id,
            description=self.description,
            reporter_id=self.reporter_id,
            created_at=self.created_at,
        )


__all__ = [
    "Base",
    "PersonModel",
    "ProjectMemberModel",
    "ProjectModel",
    "TaskActivityModel",
    "TaskAssigneeModel",
    "TaskBugModel",
    "TaskCommentModel",
    "TaskModel",
]
