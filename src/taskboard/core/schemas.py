"""Request payloads and the partial-update rule shared by projects and tasks.

Partial updates
---------------
Only fields the caller explicitly sent are considered (pydantic's
``model_fields_set``), and among those ``None`` and ``""`` mean "leave
unchanged".  Empty lists are real values: ``labels: []`` clears labels.

.. code-block:: python

    body = TaskUpdate.model_validate({"title": "", "priority": "high"})
    changed_fields(body)  # {'priority': 'high'}
"""
from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def is_blank(value: Any) -> bool:
    """Return True for the values that mean "do not change"."""
    return value is None or value == ""


def changed_fields(payload: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """Return ``{field: value}`` for the explicitly-sent, non-blank fields."""
    skip = exclude or set()
    return {
        name: getattr(payload, name)
        for name in payload.model_fields_set
        if name not in skip and not is_blank(getattr(payload, name))
    }


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TemplatePhase(_Payload):
    name: str = Field(..., min_length=1)
    tasks: list[str] = Field(default_factory=list)


class MemberIn(_Payload):
    name: str = Field(..., min_length=1)
    role: str = "Member"
    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("user_id", "userId", "id")
    )


class ProjectCreate(_Payload):
    name: str | None = None
    description: str | None = None
    manager: str | None = None
    members_count: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("members_count", "membersCount")
    )
    sprint_length: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("sprint_length", "sprintLength")
    )
    columns: list[str] | None = None
    template_id: str | None = Field(
        default=None, validation_alias=AliasChoices("template_id", "templateId")
    )
    template_phases: list[TemplatePhase] | None = Field(
        default=None, validation_alias=AliasChoices("template_phases", "templatePhases")
    )
    members: list[MemberIn] = Field(default_factory=list)


class ProjectUpdate(_Payload):
    name: str | None = None
    description: str | None = None
    manager: str | None = None
    members_count: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("members_count", "membersCount")
    )
    sprint_length: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("sprint_length", "sprintLength")
    )
    columns: list[str] | None = None


class _TaskFields(_Payload):
    title: str | None = None
    status: str | None = None
    priority: str | None = None
    estimate: float | None = None
    due_date: date | None = None
    description: str | None = None
    labels: list[str] | None = None
    assignee_id: str | None = None
    assignee_ids: list[str] | None = None

    @field_validator("due_date", "estimate", mode="before")
    @classmethod
    def _empty_string_is_unset(cls, v: Any) -> Any:
        # the board UI posts "" for cleared date/number inputs
        return None if v == "" else v

    def sends_assignees(self) -> bool:
        """True when the caller sent an ``assignee_ids`` list (``[]`` included)."""
        return "assignee_ids" in self.model_fields_set and self.assignee_ids is not None


class TaskCreate(_TaskFields):
    pass


class TaskUpdate(_TaskFields):
    pass


class ColumnAdd(_Payload):
    column_name: str | None = Field(
        default=None, validation_alias=AliasChoices("columnName", "column_name", "name")
    )
    position: int | None = None


class ColumnRemove(_Payload):
    column_name: str | None = Field(
        default=None, validation_alias=AliasChoices("columnName", "column_name", "name")
    )


class ColumnReorder(_Payload):
    columns: list[str] | None = None


class CommentCreate(_Payload):
    text: str | None = None
    author_id: str | None = None


class BugCreate(_Payload):
    description: str | None = None
    reporter_id: str | None = None


class PersonCreate(_Payload):
    name: str | None = None
    email: str | None = None
    id: str | None = None


__all__ = [
    "BugCreate",
    "ColumnAdd",
    "ColumnRemove",
    "ColumnReorder",
    "CommentCreate",
    "MemberIn",
    "PersonCreate",
    "ProjectCreate",
    "ProjectUpdate",
    "TaskCreate",
    "TaskUpdate",
    "TemplatePhase",
    "changed_fields",
    "is_blank",
]
