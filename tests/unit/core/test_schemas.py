"""Unit tests for taskboard.core.schemas"""

from __future__ import annotations

from datetime import date

from taskboard.core.schemas import (
    ColumnAdd,
    ProjectCreate,
    ProjectUpdate,
    TaskUpdate,
    changed_fields,
    is_blank,
)


class TestIsBlank:
    def test_blank_values(self):
        assert is_blank(None)
        assert is_blank("")

    def test_real_values(self):
        assert not is_blank(0)
        assert not is_blank([])
        assert not is_blank("x")


class TestChangedFields:
    def test_only_sent_fields(self):
        body = TaskUpdate.model_validate({"priority": "high"})
        assert changed_fields(body) == {"priority": "high"}

    def test_blank_means_unchanged(self):
        body = TaskUpdate.model_validate({"title": "", "description": None, "status": "Review"})
        assert changed_fields(body) == {"status": "Review"}

    def test_empty_list_is_a_value(self):
        body = TaskUpdate.model_validate({"labels": []})
        assert changed_fields(body) == {"labels": []}

    def test_exclude(self):
        body = TaskUpdate.model_validate({"title": "A", "assignee_ids": ["u1"]})
        assert changed_fields(body, exclude={"assignee_ids"}) == {"title": "A"}

    def test_project_update_same_rule(self):
        body = ProjectUpdate.model_validate({"name": "", "sprintLength": 14})
        assert changed_fields(body) == {"sprint_length": 14}


class TestTaskFields:
    def test_empty_strings_for_date_and_estimate(self):
        body = TaskUpdate.model_validate({"due_date": "", "estimate": ""})
        assert body.due_date is None
        assert body.estimate is None
        assert changed_fields(body) == {}

    def test_date_parsed(self):
        body = TaskUpdate.model_validate({"due_date": "2024-05-01"})
        assert body.due_date == date(2024, 5, 1)

    def test_sends_assignees(self):
        assert TaskUpdate.model_validate({"assignee_ids": []}).sends_assignees()
        assert not TaskUpdate.model_validate({"assignee_ids": None}).sends_assignees()
        assert not TaskUpdate.model_validate({"title": "x"}).sends_assignees()


class TestAliases:
    def test_column_name_camel_case(self):
        assert ColumnAdd.model_validate({"columnName": "QA"}).column_name == "QA"

    def test_project_template_fields(self):
        body = ProjectCreate.model_validate(
            {
                "name": "P",
                "templateId": "scrum",
                "templatePhases": [{"name": "Plan", "tasks": ["Kickoff"]}],
                "members": [{"name": "Alice", "userId": "u1"}],
            }
        )
        assert body.template_id == "scrum"
        assert body.template_phases[0].tasks == ["Kickoff"]
        assert body.members[0].user_id == "u1"
        assert body.members[0].role == "Member"
