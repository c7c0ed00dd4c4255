"""ProjectStore against SQLite in-memory, including template seeding."""
from __future__ import annotations

import pytest

from taskboard.core.exceptions import (
    InvalidArgumentError,
    ProjectNotFoundError,
    TaskNotFoundError,
)
from taskboard.core.schemas import MemberIn, ProjectCreate, TaskCreate, TemplatePhase
from taskboard.stores import ProjectStore, TaskStore


class TestCreate:

    async def test_defaults(self, session) -> None:
        project = await ProjectStore(session).create(ProjectCreate(name="P"))
        assert project.id
        assert project.columns == ["Todo", "Sprint", "Review", "Completed"]
        assert project.members_count == 0
        assert project.description == ""

    async def test_configured_default_columns(self, session) -> None:
        store = ProjectStore(session, default_columns=["Backlog", "Done"])
        project = await store.create(ProjectCreate(name="P"))
        assert project.columns == ["Backlog", "Done"]

    @pytest.mark.parametrize("name", [None, "", "  "])
    async def test_name_required(self, session, name) -> None:
        with pytest.raises(InvalidArgumentError):
            await ProjectStore(session).create(ProjectCreate(name=name))

    async def test_empty_columns_mean_defaults(self, session) -> None:
        project = await ProjectStore(session).create(ProjectCreate(name="P", columns=[]))
        assert project.columns == ["Todo", "Sprint", "Review", "Completed"]

    async def test_duplicate_columns_rejected(self, session) -> None:
        with pytest.raises(InvalidArgumentError):
            await ProjectStore(session).create(ProjectCreate(name="P", columns=["A", "A"]))

    async def test_template_phases_become_columns_and_tasks(self, session) -> None:
        payload = ProjectCreate(
            name="From template",
            template_id="scrum",
            template_phases=[
                TemplatePhase(name="Plan", tasks=["Kickoff", "Scope"]),
                TemplatePhase(name="Build", tasks=["Implement"]),
            ],
        )
        project = await ProjectStore(session).create(payload)
        assert project.columns == ["Plan", "Build"]
        assert project.template_id == "scrum"

        tasks = await TaskStore(session).list_by_project(project.id)
        assert sorted((t.title, t.status) for t in tasks) == [
            ("Implement", "Build"),
            ("Kickoff", "Plan"),
            ("Scope", "Plan"),
        ]

    async def test_explicit_columns_win_over_phases(self, session) -> None:
        payload = ProjectCreate(
            name="P",
            columns=["Todo", "Done"],
            template_phases=[TemplatePhase(name="Plan", tasks=[])],
        )
        project = await ProjectStore(session).create(payload)
        assert project.columns == ["Todo", "Done"]

    async def test_members(self, session) -> None:
        store = ProjectStore(session)
        payload = ProjectCreate(
            name="P",
            members=[MemberIn(name="Alice", user_id="u1"), MemberIn(name="Bob", role="Lead")],
        )
        project = await store.create(payload)
        assert project.members_count == 2

        members = await store.members(project.id)
        assert [(m.name, m.role, m.user_id) for m in members] == [
            ("Alice", "Member", "u1"),
            ("Bob", "Lead", None),
        ]

    async def test_explicit_members_count_kept(self, session) -> None:
        payload = ProjectCreate(name="P", members_count=7, members=[MemberIn(name="Alice")])
        project = await ProjectStore(session).create(payload)
        assert project.members_count == 7


class TestReadUpdateDelete:

    async def test_get_unknown(self, session) -> None:
        with pytest.raises(ProjectNotFoundError):
            await ProjectStore(session).get_by_id("ghost")

    async def test_list_and_count(self, session) -> None:
        store = ProjectStore(session)
        await store.create(ProjectCreate(name="A"))
        await store.create(ProjectCreate(name="B"))
        assert {p.name for p in await store.list()} == {"A", "B"}
        assert await store.count() == 2

    async def test_update_applies_known_fields(self, session, project) -> None:
        updated = await ProjectStore(session).update(
            project.id, {"name": "Renamed", "sprint_length": 14, "id": "hijack"}
        )
        assert updated.id == project.id
        assert updated.name == "Renamed"
        assert updated.sprint_length == 14

    async def test_update_nothing(self, session, project) -> None:
        updated = await ProjectStore(session).update(project.id, {})
        assert updated.name == project.name

    async def test_delete_cascades_tasks(self, session, project) -> None:
        tasks = TaskStore(session)
        task = await tasks.create(project.id, TaskCreate(title="Doomed"))
        await ProjectStore(session).delete(project.id)
        with pytest.raises(ProjectNotFoundError):
            await ProjectStore(session).get_by_id(project.id)
        with pytest.raises(TaskNotFoundError):
            await tasks.get_by_id(task.id)

    async def test_delete_unknown(self, session) -> None:
        with pytest.raises(ProjectNotFoundError):
            await ProjectStore(session).delete("ghost")

    async def test_members_of_unknown_project(self, session) -> None:
        with pytest.raises(ProjectNotFoundError):
            await ProjectStore(session).members("ghost")
