"""ColumnStore against SQLite in-memory."""
from __future__ import annotations

import pytest

from taskboard.core.exceptions import InvalidArgumentError, ProjectNotFoundError
from taskboard.core.schemas import ProjectCreate
from taskboard.core.types import DEFAULT_COLUMNS
from taskboard.storage.models import ProjectModel
from taskboard.stores import ColumnStore, ProjectStore


class TestGet:

    async def test_new_project_has_default_columns(self, session, project) -> None:
        assert await ColumnStore(session).get(project.id) == list(DEFAULT_COLUMNS)

    async def test_null_column_value_reads_as_defaults(self, session) -> None:
        model = ProjectModel(name="Legacy", columns_json=None)
        session.add(model)
        await session.commit()
        assert await ColumnStore(session).get(model.id) == list(DEFAULT_COLUMNS)

    async def test_custom_defaults(self, session) -> None:
        model = ProjectModel(name="Legacy")
        session.add(model)
        await session.commit()
        store = ColumnStore(session, default_columns=("Backlog", "Done"))
        assert await store.get(model.id) == ["Backlog", "Done"]

    async def test_unknown_project(self, session) -> None:
        with pytest.raises(ProjectNotFoundError):
            await ColumnStore(session).get("ghost")


class TestAdd:

    async def test_append_when_position_omitted(self, session, project) -> None:
        updated = await ColumnStore(session).add(project.id, "QA")
        assert updated.columns == [*DEFAULT_COLUMNS, "QA"]

    async def test_insert_at_position(self, session, project) -> None:
        store = ColumnStore(session)
        await store.add(project.id, "QA", 1)
        columns = await store.get(project.id)
        assert columns == ["Todo", "QA", "Sprint", "Review", "Completed"]
        assert columns.count("QA") == 1

    async def test_position_past_end_appends(self, session, project) -> None:
        updated = await ColumnStore(session).add(project.id, "QA", 99)
        assert updated.columns[-1] == "QA"

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_empty_name_rejected(self, session, project, name) -> None:
        with pytest.raises(InvalidArgumentError):
            await ColumnStore(session).add(project.id, name)

    async def test_negative_position_rejected(self, session, project) -> None:
        with pytest.raises(InvalidArgumentError):
            await ColumnStore(session).add(project.id, "QA", -1)

    async def test_overlong_name_rejected(self, session, project) -> None:
        store = ColumnStore(session)
        with pytest.raises(InvalidArgumentError):
            await store.add(project.id, "x" * 300)
        # the stored list can still be written back unchanged
        columns = await store.get(project.id)
        assert (await store.reorder(project.id, columns)).columns == columns

    async def test_duplicate_rejected(self, session, project) -> None:
        store = ColumnStore(session)
        with pytest.raises(InvalidArgumentError):
            await store.add(project.id, "Todo")
        assert await store.get(project.id) == list(DEFAULT_COLUMNS)

    async def test_unknown_project(self, session) -> None:
        with pytest.raises(ProjectNotFoundError):
            await ColumnStore(session).add("ghost", "QA")


class TestRemove:

    async def test_remove(self, session, project) -> None:
        updated = await ColumnStore(session).remove(project.id, "Sprint")
        assert updated.columns == ["Todo", "Review", "Completed"]

    async def test_absent_name_is_noop(self, session, project) -> None:
        updated = await ColumnStore(session).remove(project.id, "Nope")
        assert updated.columns == list(DEFAULT_COLUMNS)

    async def test_last_column_kept(self, session) -> None:
        project = await ProjectStore(session).create(ProjectCreate(name="P", columns=["Only"]))
        with pytest.raises(InvalidArgumentError):
            await ColumnStore(session).remove(project.id, "Only")


class TestReorder:

    async def test_reorder_round_trip(self, session, project) -> None:
        store = ColumnStore(session)
        new_order = ["Completed", "Review", "Sprint", "Todo"]
        await store.reorder(project.id, new_order)
        assert await store.get(project.id) == new_order

    async def test_wholesale_replace_allowed_by_default(self, session, project) -> None:
        store = ColumnStore(session)
        await store.reorder(project.id, ["Backlog", "Done"])
        assert await store.get(project.id) == ["Backlog", "Done"]

    @pytest.mark.parametrize("bad", [[], ["A", "A"], ["A", ""]])
    async def test_invalid_lists_rejected(self, session, project, bad) -> None:
        with pytest.raises(InvalidArgumentError):
            await ColumnStore(session).reorder(project.id, bad)

    async def test_strict_mode_requires_permutation(self, session, project) -> None:
        store = ColumnStore(session, strict_reorder=True)
        with pytest.raises(InvalidArgumentError):
            await store.reorder(project.id, ["Todo", "Done"])
        updated = await store.reorder(project.id, ["Sprint", "Todo", "Completed", "Review"])
        assert updated.columns == ["Sprint", "Todo", "Completed", "Review"]
