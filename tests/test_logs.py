"""ActivityRecorder, CommentLog and BugLog: including best-effort failures."""
from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from taskboard.core.exceptions import (
    InvalidArgumentError,
    PersistenceError,
    TaskNotFoundError,
)
from taskboard.core.schemas import TaskCreate
from taskboard.stores import ActivityRecorder, BugLog, CommentLog, TaskStore


@pytest.fixture
async def task(session, project):
    return await TaskStore(session).create(project.id, TaskCreate(title="Logged"))


class TestActivityRecorder:

    async def test_oldest_first(self, session, task) -> None:
        recorder = ActivityRecorder(session)
        await recorder.create(task.id, "one")
        await recorder.create(task.id, "two")
        await recorder.create(task.id, "three")
        assert [e.message for e in await recorder.get_by_task(task.id)] == ["one", "two", "three"]

    async def test_empty_task_has_no_entries(self, session, task) -> None:
        assert await ActivityRecorder(session).get_by_task(task.id) == []

    async def test_append_raises_on_empty_message(self, session, task) -> None:
        with pytest.raises(InvalidArgumentError):
            await ActivityRecorder(session).append(task.id, "")

    async def test_create_swallows_failures(self, session, task) -> None:
        recorder = ActivityRecorder(session)
        with patch(
            "taskboard.stores.activity.commit_or_raise",
            AsyncMock(side_effect=PersistenceError("record_activity", "boom")),
        ):
            assert await recorder.create(task.id, "lost") is None
        # the session is still usable afterwards
        await recorder.create(task.id, "kept")
        assert [e.message for e in await recorder.get_by_task(task.id)] == ["kept"]


class TestCommentLog:

    async def test_create_records_activity(self, session, task) -> None:
        log = CommentLog(session)
        comment = await log.create(task.id, "Looks good", author_id="u1")
        assert comment.text == "Looks good"
        assert comment.author_id == "u1"
        assert [c.id for c in await log.get_by_task(task.id)] == [comment.id]
        activity = await ActivityRecorder(session).get_by_task(task.id)
        assert [e.message for e in activity] == ["Comment added"]

    @pytest.mark.parametrize("text", [None, "", "  "])
    async def test_empty_text_writes_nothing(self, session, task, text) -> None:
        log = CommentLog(session)
        with pytest.raises(InvalidArgumentError):
            await log.create(task.id, text)
        assert await log.get_by_task(task.id) == []
        assert await ActivityRecorder(session).get_by_task(task.id) == []

    async def test_unknown_task(self, session) -> None:
        with pytest.raises(TaskNotFoundError):
            await CommentLog(session).create("ghost", "hello")

    async def test_activity_failure_does_not_fail_comment(self, session, task) -> None:
        recorder = ActivityRecorder(session)
        log = CommentLog(session, recorder)
        with patch.object(recorder, "append", AsyncMock(side_effect=RuntimeError("down"))):
            comment = await log.create(task.id, "still saved")
        assert comment.text == "still saved"
        assert len(await log.get_by_task(task.id)) == 1


    async def test_list_unknown_task(self, session) -> None:
        with pytest.raises(TaskNotFoundError):
            await CommentLog(session).get_by_task("ghost")


class TestBugLog:

    async def test_create_records_activity(self, session, task) -> None:
        log = BugLog(session)
        bug = await log.create(task.id, "Button misaligned", reporter_id="u2")
        assert bug.description == "Button misaligned"
        assert [b.id for b in await log.get_by_task(task.id)] == [bug.id]
        activity = await ActivityRecorder(session).get_by_task(task.id)
        assert [e.message for e in activity] == ["Bug reported"]

    async def test_missing_description_writes_nothing(self, session, task) -> None:
        log = BugLog(session)
        with pytest.raises(InvalidArgumentError):
            await log.create(task.id, None)
        assert await log.get_by_task(task.id) == []
        assert await ActivityRecorder(session).get_by_task(task.id) == []

    async def test_bugs_oldest_first(self, session, task) -> None:
        log = BugLog(session)
        await log.create(task.id, "first")
        await log.create(task.id, "second")
        assert [b.description for b in await log.get_by_task(task.id)] == ["first", "second"]

    async def test_list_unknown_task(self, session) -> None:
        with pytest.raises(TaskNotFoundError):
            await BugLog(session).get_by_task("ghost")
