"""Tests for TaskRepository against a SQLite datastore."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.core.database.entities import Task, User
from taskboard.core.database.repositories.tasks import TaskChanges, TaskRepository
from taskboard.core.errors import Conflict, TaskNotFound


@pytest.fixture
def repository(session) -> TaskRepository:
    return TaskRepository(session)


async def _seed(repository: TaskRepository, owner: User) -> list[Task]:
    specs = [
        ("Write quarterly report", "numbers for Q3", "High", "Pending"),
        ("Review REPORT draft", None, "Low", "Pending"),
        ("Buy groceries", "milk and eggs", "High", "Completed"),
        ("Plan offsite", "agenda and report outline", "High", "Pending"),
    ]
    tasks = []
    for title, description, priority, status in specs:
        task = await repository.create(user_id=owner.user_id, title=title, description=description, priority=priority)
        if status != "Pending":
            task = await repository.update_for_owner(task.task_id, owner.user_id, TaskChanges(status=status))
        tasks.append(task)
    return tasks


class TestCreate:
    async def test_create_sets_defaults(self, repository, user):
        task = await repository.create(user_id=user.user_id, title="Write report")

        assert task.task_id is not None
        assert task.user_id == user.user_id
        assert task.status == "Pending"
        assert task.created_at is not None
        assert task.updated_at is not None

    async def test_create_normalizes_aware_deadline(self, repository, user):
        deadline = datetime(2030, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        task = await repository.create(user_id=user.user_id, title="Trip", deadline=deadline)

        assert task.deadline == datetime(2030, 5, 1, 10, 0)

    async def test_missing_title_rejected_by_datastore(self, repository, user):
        with pytest.raises(Conflict) as exc_info:
            await repository.create(user_id=user.user_id, title=None)

        assert "title" in exc_info.value.message.lower()

    async def test_unknown_owner_rejected_by_datastore(self, repository):
        with pytest.raises(Conflict):
            await repository.create(user_id=12345, title="Orphan")


class TestListForOwner:
    async def test_no_filters_returns_all_owned(self, repository, user, other_user):
        await _seed(repository, user)
        await repository.create(user_id=other_user.user_id, title="Someone else's report")

        tasks = await repository.list_for_owner(user.user_id)

        assert len(tasks) == 4
        assert all(task.user_id == user.user_id for task in tasks)

    async def test_filters_compose_conjunctively(self, repository, user):
        await _seed(repository, user)

        tasks = await repository.list_for_owner(user.user_id, status="Pending", priority="High", search="report")

        assert {task.title for task in tasks} == {"Write quarterly report", "Plan offsite"}

    async def test_omitting_a_filter_widens_that_dimension(self, repository, user):
        await _seed(repository, user)

        without_priority = await repository.list_for_owner(user.user_id, status="Pending", search="report")
        without_status = await repository.list_for_owner(user.user_id, priority="High", search="report")

        assert {task.title for task in without_priority} == {
            "Write quarterly report",
            "Review REPORT draft",
            "Plan offsite",
        }
        assert {task.title for task in without_status} == {"Write quarterly report", "Plan offsite"}

    async def test_search_is_case_insensitive_over_title_or_description(self, repository, user):
        await _seed(repository, user)

        tasks = await repository.list_for_owner(user.user_id, search="MILK")

        assert [task.title for task in tasks] == ["Buy groceries"]

    async def test_search_treats_wildcards_literally(self, repository, user):
        await repository.create(user_id=user.user_id, title="50% discount")
        await repository.create(user_id=user.user_id, title="500 units")

        tasks = await repository.list_for_owner(user.user_id, search="50%")

        assert [task.title for task in tasks] == ["50% discount"]


class TestUpdateForOwner:
    async def test_partial_update_keeps_absent_fields(self, repository, user):
        task = await repository.create(
            user_id=user.user_id, title="Write report", description="draft", priority="Low"
        )

        updated = await repository.update_for_owner(task.task_id, user.user_id, TaskChanges(status="Completed"))

        assert updated.status == "Completed"
        assert updated.title == "Write report"
        assert updated.description == "draft"
        assert updated.priority == "Low"

    async def test_empty_update_only_advances_updated_at(self, repository, user):
        task = await repository.create(
            user_id=user.user_id,
            title="Write report",
            description="draft",
            priority="High",
            deadline=datetime(2030, 1, 1),
        )
        before = {
            "title": task.title,
            "description": task.description,
            "priority": task.priority,
            "status": task.status,
            "deadline": task.deadline,
            "created_at": task.created_at,
            "updated_at": task.updated_at,
        }

        updated = await repository.update_for_owner(task.task_id, user.user_id, TaskChanges())

        for field in ("title", "description", "priority", "status", "deadline", "created_at"):
            assert getattr(updated, field) == before[field]
        assert updated.updated_at > before["updated_at"]

    async def test_update_by_non_owner_is_not_found(self, repository, user, other_user):
        task = await repository.create(user_id=user.user_id, title="Mine")

        with pytest.raises(TaskNotFound):
            await repository.update_for_owner(task.task_id, other_user.user_id, TaskChanges(title="Hijacked"))

        (unchanged,) = await repository.list_for_owner(user.user_id)
        assert unchanged.title == "Mine"

    async def test_update_missing_task_is_not_found(self, repository, user):
        with pytest.raises(TaskNotFound):
            await repository.update_for_owner(999, user.user_id, TaskChanges(title="x"))


class TestDeleteForOwner:
    async def test_delete(self, repository, user):
        task = await repository.create(user_id=user.user_id, title="Temporary")

        await repository.delete_for_owner(task.task_id, user.user_id)

        assert await repository.list_for_owner(user.user_id) == []

    async def test_delete_by_non_owner_is_not_found(self, repository, user, other_user):
        task = await repository.create(user_id=user.user_id, title="Mine")

        with pytest.raises(TaskNotFound):
            await repository.delete_for_owner(task.task_id, other_user.user_id)

        assert len(await repository.list_for_owner(user.user_id)) == 1

    async def test_miss_leaves_loaded_entities_usable(self, repository, user, other_user):
        task = await repository.create(user_id=user.user_id, title="Mine")

        with pytest.raises(TaskNotFound):
            await repository.update_for_owner(task.task_id, other_user.user_id, TaskChanges(title="x"))
        with pytest.raises(TaskNotFound):
            await repository.delete_for_owner(task.task_id, other_user.user_id)

        # Nothing was expired, so plain attribute access needs no IO
        assert task.title == "Mine"
        assert user.email == "ada@example.com"
        assert other_user.user_id != user.user_id

    async def test_delete_twice_is_not_found(self, repository, user):
        task = await repository.create(user_id=user.user_id, title="Once")
        await repository.delete_for_owner(task.task_id, user.user_id)

        with pytest.raises(TaskNotFound):
            await repository.delete_for_owner(task.task_id, user.user_id)
