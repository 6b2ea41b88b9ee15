"""
Generic repository tests.
Covers: create/read round trip, predicates, pagination math, update, delete, count, storage errors.
"""
from __future__ import annotations

import math

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConstraintViolationError, StorageError
from app.crud.repository import Repository
from app.models.task import Task
from app.models.user import User

pytestmark = pytest.mark.asyncio


async def _seed_tasks(repo: Repository[Task], count: int, prefix: str = "Task") -> list[Task]:
    return await repo.create_many(
        [{"title": f"{prefix} {i:02d}", "description": f"row {i}"} for i in range(count)]
    )


class TestCreate:
    async def test_create_round_trip(self, task_repo: Repository[Task]) -> None:
        created = await task_repo.create({"title": "Write docs", "description": "All of them"})
        assert created.id
        assert created.created_at is not None

        fetched = await task_repo.find_by_id(created.id)
        assert fetched is not None
        assert fetched.title == "Write docs"
        assert fetched.description == "All of them"

    async def test_create_many_returns_every_row(self, task_repo: Repository[Task]) -> None:
        rows = await _seed_tasks(task_repo, 3)
        assert {r.title for r in rows} == {"Task 00", "Task 01", "Task 02"}
        assert await task_repo.count() == 3

    async def test_create_many_empty(self, task_repo: Repository[Task]) -> None:
        assert await task_repo.create_many([]) == []

    async def test_duplicate_email_is_constraint_violation(
        self, user_repo: Repository[User]
    ) -> None:
        await user_repo.create({"name": "Ada", "email": "ada@example.com"})
        with pytest.raises(ConstraintViolationError) as exc_info:
            await user_repo.create({"name": "Ada Again", "email": "ada@example.com"})
        assert isinstance(exc_info.value.cause, IntegrityError)
        assert isinstance(exc_info.value, StorageError)

    async def test_missing_required_field_is_rejected(
        self, user_repo: Repository[User]
    ) -> None:
        with pytest.raises(ConstraintViolationError):
            await user_repo.create({"email": "nameless@example.com"})

    async def test_unknown_field_is_storage_error(self, task_repo: Repository[Task]) -> None:
        with pytest.raises(StorageError, match="bogus"):
            await task_repo.create({"title": "x", "bogus": 1})
        assert await task_repo.count() == 0

    async def test_create_many_with_unknown_field_writes_nothing(
        self, task_repo: Repository[Task]
    ) -> None:
        with pytest.raises(StorageError):
            await task_repo.create_many([{"title": "ok"}, {"title": "bad", "owner": "me"}])
        assert await task_repo.count() == 0


class TestFind:
    async def test_find_by_id_missing_returns_none(self, task_repo: Repository[Task]) -> None:
        assert await task_repo.find_by_id("does-not-exist") is None

    async def test_find_one_single_and_conjunction(self, task_repo: Repository[Task]) -> None:
        await task_repo.create({"title": "alpha", "description": "one"})
        await task_repo.create({"title": "alpha", "description": "two"})

        found = await task_repo.find_one(Task.title == "alpha")
        assert found is not None and found.title == "alpha"

        both = await task_repo.find_one([Task.title == "alpha", Task.description == "two"])
        assert both is not None and both.description == "two"

        none = await task_repo.find_one([Task.title == "alpha", Task.description == "three"])
        assert none is None

    async def test_find_many_without_predicate_returns_all(
        self, task_repo: Repository[Task]
    ) -> None:
        await _seed_tasks(task_repo, 4)
        assert len(await task_repo.find_many()) == 4
        assert len(await task_repo.find_all()) == 4

    async def test_find_many_with_predicate(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 3, prefix="Keep")
        await _seed_tasks(task_repo, 2, prefix="Drop")
        kept = await task_repo.find_many(Task.title.startswith("Keep"))
        assert len(kept) == 3


class TestPagination:
    async def test_first_and_last_page_of_25_rows(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 25)

        first = await task_repo.find_paginated(1, 10)
        assert len(first.data) == 10
        assert first.pagination.total_items == 25
        assert first.pagination.total_pages == 3
        assert first.pagination.has_next_page is True
        assert first.pagination.has_prev_page is False
        assert first.pagination.next_page == 2
        assert first.pagination.prev_page is None

        last = await task_repo.find_paginated(3, 10)
        assert len(last.data) == 5
        assert last.pagination.has_next_page is False
        assert last.pagination.has_prev_page is True
        assert last.pagination.next_page is None
        assert last.pagination.prev_page == 2

    async def test_offset_skips_preceding_rows(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 25)
        ordered = await task_repo.find_many(order_by=[Task.id])

        for page in (1, 2, 3):
            result = await task_repo.find_paginated(page, 10)
            expected = ordered[(page - 1) * 10 : page * 10]
            assert [t.id for t in result.data] == [t.id for t in expected]

    @pytest.mark.parametrize("page", [0, -1, -50])
    async def test_page_below_one_is_clamped(
        self, task_repo: Repository[Task], page: int
    ) -> None:
        await _seed_tasks(task_repo, 12)
        clamped = await task_repo.find_paginated(page, 5)
        first = await task_repo.find_paginated(1, 5)
        assert clamped.pagination.current_page == 1
        assert [t.id for t in clamped.data] == [t.id for t in first.data]

    async def test_page_past_the_end_is_empty(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 7)
        result = await task_repo.find_paginated(5, 5)
        assert result.data == []
        assert result.pagination.total_pages == 2
        assert result.pagination.has_next_page is False
        assert result.pagination.prev_page == 4

    async def test_empty_table(self, task_repo: Repository[Task]) -> None:
        result = await task_repo.find_paginated()
        assert result.data == []
        assert result.pagination.total_items == 0
        assert result.pagination.total_pages == 0
        assert result.pagination.has_next_page is False
        assert result.pagination.has_prev_page is False

    async def test_count_and_data_share_the_predicate(
        self, task_repo: Repository[Task]
    ) -> None:
        await _seed_tasks(task_repo, 13, prefix="Report")
        await _seed_tasks(task_repo, 9, prefix="Meeting")

        result = await task_repo.find_paginated(2, 4, Task.title.contains("Report"))
        assert result.pagination.total_items == 13
        assert result.pagination.total_pages == math.ceil(13 / 4)
        assert len(result.data) == 4
        assert all(t.title.startswith("Report") for t in result.data)

    async def test_keyword_form_and_defaults(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 15)
        result = await task_repo.find_many_paginated(where=[Task.title.is_not(None)])
        assert result.pagination.page_size == 10
        assert result.pagination.current_page == 1
        assert len(result.data) == 10

        everything = await task_repo.find_all_paginated(2, 10)
        assert len(everything.data) == 5

    async def test_offset_beyond_driver_range_is_storage_error(
        self, task_repo: Repository[Task]
    ) -> None:
        await _seed_tasks(task_repo, 3)
        with pytest.raises(StorageError) as exc_info:
            await task_repo.find_paginated(10**19, 10)
        assert isinstance(exc_info.value.cause, OverflowError)

    async def test_non_positive_page_size_is_rejected(
        self, task_repo: Repository[Task]
    ) -> None:
        with pytest.raises(ValueError):
            await task_repo.find_paginated(1, 0)


class TestUpdate:
    async def test_update_returns_updated_row(self, task_repo: Repository[Task]) -> None:
        task = await task_repo.create({"title": "Draft"})
        updated = await task_repo.update(task.id, {"title": "Final"})
        assert updated is not None
        assert updated.title == "Final"
        assert (await task_repo.find_by_id(task.id)).title == "Final"

    async def test_update_missing_returns_none(self, task_repo: Repository[Task]) -> None:
        assert await task_repo.update("missing", {"title": "x"}) is None

    async def test_update_many(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 3, prefix="Old")
        await _seed_tasks(task_repo, 2, prefix="Other")

        updated = await task_repo.update_many(
            Task.title.startswith("Old"), {"description": "bulk"}
        )
        assert len(updated) == 3
        assert all(t.description == "bulk" for t in updated)
        assert await task_repo.count(Task.description == "bulk") == 3

    async def test_update_many_without_matches(self, task_repo: Repository[Task]) -> None:
        assert await task_repo.update_many(Task.title == "nope", {"title": "x"}) == []

    async def test_update_unknown_field_is_storage_error(
        self, task_repo: Repository[Task]
    ) -> None:
        task = await task_repo.create({"title": "x"})
        with pytest.raises(StorageError, match="bogus"):
            await task_repo.update(task.id, {"bogus": 1})
        assert not hasattr(task, "bogus")

    async def test_update_many_unknown_field_is_storage_error(
        self, task_repo: Repository[Task]
    ) -> None:
        await _seed_tasks(task_repo, 2)
        with pytest.raises(StorageError):
            await task_repo.update_many(Task.title.is_not(None), {"priority": "high"})
        with pytest.raises(StorageError):
            await task_repo.update_many(Task.title == "nope", {"priority": "high"})


class TestDelete:
    async def test_delete_is_idempotent(self, task_repo: Repository[Task]) -> None:
        task = await task_repo.create({"title": "Temporary"})

        removed = await task_repo.delete(task.id)
        assert removed is not None and removed.id == task.id
        assert await task_repo.find_by_id(task.id) is None

        assert await task_repo.delete(task.id) is None

    async def test_delete_many(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 4, prefix="Gone")
        await _seed_tasks(task_repo, 2, prefix="Stay")

        removed = await task_repo.delete_many(Task.title.startswith("Gone"))
        assert len(removed) == 4
        assert await task_repo.count() == 2

        assert await task_repo.delete_many(Task.title.startswith("Gone")) == []


class TestUtility:
    async def test_exists(self, task_repo: Repository[Task]) -> None:
        await task_repo.create({"title": "Present"})
        assert await task_repo.exists(Task.title == "Present") is True
        assert await task_repo.exists(Task.title == "Absent") is False

    async def test_count_with_and_without_predicate(self, task_repo: Repository[Task]) -> None:
        await _seed_tasks(task_repo, 6, prefix="A")
        await _seed_tasks(task_repo, 3, prefix="B")
        assert await task_repo.count() == 9
        assert await task_repo.count(Task.title.startswith("B")) == 3
        assert await task_repo.count([]) == 9
