"""
Task store.
Wraps a Repository[Task] with the title search and ordering used by task listings.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.repository import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, Repository
from app.models.task import Task
from app.schemas.pagination import PaginationResult
from app.schemas.task import TaskCreate, TaskUpdate

TASK_ORDER = (Task.created_at.desc(), Task.id)


def title_contains(search: str) -> ColumnElement[bool]:
    return Task.title.icontains(search, autoescape=True)


class TaskStore:
    def __init__(self, db: AsyncSession) -> None:
        self.repo: Repository[Task] = Repository(Task, db)

    async def get(self, task_id: str) -> Task | None:
        return await self.repo.find_by_id(task_id)

    async def list_tasks(
        self,
        *,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str = "",
    ) -> PaginationResult[Task]:
        """Newest tasks first, optionally narrowed to titles containing ``search``."""
        return await self.repo.find_paginated(
            page,
            page_size,
            title_contains(search) if search else None,
            order_by=TASK_ORDER,
        )

    async def create_task(self, obj_in: TaskCreate) -> Task:
        return await self.repo.create(obj_in.model_dump())

    async def update_task(self, task_id: str, obj_in: TaskUpdate | dict[str, Any]) -> Task | None:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        return await self.repo.update(task_id, update_data)

    async def delete_task(self, task_id: str) -> Task | None:
        return await self.repo.delete(task_id)

    async def count(self) -> int:
        return await self.repo.count()
