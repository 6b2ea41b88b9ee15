"""
Dashboard business logic.
Builds the task and user data tables and applies the mutations submitted from them.
"""
from __future__ import annotations

import logging

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StorageError
from app.core.security import SessionInfo
from app.crud.task import TaskStore
from app.crud.user import UserStore
from app.schemas.dashboard import (
    DashboardOverview,
    DeleteIntent,
    ListParams,
    MutationResult,
    TaskMutation,
    UserMutation,
)
from app.schemas.navigation import DEFAULT_HEADER, build_navigation
from app.schemas.pagination import PaginationMeta, PaginationResult
from app.schemas.task import TaskUpdate
from app.schemas.user import UserUpdate
from app.tables import ActionColumn, DateColumn, TextColumn, build_data_table, compose_columns
from app.tables.columns import ColumnDescriptor
from app.tables.data_table import DataTable, PageHeader

logger = logging.getLogger(__name__)

TASKS_PATH = "/dashboard/tasks"
USERS_PATH = "/dashboard/users"

GENERIC_FAILURE = "An error occurred"
LISTING_FAILURE = "Could not load data. Please try again."


class DataTableView(BaseModel):
    page_header: PageHeader
    table: DataTable


def task_columns() -> list[ColumnDescriptor]:
    return compose_columns(
        [
            TextColumn(accessor_key="title", header="Title", fallback="Untitled", bold=True),
            TextColumn(
                accessor_key="description",
                header="Description",
                class_name="max-w-[500px] truncate text-muted-foreground",
                fallback="No description",
            ),
            DateColumn(accessor_key="created_at", header="Created"),
            DateColumn(accessor_key="updated_at", header="Updated"),
        ],
        ActionColumn(
            id_extractor=lambda task: task.id,
            name_extractor=lambda task: task.title or "",
            on_copy_id=lambda task: None,
            on_edit=lambda task: f"{TASKS_PATH}/{task.id}",
            on_delete=lambda task: TASKS_PATH,
            delete_title="Delete Task",
        ),
    )


def user_columns() -> list[ColumnDescriptor]:
    return compose_columns(
        [
            TextColumn(accessor_key="email", header="Email", fallback="Untitled", bold=True),
            TextColumn(
                accessor_key="name",
                header="Name",
                class_name="max-w-[500px] truncate text-muted-foreground",
                fallback="No Name",
            ),
            DateColumn(accessor_key="created_at", header="Created"),
            DateColumn(accessor_key="updated_at", header="Updated"),
        ],
        ActionColumn(
            id_extractor=lambda user: user.id,
            name_extractor=lambda user: user.name,
            on_copy_id=lambda user: None,
            on_edit=lambda user: f"{USERS_PATH}/{user.id}",
            on_delete=lambda user: USERS_PATH,
            delete_title="Delete User",
        ),
    )


def _empty_page(params: ListParams) -> PaginationResult:
    return PaginationResult(
        data=[],
        pagination=PaginationMeta.build(
            current_page=max(1, params.page), page_size=params.page_size, total_items=0
        ),
    )


class DashboardService:

    async def overview(self, db: AsyncSession, *, session: SessionInfo) -> DashboardOverview:
        """Sidebar, signed-in user and entity counts; counts are None if they cannot be read."""
        try:
            task_count: int | None = await TaskStore(db).count()
            user_count: int | None = await UserStore(db).count()
        except StorageError:
            logger.exception("Failed to count dashboard entities")
            await db.rollback()
            task_count = user_count = None

        return DashboardOverview(
            header=DEFAULT_HEADER,
            navigation=build_navigation("/dashboard"),
            session=session,
            task_count=task_count,
            user_count=user_count,
        )

    # ── Tasks ────────────────────────────────────────────────────────────────

    async def task_table(self, db: AsyncSession, *, params: ListParams) -> DataTableView:
        error: str | None = None
        try:
            page = await TaskStore(db).list_tasks(
                page=params.page, page_size=params.page_size, search=params.search
            )
        except StorageError:
            logger.exception("Failed to load tasks page %s", params.page)
            await db.rollback()
            page, error = _empty_page(params), LISTING_FAILURE

        return DataTableView(
            page_header=PageHeader(
                title="Tasks",
                description="Manage and organize your tasks efficiently",
                add_button_text="Add Task",
                add_button_link=f"{TASKS_PATH}/add",
            ),
            table=build_data_table(
                columns=task_columns(),
                page=page,
                title="All Tasks",
                noun="task",
                search=params.search,
                search_placeholder="Search tasks...",
                empty_message="No tasks found.",
                base_path=TASKS_PATH,
                params={"pageSize": params.page_size},
                error=error,
            ),
        )

    async def mutate_task(self, db: AsyncSession, *, mutation: TaskMutation) -> MutationResult:
        store = TaskStore(db)
        try:
            if isinstance(mutation, DeleteIntent):
                deleted = await store.delete_task(mutation.id)
                if deleted is None:
                    return MutationResult(success=False, message="Task not found")
                logger.info("Task %s deleted", mutation.id)
                return MutationResult(success=True, message="Task deleted successfully")

            changes = TaskUpdate.model_validate(
                mutation.model_dump(include={"title", "description"}, exclude_unset=True)
            )
            updated = await store.update_task(mutation.id, changes)
            if updated is None:
                return MutationResult(success=False, message="Task not found")
            logger.info("Task %s updated", mutation.id)
            return MutationResult(success=True, message="Task updated successfully")
        except StorageError:
            logger.exception("Task mutation %r failed", mutation.intent)
            await db.rollback()
            return MutationResult(success=False, message=GENERIC_FAILURE)

    # ── Users ────────────────────────────────────────────────────────────────

    async def user_table(self, db: AsyncSession, *, params: ListParams) -> DataTableView:
        error: str | None = None
        try:
            page = await UserStore(db).list_users(
                page=params.page, page_size=params.page_size, search=params.search
            )
        except StorageError:
            logger.exception("Failed to load users page %s", params.page)
            await db.rollback()
            page, error = _empty_page(params), LISTING_FAILURE

        return DataTableView(
            page_header=PageHeader(
                title="Users",
                description="Manage the people who can sign in",
                add_button_text="Add User",
                add_button_link=f"{USERS_PATH}/add",
            ),
            table=build_data_table(
                columns=user_columns(),
                page=page,
                title="All Users",
                noun="user",
                search=params.search,
                search_placeholder="Search users...",
                empty_message="No users found.",
                base_path=USERS_PATH,
                params={"pageSize": params.page_size},
                error=error,
            ),
        )

    async def mutate_user(self, db: AsyncSession, *, mutation: UserMutation) -> MutationResult:
        store = UserStore(db)
        try:
            if isinstance(mutation, DeleteIntent):
                deleted = await store.delete_user(mutation.id)
                if deleted is None:
                    return MutationResult(success=False, message="User not found")
                logger.info("User %s deleted", mutation.id)
                return MutationResult(success=True, message="User deleted successfully")

            changes = UserUpdate.model_validate(
                mutation.model_dump(include={"name", "image"}, exclude_unset=True)
            )
            updated = await store.update_user(mutation.id, changes)
            if updated is None:
                return MutationResult(success=False, message="User not found")
            logger.info("User %s updated", mutation.id)
            return MutationResult(success=True, message="User updated successfully")
        except StorageError:
            logger.exception("User mutation %r failed", mutation.intent)
            await db.rollback()
            return MutationResult(success=False, message=GENERIC_FAILURE)


dashboard_service = DashboardService()
