"""
Dashboard Pydantic schemas.
Listing query parameters, mutation requests submitted from the data tables,
and the overview payload.
"""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import SessionInfo
from app.schemas.navigation import NavigationGroup, SidebarHeader


# ── Listing parameters ────────────────────────────────────────────────────────

class ListParams(BaseModel):
    """Query parameters shared by every paginated listing."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = 1
    page_size: int = Field(default=10, ge=1, alias="pageSize")
    search: str = Field(default="", max_length=200)


# ── Mutations ─────────────────────────────────────────────────────────────────

class DeleteIntent(BaseModel):
    intent: Literal["delete"]
    id: str = Field(min_length=1)


class UpdateTaskIntent(BaseModel):
    intent: Literal["update"]
    id: str = Field(min_length=1)
    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=10000)


class UpdateUserIntent(BaseModel):
    intent: Literal["update"]
    id: str = Field(min_length=1)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    image: str | None = Field(default=None, max_length=500)


TaskMutation = Annotated[
    Union[DeleteIntent, UpdateTaskIntent], Field(discriminator="intent")
]
UserMutation = Annotated[
    Union[DeleteIntent, UpdateUserIntent], Field(discriminator="intent")
]


class MutationResult(BaseModel):
    success: bool
    message: str


# ── Overview ──────────────────────────────────────────────────────────────────

class DashboardOverview(BaseModel):
    header: SidebarHeader
    navigation: list[NavigationGroup]
    session: SessionInfo
    task_count: int | None
    user_count: int | None
