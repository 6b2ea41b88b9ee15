"""
Dashboard routes.
Overview, the task and user data tables, and the mutations submitted from them.
"""
from __future__ import annotations

from fastapi import APIRouter

from app.core.dependencies import CurrentSession, DBSession, Listing
from app.schemas.dashboard import DashboardOverview, MutationResult, TaskMutation, UserMutation
from app.services.dashboard_service import DataTableView, dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardOverview, summary="Sidebar, session and counts")
async def overview(session: CurrentSession, db: DBSession) -> DashboardOverview:
    return await dashboard_service.overview(db, session=session)


@router.get("/tasks", response_model=DataTableView, summary="Task data table")
async def task_table(
    _session: CurrentSession,
    db: DBSession,
    params: Listing,
) -> DataTableView:
    return await dashboard_service.task_table(db, params=params)


@router.post("/tasks", response_model=MutationResult, summary="Delete or update a task")
async def mutate_task(
    mutation: TaskMutation,
    _session: CurrentSession,
    db: DBSession,
) -> MutationResult:
    return await dashboard_service.mutate_task(db, mutation=mutation)


@router.get("/users", response_model=DataTableView, summary="User data table")
async def user_table(
    _session: CurrentSession,
    db: DBSession,
    params: Listing,
) -> DataTableView:
    return await dashboard_service.user_table(db, params=params)


@router.post("/users", response_model=MutationResult, summary="Delete or update a user")
async def mutate_user(
    mutation: UserMutation,
    _session: CurrentSession,
    db: DBSession,
) -> MutationResult:
    return await dashboard_service.mutate_user(db, mutation=mutation)
