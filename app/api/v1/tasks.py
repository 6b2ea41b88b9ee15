"""
Task routes.
CRUD plus paginated, searchable listing.
"""
from __future__ import annotations

from fastapi import APIRouter, status

from app.core.dependencies import CurrentSession, DBSession, Listing
from app.core.exceptions import NotFoundException
from app.crud.task import TaskStore
from app.schemas.pagination import PaginationResult
from app.schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get(
    "/",
    response_model=PaginationResult[TaskRead],
    summary="List tasks with search and pagination",
)
async def list_tasks(
    _session: CurrentSession,
    db: DBSession,
    params: Listing,
) -> PaginationResult[TaskRead]:
    page = await TaskStore(db).list_tasks(
        page=params.page, page_size=params.page_size, search=params.search
    )
    return page.map(TaskRead.model_validate)


@router.post(
    "/",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    task_in: TaskCreate,
    _session: CurrentSession,
    db: DBSession,
) -> TaskRead:
    task = await TaskStore(db).create_task(task_in)
    return TaskRead.model_validate(task)


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    _session: CurrentSession,
    db: DBSession,
) -> TaskRead:
    task = await TaskStore(db).get(task_id)
    if task is None:
        raise NotFoundException("Task", task_id)
    return TaskRead.model_validate(task)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update a task",
)
async def update_task(
    task_id: str,
    task_in: TaskUpdate,
    _session: CurrentSession,
    db: DBSession,
) -> TaskRead:
    task = await TaskStore(db).update_task(task_id, task_in)
    if task is None:
        raise NotFoundException("Task", task_id)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    _session: CurrentSession,
    db: DBSession,
) -> None:
    if await TaskStore(db).delete_task(task_id) is None:
        raise NotFoundException("Task", task_id)
