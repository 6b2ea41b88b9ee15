"""
User routes.
Paginated listing, creation with a credential account, read, update and delete.
"""
from __future__ import annotations

from fastapi import APIRouter, status

from app.core.dependencies import CurrentSession, DBSession, Listing
from app.core.exceptions import ConflictException, NotFoundException
from app.crud.user import UserStore
from app.schemas.pagination import PaginationResult
from app.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserRead, summary="Get the signed-in user")
async def get_me(session: CurrentSession, db: DBSession) -> UserRead:
    user = await UserStore(db).get(session.user_id)
    if user is None:
        raise NotFoundException("User", session.user_id)
    return UserRead.model_validate(user)


@router.get(
    "/",
    response_model=PaginationResult[UserRead],
    summary="List users with search and pagination",
)
async def list_users(
    _session: CurrentSession,
    db: DBSession,
    params: Listing,
) -> PaginationResult[UserRead]:
    page = await UserStore(db).list_users(
        page=params.page, page_size=params.page_size, search=params.search
    )
    return page.map(UserRead.model_validate)


@router.post(
    "/",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user with a password",
)
async def create_user(
    user_in: UserCreate,
    _session: CurrentSession,
    db: DBSession,
) -> UserRead:
    store = UserStore(db)
    if await store.email_taken(user_in.email):
        raise ConflictException("An account with this email already exists")
    user = await store.create_user(user_in)
    return UserRead.model_validate(user)


@router.get("/{user_id}", response_model=UserRead, summary="Get a user by ID")
async def get_user(
    user_id: str,
    _session: CurrentSession,
    db: DBSession,
) -> UserRead:
    user = await UserStore(db).get(user_id)
    if user is None:
        raise NotFoundException("User", user_id)
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead, summary="Update a user's profile")
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    _session: CurrentSession,
    db: DBSession,
) -> UserRead:
    user = await UserStore(db).update_user(user_id, user_in)
    if user is None:
        raise NotFoundException("User", user_id)
    return UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user and their accounts",
)
async def delete_user(
    user_id: str,
    _session: CurrentSession,
    db: DBSession,
) -> None:
    if await UserStore(db).delete_user(user_id) is None:
        raise NotFoundException("User", user_id)
