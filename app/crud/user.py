"""
User store.
Composes a users repository with an accounts repository so that creating a
user also writes its credential account in the same transaction.
"""
from __future__ import annotations

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password
from app.crud.repository import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, Repository
from app.models.account import CREDENTIAL_PROVIDER, Account
from app.models.user import User
from app.schemas.pagination import PaginationResult
from app.schemas.user import UserCreate, UserUpdate

USER_ORDER = (User.created_at.desc(), User.id)


def name_contains(search: str) -> ColumnElement[bool]:
    return User.name.icontains(search, autoescape=True)


class UserStore:
    def __init__(self, db: AsyncSession) -> None:
        self.users: Repository[User] = Repository(User, db)
        self.accounts: Repository[Account] = Repository(Account, db)

    async def get(self, user_id: str) -> User | None:
        return await self.users.find_by_id(user_id)

    async def email_taken(self, email: str) -> bool:
        return await self.users.exists(User.email == email)

    async def list_users(
        self,
        *,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str = "",
    ) -> PaginationResult[User]:
        return await self.users.find_paginated(
            page,
            page_size,
            name_contains(search) if search else None,
            order_by=USER_ORDER,
        )

    async def create_user(self, obj_in: UserCreate) -> User:
        """Create the user and a credential account holding the hashed password."""
        user = await self.users.create(
            {
                "name": obj_in.name,
                "email": obj_in.email,
                "email_verified": False,
            }
        )
        await self.accounts.create(
            {
                "account_id": obj_in.email,
                "provider_id": CREDENTIAL_PROVIDER,
                "user_id": user.id,
                "password": hash_password(obj_in.password),
            }
        )
        return user

    async def update_user(self, user_id: str, obj_in: UserUpdate) -> User | None:
        return await self.users.update(user_id, obj_in.model_dump(exclude_unset=True))

    async def delete_user(self, user_id: str) -> User | None:
        """Delete the user; credential accounts go with it."""
        return await self.users.delete(user_id)

    async def credential_account(self, user_id: str) -> Account | None:
        return await self.accounts.find_one(
            [Account.user_id == user_id, Account.provider_id == CREDENTIAL_PROVIDER]
        )

    async def count(self) -> int:
        return await self.users.count()
