"""
Generic async repository.
One Repository wraps one ORM model and the AsyncSession it was constructed with;
entity-specific stores compose a Repository instead of subclassing it.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Generic, TypeVar, Union

from sqlalchemy import ColumnElement, Select, and_, func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConstraintViolationError, StorageError
from app.db.base import Base
from app.schemas.pagination import PaginationMeta, PaginationResult

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
R = TypeVar("R")

# A single condition or a sequence of conditions combined with AND
Predicate = Union[ColumnElement[bool], Sequence[ColumnElement[bool]]]

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def combine(predicate: Predicate | None) -> ColumnElement[bool] | None:
    """Collapse a predicate or list of predicates into one AND-ed condition."""
    if predicate is None:
        return None
    if isinstance(predicate, (list, tuple)):
        conditions = list(predicate)
        if not conditions:
            return None
        if len(conditions) == 1:
            return conditions[0]
        return and_(*conditions)
    return predicate  # type: ignore[return-value]


class Repository(Generic[ModelType]):
    """
    CRUD, counting and offset pagination over a single table.

    Lookups that match nothing return ``None`` (or an empty list); every other
    failure from the database surfaces as StorageError, or ConstraintViolationError
    when an integrity constraint rejected a write. Writes naming a field the
    model does not map are rejected with StorageError too. Nothing is retried here.
    """

    def __init__(self, model: type[ModelType], db: AsyncSession) -> None:
        self.model = model
        self.db = db

    @property
    def name(self) -> str:
        return self.model.__tablename__

    # ── Internals ────────────────────────────────────────────────────────────

    async def _run(self, operation: str, call: Callable[[], Awaitable[R]]) -> R:
        try:
            return await call()
        except IntegrityError as exc:
            logger.warning("%s.%s violated a constraint: %s", self.name, operation, exc.orig)
            raise ConstraintViolationError(
                f"{operation} on {self.name} violated a constraint", cause=exc
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("%s.%s failed: %s", self.name, operation, exc)
            raise StorageError(f"{operation} on {self.name} failed", cause=exc) from exc
        except OverflowError as exc:
            # The driver could not bind a value, e.g. an offset beyond 64-bit range
            logger.error("%s.%s failed: %s", self.name, operation, exc)
            raise StorageError(f"{operation} on {self.name} failed", cause=exc) from exc

    def _check_fields(self, operation: str, data: Mapping[str, Any]) -> None:
        unknown = sorted(set(data) - set(inspect(self.model).column_attrs.keys()))
        if unknown:
            logger.error("%s.%s got unknown fields: %s", self.name, operation, ", ".join(unknown))
            raise StorageError(
                f"{operation} on {self.name} failed: unknown fields {', '.join(unknown)}"
            )

    def _select(self, predicate: Predicate | None = None) -> Select[tuple[ModelType]]:
        stmt = select(self.model)
        condition = combine(predicate)
        if condition is not None:
            stmt = stmt.where(condition)
        return stmt

    def _default_order(self) -> list[Any]:
        return list(inspect(self.model).primary_key)

    async def _scalars(self, stmt: Select[tuple[ModelType]]) -> list[ModelType]:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ── Create ───────────────────────────────────────────────────────────────

    async def create(self, data: Mapping[str, Any]) -> ModelType:
        """Insert one row and return it with generated defaults loaded."""

        async def _create() -> ModelType:
            self._check_fields("create", data)
            db_obj = self.model(**data)
            self.db.add(db_obj)
            await self.db.flush()
            await self.db.refresh(db_obj)
            return db_obj

        return await self._run("create", _create)

    async def create_many(self, records: Sequence[Mapping[str, Any]]) -> list[ModelType]:
        """
        Insert all records in a single flush.
        Either every row is written or the flush fails; callers must not rely on order.
        """

        async def _create_many() -> list[ModelType]:
            for data in records:
                self._check_fields("create_many", data)
            objs = [self.model(**data) for data in records]
            self.db.add_all(objs)
            await self.db.flush()
            for obj in objs:
                await self.db.refresh(obj)
            return objs

        if not records:
            return []
        return await self._run("create_many", _create_many)

    # ── Read ─────────────────────────────────────────────────────────────────

    async def find_by_id(self, id: Any) -> ModelType | None:
        """Fetch a single row by primary key."""

        async def _find() -> ModelType | None:
            result = await self.db.execute(
                select(self.model).where(self.model.id == id).limit(1)  # type: ignore[attr-defined]
            )
            return result.scalar_one_or_none()

        return await self._run("find_by_id", _find)

    async def find_one(self, predicate: Predicate) -> ModelType | None:
        """Return the first row matching the predicate, or None."""

        async def _find() -> ModelType | None:
            result = await self.db.execute(self._select(predicate).limit(1))
            return result.scalars().first()

        return await self._run("find_one", _find)

    async def find_many(
        self,
        predicate: Predicate | None = None,
        *,
        order_by: Sequence[Any] | None = None,
    ) -> list[ModelType]:
        """
        Return every matching row, unpaginated.
        Meant for small internal lookups; listings go through find_paginated.
        """
        stmt = self._select(predicate)
        if order_by:
            stmt = stmt.order_by(*order_by)
        return await self._run("find_many", lambda: self._scalars(stmt))

    async def find_all(self) -> list[ModelType]:
        return await self.find_many()

    async def find_paginated(
        self,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        predicate: Predicate | None = None,
        *,
        order_by: Sequence[Any] | None = None,
    ) -> PaginationResult[ModelType]:
        """
        Return one page of matching rows with page metadata.

        ``page`` is clamped to at least 1 before the offset is computed. The data
        query and the total count share the same predicate but run as two
        separate reads, so a write landing between them can leave the count
        slightly stale.
        """
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")

        current_page = max(DEFAULT_PAGE, page)
        offset = (current_page - 1) * page_size

        stmt = (
            self._select(predicate)
            .order_by(*(order_by or self._default_order()))
            .limit(page_size)
            .offset(offset)
        )

        data = await self._run("find_paginated", lambda: self._scalars(stmt))
        total_items = await self.count(predicate)

        return PaginationResult(
            data=data,
            pagination=PaginationMeta.build(
                current_page=current_page,
                page_size=page_size,
                total_items=total_items,
            ),
        )

    async def find_many_paginated(
        self,
        *,
        where: Predicate | None = None,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_by: Sequence[Any] | None = None,
    ) -> PaginationResult[ModelType]:
        """Keyword-only form of find_paginated."""
        return await self.find_paginated(page, page_size, where, order_by=order_by)

    async def find_all_paginated(
        self,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PaginationResult[ModelType]:
        return await self.find_paginated(page, page_size)

    # ── Update ───────────────────────────────────────────────────────────────

    async def update(self, id: Any, data: Mapping[str, Any]) -> ModelType | None:
        """
        Update one row by primary key.
        Returns the refreshed row, or None if no row has that id.
        """
        db_obj = await self.find_by_id(id)
        if db_obj is None:
            return None

        async def _update() -> ModelType:
            self._check_fields("update", data)
            for field, value in data.items():
                setattr(db_obj, field, value)
            self.db.add(db_obj)
            await self.db.flush()
            await self.db.refresh(db_obj)
            return db_obj

        return await self._run("update", _update)

    async def update_many(
        self, predicate: Predicate, data: Mapping[str, Any]
    ) -> list[ModelType]:
        """Apply the same field values to every matching row and return them."""
        objs = await self.find_many(predicate)

        async def _update_many() -> list[ModelType]:
            self._check_fields("update_many", data)
            for obj in objs:
                for field, value in data.items():
                    setattr(obj, field, value)
            await self.db.flush()
            for obj in objs:
                await self.db.refresh(obj)
            return objs

        return await self._run("update_many", _update_many)

    # ── Delete ───────────────────────────────────────────────────────────────

    async def delete(self, id: Any) -> ModelType | None:
        """Delete a row by primary key. Returns the deleted row or None."""
        db_obj = await self.find_by_id(id)
        if db_obj is None:
            return None

        async def _delete() -> ModelType:
            await self.db.delete(db_obj)
            await self.db.flush()
            return db_obj

        return await self._run("delete", _delete)

    async def delete_many(self, predicate: Predicate) -> list[ModelType]:
        """Delete every matching row. Returns the removed rows (empty if none matched)."""
        objs = await self.find_many(predicate)

        async def _delete_many() -> list[ModelType]:
            for obj in objs:
                await self.db.delete(obj)
            await self.db.flush()
            return objs

        if not objs:
            return []
        return await self._run("delete_many", _delete_many)

    # ── Utility ──────────────────────────────────────────────────────────────

    async def exists(self, predicate: Predicate) -> bool:
        return await self.find_one(predicate) is not None

    async def count(self, predicate: Predicate | None = None) -> int:
        """Return the number of rows matching the predicate (all rows if None)."""
        stmt = select(func.count()).select_from(self.model)
        condition = combine(predicate)
        if condition is not None:
            stmt = stmt.where(condition)

        async def _count() -> int:
            result = await self.db.execute(stmt)
            return int(result.scalar_one() or 0)

        return await self._run("count", _count)
