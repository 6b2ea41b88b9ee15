"""
Generic pagination schemas.
Used by the repository layer and every list endpoint to provide consistent page metadata.
"""
from __future__ import annotations

import math
from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")
U = TypeVar("U")


class PaginationMeta(BaseModel):
    """Page metadata derived from the current page, page size and total item count."""

    model_config = ConfigDict(frozen=True)

    current_page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_items: int = Field(ge=0)
    total_pages: int = Field(ge=0)
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None
    prev_page: int | None

    @classmethod
    def build(cls, *, current_page: int, page_size: int, total_items: int) -> PaginationMeta:
        total_pages = math.ceil(total_items / page_size)
        has_next_page = current_page < total_pages
        has_prev_page = current_page > 1
        return cls(
            current_page=current_page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next_page=has_next_page,
            has_prev_page=has_prev_page,
            next_page=current_page + 1 if has_next_page else None,
            prev_page=current_page - 1 if has_prev_page else None,
        )


class PaginationResult(BaseModel, Generic[T]):
    """
    One page of rows plus its metadata.
    ``data`` never holds more than ``pagination.page_size`` items.
    """

    model_config = ConfigDict(from_attributes=True)

    data: list[T]
    pagination: PaginationMeta

    def map(self, func: Callable[[T], U]) -> PaginationResult[U]:
        """Return a page with every row converted by ``func`` and the same metadata."""
        return PaginationResult[U](
            data=[func(item) for item in self.data],
            pagination=self.pagination,
        )
