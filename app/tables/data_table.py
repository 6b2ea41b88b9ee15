"""
Data table assembly.
Combines composed column descriptors, one page of rows and the current search
into a complete, serialisable table: header, body and footer pager.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel

from app.schemas.pagination import PaginationMeta, PaginationResult
from app.tables.columns import ActionColumnDescriptor, Cell, ColumnDescriptor
from app.tables.pagination import PaginationControl, build_pagination_control


class HeaderCell(BaseModel):
    id: str
    header: str
    kind: Literal["text", "date", "action"]


class TableRow(BaseModel):
    id: str
    cells: list[Cell]


class PageHeader(BaseModel):
    title: str
    description: str | None = None
    add_button_text: str | None = None
    add_button_link: str | None = None


class DataTable(BaseModel):
    title: str
    description: str
    search_placeholder: str
    search_value: str
    empty_message: str
    columns: list[HeaderCell]
    rows: list[TableRow]
    pagination: PaginationMeta
    pagination_control: PaginationControl | None
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


def describe_total(total: int, noun: str) -> str:
    return f"{total} {noun}{'' if total == 1 else 's'} total"


def _row_id(columns: Sequence[ColumnDescriptor], row: Any, index: int) -> str:
    for column in reversed(columns):
        if isinstance(column, ActionColumnDescriptor):
            return column.item_id(row)
    return str(index)


def build_data_table(
    *,
    columns: Sequence[ColumnDescriptor],
    page: PaginationResult[Any],
    title: str,
    noun: str,
    search: str = "",
    search_placeholder: str = "Search...",
    empty_message: str = "No results.",
    base_path: str = "",
    params: Mapping[str, Any] | None = None,
    error: str | None = None,
) -> DataTable:
    """
    Render every row of ``page`` through ``columns``.

    The pager links keep ``params`` (page size, search) so that moving between
    pages does not lose the current filter.
    """
    meta = page.pagination
    query = {"search": search, **(params or {})}

    return DataTable(
        title=title,
        description=describe_total(meta.total_items, noun),
        search_placeholder=search_placeholder,
        search_value=search,
        empty_message=empty_message,
        columns=[
            HeaderCell(id=column.id, header=column.header, kind=column.kind)
            for column in columns
        ],
        rows=[
            TableRow(
                id=_row_id(columns, row, index),
                cells=[column.render(row) for column in columns],
            )
            for index, row in enumerate(page.data)
        ],
        pagination=meta,
        pagination_control=build_pagination_control(
            meta.current_page,
            meta.total_pages,
            base_path=base_path,
            params=query,
        ),
        error=error,
    )
