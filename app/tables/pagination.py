"""
Pagination control.
Chooses a bounded window of page links so large page ranges are never enumerated.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Union
from urllib.parse import urlencode

from pydantic import BaseModel

ELLIPSIS = "ellipsis"
MAX_FULL_WINDOW = 7

PageItem = Union[int, Literal["ellipsis"]]


def page_window(current_page: int, total_pages: int) -> list[PageItem]:
    """
    Return the page numbers to show, with ELLIPSIS marking elided ranges.

    Up to seven pages are listed in full. Beyond that the first and last page
    are always shown, plus either the first four pages, the last four pages,
    or the current page with one neighbour on each side.
    """
    if total_pages <= MAX_FULL_WINDOW:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, ELLIPSIS, total_pages]
    if current_page >= total_pages - 2:
        return [1, ELLIPSIS, total_pages - 3, total_pages - 2, total_pages - 1, total_pages]
    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        total_pages,
    ]


def page_href(page: int, base_path: str = "", params: Mapping[str, Any] | None = None) -> str:
    """Link to ``page`` keeping the other query parameters; empty values are dropped."""
    query = {k: v for k, v in (params or {}).items() if k != "page" and v not in (None, "")}
    query["page"] = page
    return f"{base_path}?{urlencode(query)}"


class PageLink(BaseModel):
    kind: Literal["page"] = "page"
    page: int
    href: str
    is_active: bool = False


class PageEllipsis(BaseModel):
    kind: Literal["ellipsis"] = "ellipsis"


class PageStep(BaseModel):
    """The Previous / Next controls; a disabled step has no target."""

    label: str
    page: int | None = None
    href: str | None = None
    disabled: bool = False


class PaginationControl(BaseModel):
    current_page: int
    total_pages: int
    previous: PageStep
    items: list[Union[PageLink, PageEllipsis]]
    next: PageStep


def _step(label: str, page: int, enabled: bool, base_path: str, params: Mapping[str, Any] | None) -> PageStep:
    if not enabled:
        return PageStep(label=label, disabled=True)
    return PageStep(label=label, page=page, href=page_href(page, base_path, params))


def build_pagination_control(
    current_page: int,
    total_pages: int,
    *,
    base_path: str = "",
    params: Mapping[str, Any] | None = None,
) -> PaginationControl | None:
    """
    Describe the pager for a listing, or None when there is at most one page.
    Previous is disabled on the first page and Next on the last.
    """
    if total_pages <= 1:
        return None

    items: list[PageLink | PageEllipsis] = []
    for item in page_window(current_page, total_pages):
        if item == ELLIPSIS:
            items.append(PageEllipsis())
        else:
            items.append(
                PageLink(
                    page=item,
                    href=page_href(item, base_path, params),
                    is_active=item == current_page,
                )
            )

    return PaginationControl(
        current_page=current_page,
        total_pages=total_pages,
        previous=_step("Previous", current_page - 1, current_page > 1, base_path, params),
        items=items,
        next=_step("Next", current_page + 1, current_page < total_pages, base_path, params),
    )
