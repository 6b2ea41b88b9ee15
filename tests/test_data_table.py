"""
Data table assembly tests.
Covers: header row, rendered rows, totals text, empty tables, footer pager, navigation.
"""
from __future__ import annotations

from datetime import datetime

from app.schemas.navigation import build_navigation
from app.schemas.pagination import PaginationMeta, PaginationResult
from app.tables import ActionColumn, DateColumn, build_data_table, compose_columns
from app.tables.data_table import describe_total

ROWS = [
    {"id": "a1", "title": "Alpha", "created_at": datetime(2024, 5, 1)},
    {"id": "b2", "title": None, "created_at": None},
]


def _columns():
    return compose_columns(
        [
            {"type": "text", "accessorKey": "title", "header": "Title", "fallback": "Untitled"},
            DateColumn(
                accessor_key="created_at",
                header="Created",
                date_formatter=lambda d: d.strftime("%Y-%m-%d"),
            ),
        ],
        ActionColumn(
            id_extractor=lambda row: row["id"],
            on_edit=lambda row: f"/dashboard/tasks/{row['id']}",
        ),
    )


def _page(rows, *, current_page=1, page_size=10, total_items=None):
    return PaginationResult(
        data=rows,
        pagination=PaginationMeta.build(
            current_page=current_page,
            page_size=page_size,
            total_items=len(rows) if total_items is None else total_items,
        ),
    )


class TestDescribeTotal:
    def test_singular_and_plural(self) -> None:
        assert describe_total(0, "task") == "0 tasks total"
        assert describe_total(1, "task") == "1 task total"
        assert describe_total(42, "user") == "42 users total"


class TestBuildDataTable:
    def test_header_and_rows(self) -> None:
        table = build_data_table(columns=_columns(), page=_page(ROWS), title="All Tasks", noun="task")

        assert [(h.id, h.header, h.kind) for h in table.columns] == [
            ("title", "Title", "text"),
            ("created_at", "Created", "date"),
            ("actions", "", "action"),
        ]
        assert table.description == "2 tasks total"
        assert [row.id for row in table.rows] == ["a1", "b2"]

        first, second = table.rows
        assert first.cells[0].text == "Alpha"
        assert first.cells[1].text == "2024-05-01"
        assert second.cells[0].text == "Untitled"
        assert second.cells[1].text == "-"
        assert second.cells[2].entries[-1].href == "/dashboard/tasks/b2"

    def test_empty_page(self) -> None:
        table = build_data_table(
            columns=_columns(),
            page=_page([]),
            title="All Tasks",
            noun="task",
            empty_message="No tasks found.",
        )
        assert table.is_empty
        assert table.empty_message == "No tasks found."
        assert table.pagination_control is None
        assert table.description == "0 tasks total"

    def test_pager_keeps_search_and_params(self) -> None:
        table = build_data_table(
            columns=_columns(),
            page=_page(ROWS, current_page=2, page_size=2, total_items=9),
            title="All Tasks",
            noun="task",
            search="alp",
            base_path="/dashboard/tasks",
            params={"pageSize": 2},
        )
        assert table.search_value == "alp"
        control = table.pagination_control
        assert control is not None
        assert control.total_pages == 5
        assert control.previous.href == "/dashboard/tasks?search=alp&pageSize=2&page=1"
        assert control.next.href == "/dashboard/tasks?search=alp&pageSize=2&page=3"

    def test_serialises_to_json(self) -> None:
        table = build_data_table(columns=_columns(), page=_page(ROWS), title="T", noun="task")
        payload = table.model_dump(mode="json")
        assert payload["rows"][0]["cells"][2]["kind"] == "action"
        assert payload["pagination"]["total_items"] == 2
        assert payload["error"] is None


class TestNavigation:
    def test_longest_match_is_active(self) -> None:
        groups = build_navigation("/dashboard/tasks/123")
        active = [item.url for group in groups for item in group.items if item.is_active]
        assert active == ["/dashboard/tasks"]

    def test_overview_and_defaults_untouched(self) -> None:
        groups = build_navigation("/dashboard/")
        active = [item.title for group in groups for item in group.items if item.is_active]
        assert active == ["Overview"]

        again = build_navigation("/elsewhere")
        assert not any(item.is_active for group in again for item in group.items)
