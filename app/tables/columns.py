"""
Column configurations and the builders that turn them into column descriptors.

A configuration says what a column shows; a descriptor knows how to render one
cell of it for a given row. Rows may be ORM objects or plain mappings.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

MISSING_TEXT = "-"
BOLD_CLASS = "font-medium"
ACTION_COLUMN_ID = "actions"


def get_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(field)
    return getattr(row, field, None)


def is_missing(value: Any) -> bool:
    """Only None and the empty string count as missing; 0 and False are real values."""
    return value is None or (isinstance(value, str) and value == "")


# ── Configurations ────────────────────────────────────────────────────────────

class _ColumnConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FieldColumn(_ColumnConfig):
    """A bare field name: a text column with a capitalised header and "-" fallback."""

    type: Literal["field"] = "field"
    name: str = Field(min_length=1)


class TextColumn(_ColumnConfig):
    type: Literal["text"] = "text"
    accessor_key: str = Field(alias="accessorKey", min_length=1)
    header: str
    class_name: str | None = Field(default=None, alias="className")
    fallback: str = MISSING_TEXT
    formatter: Callable[[Any], str] | None = Field(default=None, exclude=True)
    bold: bool = Field(default=False, alias="isBold")


class DateColumn(_ColumnConfig):
    type: Literal["date"] = "date"
    accessor_key: str = Field(alias="accessorKey", min_length=1)
    header: str
    date_formatter: Callable[[datetime | date], str] | None = Field(
        default=None, alias="formatDate", exclude=True
    )


class ActionColumn(_ColumnConfig):
    """
    Per-row actions. Each menu entry only appears when its handler is set.
    Edit and delete handlers return the target the control points at
    (typically a path); copying always uses ``id_extractor``.
    """

    id_extractor: Callable[[Any], str] = Field(alias="getItemId", exclude=True)
    name_extractor: Callable[[Any], str] | None = Field(
        default=None, alias="getItemName", exclude=True
    )
    on_edit: Callable[[Any], str | None] | None = Field(default=None, alias="onEdit", exclude=True)
    on_delete: Callable[[Any], str | None] | None = Field(
        default=None, alias="onDelete", exclude=True
    )
    on_copy_id: Callable[[Any], Any] | None = Field(default=None, alias="onCopyId", exclude=True)
    delete_title: str = "Delete Item"


# ── Cells ─────────────────────────────────────────────────────────────────────

class TextCell(BaseModel):
    kind: Literal["text"] = "text"
    text: str
    class_name: str | None = None


class DeleteDialog(BaseModel):
    """Confirmation shown before a destructive delete."""

    title: str = "Delete Item"
    description: str
    confirm_button_text: str = "Delete"
    cancel_button_text: str = "Cancel"

    @classmethod
    def for_item(cls, item_name: str | None = None, title: str = "Delete Item") -> DeleteDialog:
        if item_name:
            description = (
                f'Are you sure you want to delete "{item_name}"? This action cannot be undone.'
            )
        else:
            description = "Are you sure you want to delete this item? This action cannot be undone."
        return cls(title=title, description=description)


class MenuItem(BaseModel):
    kind: Literal["item"] = "item"
    action: Literal["copy_id", "edit", "delete"]
    label: str
    value: str | None = None
    href: str | None = None
    destructive: bool = False
    confirm: DeleteDialog | None = None


class MenuSeparator(BaseModel):
    kind: Literal["separator"] = "separator"


class ActionCell(BaseModel):
    kind: Literal["action"] = "action"
    label: str = "Actions"
    item_id: str
    entries: list[Union[MenuItem, MenuSeparator]]


Cell = Union[TextCell, ActionCell]


# ── Descriptors ───────────────────────────────────────────────────────────────

class TextColumnDescriptor(BaseModel):
    kind: Literal["text"] = "text"
    id: str
    field: str
    header: str
    fallback: str = MISSING_TEXT
    bold: bool = False
    class_name: str | None = None
    formatter: Callable[[Any], str] | None = Field(default=None, exclude=True)

    def render(self, row: Any) -> TextCell:
        value = get_value(row, self.field)
        if self.formatter is not None:
            text = self.formatter(value)
        elif is_missing(value):
            text = self.fallback
        else:
            text = value

        classes = [c for c in (self.class_name, BOLD_CLASS if self.bold else None) if c]
        return TextCell(text=str(text), class_name=" ".join(classes) if classes else None)


def to_datetime(value: Any) -> datetime | date | None:
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def locale_date(value: datetime | date) -> str:
    return value.strftime("%x")


class DateColumnDescriptor(BaseModel):
    kind: Literal["date"] = "date"
    id: str
    field: str
    header: str
    date_formatter: Callable[[datetime | date], str] | None = Field(default=None, exclude=True)

    def render(self, row: Any) -> TextCell:
        value = get_value(row, self.field)
        if is_missing(value):
            return TextCell(text=MISSING_TEXT)

        parsed = to_datetime(value)
        if parsed is None:
            # Not a date we understand; show it untouched
            return TextCell(text=str(value))

        format_date = self.date_formatter or locale_date
        return TextCell(text=format_date(parsed))


class ActionColumnDescriptor(BaseModel):
    kind: Literal["action"] = "action"
    id: str = ACTION_COLUMN_ID
    header: str = ""
    action_config: ActionColumn = Field(exclude=True)

    def item_id(self, row: Any) -> str:
        return str(self.action_config.id_extractor(row))

    def render(self, row: Any) -> ActionCell:
        config = self.action_config
        item_id = self.item_id(row)
        entries: list[MenuItem | MenuSeparator] = []

        if config.on_copy_id is not None:
            entries.append(MenuItem(action="copy_id", label="Copy ID", value=item_id))

        # Separates the label and copy entry from the row operations
        if config.on_edit is not None or config.on_delete is not None:
            entries.append(MenuSeparator())

        if config.on_edit is not None:
            entries.append(MenuItem(action="edit", label="Edit", href=config.on_edit(row)))

        if config.on_delete is not None:
            item_name = config.name_extractor(row) if config.name_extractor else None
            entries.append(
                MenuItem(
                    action="delete",
                    label="Delete",
                    href=config.on_delete(row),
                    value=item_id,
                    destructive=True,
                    confirm=DeleteDialog.for_item(item_name, title=config.delete_title),
                )
            )

        return ActionCell(item_id=item_id, entries=entries)


ColumnDescriptor = Union[TextColumnDescriptor, DateColumnDescriptor, ActionColumnDescriptor]


# ── Builders ──────────────────────────────────────────────────────────────────

def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def build_field_column(config: FieldColumn) -> TextColumnDescriptor:
    return TextColumnDescriptor(id=config.name, field=config.name, header=capitalize(config.name))


def build_text_column(config: TextColumn) -> TextColumnDescriptor:
    return TextColumnDescriptor(
        id=config.accessor_key,
        field=config.accessor_key,
        header=config.header,
        fallback=config.fallback,
        bold=config.bold,
        class_name=config.class_name,
        formatter=config.formatter,
    )


def build_date_column(config: DateColumn) -> DateColumnDescriptor:
    return DateColumnDescriptor(
        id=config.accessor_key,
        field=config.accessor_key,
        header=config.header,
        date_formatter=config.date_formatter,
    )


def build_action_column(config: ActionColumn) -> ActionColumnDescriptor:
    return ActionColumnDescriptor(action_config=config)
