"""
Column composer.
Turns an ordered column configuration plus one action configuration into the
final list of column descriptors.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Annotated, Any, Union

from pydantic import BeforeValidator, Field, TypeAdapter

from app.tables.columns import (
    ActionColumn,
    ColumnDescriptor,
    DateColumn,
    FieldColumn,
    TextColumn,
    build_action_column,
    build_date_column,
    build_field_column,
    build_text_column,
)


def _field_shorthand(value: Any) -> Any:
    if isinstance(value, str):
        return {"type": "field", "name": value}
    return value


ColumnConfig = Annotated[
    Union[FieldColumn, TextColumn, DateColumn],
    Field(discriminator="type"),
]
ColumnConfigInput = Union[str, Mapping[str, Any], FieldColumn, TextColumn, DateColumn]

_column_configs = TypeAdapter(list[Annotated[ColumnConfig, BeforeValidator(_field_shorthand)]])

_BUILDERS: dict[str, Callable[[Any], ColumnDescriptor]] = {
    "field": build_field_column,
    "text": build_text_column,
    "date": build_date_column,
}


def parse_column_config(entries: Sequence[ColumnConfigInput]) -> list[ColumnConfig]:
    """
    Normalise raw entries into tagged column configs.
    Bare strings become FieldColumn; mappings are validated on their ``type`` tag.
    """
    return _column_configs.validate_python(list(entries))


def compose_columns(
    column_config: Sequence[ColumnConfigInput],
    action_column: ActionColumn,
) -> list[ColumnDescriptor]:
    """
    Build one descriptor per entry, in order, and append the action column last.
    Repeated field names are kept as separate columns.
    """
    columns: list[ColumnDescriptor] = [
        _BUILDERS[config.type](config) for config in parse_column_config(column_config)
    ]
    columns.append(build_action_column(action_column))
    return columns
