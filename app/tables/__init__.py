"""
Declarative data tables: column configuration, column builders, the column
composer, the pagination control and full table assembly.
"""
from app.tables.columns import (  # noqa: F401
    ActionColumn,
    ActionColumnDescriptor,
    ColumnDescriptor,
    DateColumn,
    DateColumnDescriptor,
    FieldColumn,
    TextColumn,
    TextColumnDescriptor,
    build_action_column,
    build_date_column,
    build_text_column,
)
from app.tables.composer import compose_columns, parse_column_config  # noqa: F401
from app.tables.data_table import DataTable, build_data_table  # noqa: F401
from app.tables.pagination import ELLIPSIS, build_pagination_control, page_window  # noqa: F401
