"""Sheet schemas and repeating section helpers."""

from .registry import (
    SheetSchema,
    PathFields,
    StatSpec,
    StatBlock,
    BarLink,
    BarTable,
    SCHEMAS,
    BAR_TABLES,
    schema_for,
    bar_table_for,
    archetype_of,
)
from .repeating import (
    char_attr,
    char_repeat_attr,
    repeat_attr,
    order_attribute,
    row_ids_for,
)

__all__ = [
    "SheetSchema",
    "PathFields",
    "StatSpec",
    "StatBlock",
    "BarLink",
    "BarTable",
    "SCHEMAS",
    "BAR_TABLES",
    "schema_for",
    "bar_table_for",
    "archetype_of",
    "char_attr",
    "char_repeat_attr",
    "repeat_attr",
    "order_attribute",
    "row_ids_for",
]
