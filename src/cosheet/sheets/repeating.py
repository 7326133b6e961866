"""
Repeating sections: attribute naming and row discovery.

A repeating attribute is named `repeating_<section>_<rowId>_<field>`.
Row ids are opaque strings (e.g. "-Nd3kQx8"), except that a purely
numeric id is a row index and is written `$<index>` in roll references.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..state.store import GameStore


def char_attr(character_name: str, attribute: str) -> str:
    """Chat reference to a character attribute."""
    return f"@{{{character_name}|{attribute}}}"


def is_row_index(row_id: int | str) -> bool:
    """True for numeric row ids, which address rows by position."""
    if isinstance(row_id, int):
        return True
    return row_id.isdigit()


def repeat_attr(section: str, row_id: int | str, field: str) -> str:
    """Full name of a field in a repeating row."""
    if is_row_index(row_id):
        return f"repeating_{section}_${row_id}_{field}"
    return f"repeating_{section}_{row_id}_{field}"


def char_repeat_attr(character_name: str, section: str, row_id: int | str, field: str) -> str:
    """Chat reference to a field in a repeating row."""
    return char_attr(character_name, repeat_attr(section, row_id, field))


def order_attribute(section: str) -> str:
    """Name of the attribute holding the display order of a section."""
    return f"_reporder_{section}"


def row_ids_for(store: "GameStore", character_id: str, section: str) -> list[str]:
    """
    Row ids of a repeating section, in display order.

    Rows are discovered in attribute order. When the section has an order
    attribute, the rows it lists come first (matched case-insensitively),
    then the remaining rows in discovery order. Listed ids without any
    attribute are dropped.

    The store is scanned on every call.
    """
    prefix = f"repeating_{section}_"
    discovered: list[str] = []
    for attribute in store.find_attributes(character_id, prefix):
        row_id = attribute.name[len(prefix):].split("_")[0]
        if row_id and row_id not in discovered:
            discovered.append(row_id)

    order = store.get_attribute_value(character_id, order_attribute(section))
    if not order:
        return discovered

    known: dict[str, str] = {}
    for row_id in discovered:
        known.setdefault(row_id.lower(), row_id)

    listed = [
        known[item.strip().lower()]
        for item in order.split(",")
        if item.strip().lower() in known
    ]
    return list(dict.fromkeys(listed + discovered))
