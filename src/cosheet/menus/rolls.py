"""Skill, trait and characteristic roll menus."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..sheets.repeating import char_attr, repeat_attr, row_ids_for
from .chat import LINE_BREAK, MenuArgs, character_name, co_template, roll_button

if TYPE_CHECKING:
    from ..sheets.registry import SheetSchema
    from ..state.schema import Archetype
    from ..state.store import GameStore


def _roll_lines(
    store: "GameStore",
    character_id: str,
    section: str,
    name_field: str,
    roll_field: str,
    skill_field: str | None = None,
) -> list[str]:
    """One roll button per row, labelled by skill title or else by name."""
    lines = []
    for row_id in row_ids_for(store, character_id, section):
        label = ""
        if skill_field:
            label = store.get_attribute_value(character_id, repeat_attr(section, row_id, skill_field))
        if label == "":
            label = store.get_attribute_value(character_id, repeat_attr(section, row_id, name_field))
        if label == "":
            continue
        roll = repeat_attr(section, row_id, roll_field)
        lines.append(roll_button(label, character_id, roll) + LINE_BREAK)
    return lines


def render_abilities(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    if not schema.has("capa_section", "capa_name", "capa_roll"):
        return ""

    lines = _roll_lines(
        store, character_id,
        schema.capa_section, schema.capa_name, schema.capa_roll, schema.capa_skill,
    )
    if not lines:
        return ""

    name = character_name(store, character_id)
    return co_template(name, char_attr(name, "PROFIL"), "Compétences", "".join(lines))


def render_traits(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    if not schema.has("trait_section", "trait_name", "trait_roll"):
        return ""

    lines = _roll_lines(store, character_id, schema.trait_section, schema.trait_name, schema.trait_roll)
    if not lines:
        return ""

    name = character_name(store, character_id)
    return co_template(name, char_attr(name, "PROFIL"), "Traits", "".join(lines))


def characteristic_code(roll: str) -> str:
    """Short code of a characteristic roll: jet_for -> FOR."""
    return roll.rsplit("_", 1)[-1].upper()


def render_characteristics(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    if not schema.characteristic_rolls:
        return ""

    buttons = [
        roll_button(characteristic_code(roll), character_id, roll)
        for roll in schema.characteristic_rolls
    ]
    name = character_name(store, character_id)
    return co_template(name, "Tests", "Caractéristiques", " | ".join(buttons))
