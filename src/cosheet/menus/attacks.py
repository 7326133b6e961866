"""Attack menus."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..sheets.repeating import repeat_attr, row_ids_for
from .chat import LINE_BREAK, MenuArgs, character_name, co_template, roll_button

if TYPE_CHECKING:
    from ..sheets.registry import SheetSchema
    from ..state.schema import Archetype
    from ..state.store import GameStore

# Attack type field values and their qualifier tag
ATTACK_TAGS = {
    "@{ATKTIR}": "D",
    "@{ATKMAG}": "Mag",
    "@{ATKMEN}": "Men",
    "@{ATKPSYINFLU}": "Psy",
    "@{ATKPSYINTUI}": "Psy",
}
MELEE_TAG = "C"


def attack_qualifier(attack_type: str, attack_range: str = "") -> str:
    """
    Bracketed attack qualifier: (D:20), (Mag), (C)...

    Range only shows for non melee attacks.
    """
    tag = ATTACK_TAGS.get(attack_type, MELEE_TAG)
    if attack_range and tag != MELEE_TAG:
        return f"({tag}:{attack_range})"
    return f"({tag})"


def render_attacks(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    """One roll button per weapon, followed by its roll label and qualifiers."""
    if not schema.has("atk_section", "atk_name", "atk_roll"):
        return ""

    section = schema.atk_section

    lines = []
    for row_id in row_ids_for(store, character_id, section):
        def field(role: str | None) -> str:
            if role is None:
                return ""
            return store.get_attribute_value(character_id, repeat_attr(section, row_id, role))

        weapon = field(schema.atk_name)
        if weapon == "":
            continue

        info = [field(schema.atk_label), field(schema.atk_limited)]
        if schema.atk_type is not None:
            info.append(attack_qualifier(field(schema.atk_type), field(schema.atk_range)))
        extras = " ".join(item for item in info if item)

        line = roll_button(weapon, character_id, repeat_attr(section, row_id, schema.atk_roll))
        if extras:
            line += " " + extras
        lines.append(line + LINE_BREAK)

    if not lines:
        return ""

    return co_template(character_name(store, character_id), "Combat", "Attaques", "".join(lines))


def render_attack(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    archetype: "Archetype",
    args: MenuArgs,
) -> str:
    """Roll a single attack row directly."""
    if not schema.has("atk_section", "atk_roll") or not args.row_id:
        return ""
    roll = repeat_attr(schema.atk_section, args.row_id, schema.atk_roll)
    return f"%{{{character_name(store, character_id)}|{roll}}}"
