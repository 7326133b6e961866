"""
Chat building blocks shared by the menu renderers.

Handles buttons, the `co1` roll template and the choice of recipient.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..config import HelperConfig
    from ..sheets.registry import SheetSchema
    from ..state.store import GameStore

# Recipients
ALL = "all"
GM = "gm"

GM_WHISPER = "/w gm "
LINE_BREAK = "\n\r"


class MenuKind(str, Enum):
    """Menus that can be rendered for a character."""
    PATHS = "voies"
    PATH = "voie"
    ABILITIES = "competences"
    TRAITS = "traits"
    CHARACTERISTICS = "caracs"
    ATTACKS = "attaques"
    ATTACK = "atk"


class MenuArgs(BaseModel):
    """Per-menu arguments."""
    path: int | None = Field(default=None, ge=1, le=9)  # PATH: path number
    descriptions: bool = False  # PATHS/PATH: descriptions only, no roll buttons
    row_id: str | None = None  # ATTACK: row of the attack section


@dataclass
class ChatMessage:
    """Text to broadcast and who receives it."""
    text: str
    recipient: str = ALL


def button(label: str, action: str) -> str:
    """Chat button running an action."""
    return f"[{label}]({action})"


def roll_button(label: str, character_id: str, roll: str) -> str:
    """Chat button rolling a character sheet roll."""
    return button(label, f"~{character_id}|{roll}")


def co_template(perso: str, subtags: str, name: str, desc: str) -> str:
    """Wrap a menu body in the sheets' `co1` roll template."""
    return (
        f"&{{template:co1}} {{{{perso={perso}}}}} {{{{subtags={subtags}}}}} "
        f"{{{{name={name}}}}} {{{{desc={desc} }}}}"
    )


def character_name(store: "GameStore", character_id: str) -> str:
    character = store.get_character(character_id)
    if character is not None and character.name:
        return character.name
    return store.get_attribute_value(character_id, "character_name")


def resolve_recipient(
    store: "GameStore",
    character_id: str,
    schema: "SheetSchema",
    config: "HelperConfig",
) -> tuple[str, str]:
    """
    Decide the whisper prefix and recipient of a menu.

    The sheet's own "to GM" setting wins; otherwise the whisper toggle of
    the configuration sends the menu to the GM.

    Returns:
        (prefix, recipient)
    """
    if schema.togm:
        prefix = store.get_attribute_value(character_id, schema.togm)
        if prefix:
            return prefix, GM
    if config.whisper:
        return GM_WHISPER, GM
    return "", ALL
