"""
Chat menus built from a character's sheet.

Every renderer takes (store, character_id, schema, archetype, args) and
returns the menu text, or "" when there is nothing to show. render_menu()
resolves the schema, adds the whisper prefix and picks the recipient.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ..sheets.registry import SheetSchema, archetype_of, schema_for
from ..state.schema import Archetype
from .attacks import render_attack, render_attacks
from .chat import ALL, GM, ChatMessage, MenuArgs, MenuKind, resolve_recipient
from .gmsheet import render_gm_sheet
from .paths import render_path, render_paths
from .rolls import render_abilities, render_characteristics, render_traits

if TYPE_CHECKING:
    from ..config import HelperConfig
    from ..state.store import GameStore

logger = logging.getLogger(__name__)

Renderer = Callable[["GameStore", str, SheetSchema, Archetype, MenuArgs], str]

RENDERERS: dict[MenuKind, Renderer] = {
    MenuKind.PATHS: render_paths,
    MenuKind.PATH: render_path,
    MenuKind.ABILITIES: render_abilities,
    MenuKind.TRAITS: render_traits,
    MenuKind.CHARACTERISTICS: render_characteristics,
    MenuKind.ATTACKS: render_attacks,
    MenuKind.ATTACK: render_attack,
}


def render_menu(
    store: "GameStore",
    kind: MenuKind | str,
    character_id: str,
    config: "HelperConfig",
    args: MenuArgs | None = None,
) -> ChatMessage | None:
    """
    Render a menu for a character.

    Returns None when the sheet type has no schema in the configured
    universe, or when the menu is empty.
    """
    archetype = archetype_of(store, character_id)
    schema = schema_for(config.universe, archetype) if archetype else None
    if schema is None:
        return None

    try:
        kind = MenuKind(kind)
    except ValueError:
        logger.debug(f"Unknown menu '{kind}'")
        return None

    text = RENDERERS[kind](store, character_id, schema, archetype, args or MenuArgs())
    if not text:
        logger.debug(f"Menu {kind.value} is empty for character {character_id}")
        return None

    prefix, recipient = resolve_recipient(store, character_id, schema, config)
    return ChatMessage(prefix + text, recipient)


__all__ = [
    "ALL",
    "GM",
    "ChatMessage",
    "MenuArgs",
    "MenuKind",
    "RENDERERS",
    "render_menu",
    "render_gm_sheet",
]
