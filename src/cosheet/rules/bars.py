"""
Token bar linking.

Links a token to its character and feeds its three bars from the
attributes named in the sheet's bar table. Bars are live-linked to the
attribute, except gauges of mooks (disposable NPCs) which get a copy of
the current values so each token keeps its own hit points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..sheets.registry import archetype_of, bar_table_for
from ..state.schema import Archetype

if TYPE_CHECKING:
    from ..config import HelperConfig
    from ..state.schema import Character, Token
    from ..state.store import GameStore

logger = logging.getLogger(__name__)


class BarMode(str, Enum):
    LINKED = "linked"  # Bar follows the attribute
    COPIED = "copied"  # Bar holds a snapshot of the attribute


@dataclass
class BarAssignment:
    """What was done to one bar."""
    bar: int
    attribute: str
    mode: BarMode
    value: str = ""
    max: str = ""


@dataclass
class BarLinkSummary:
    """Result of linking a token's bars."""
    token_id: str
    character_id: str
    mook: bool
    assignments: list[BarAssignment] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)  # Bars whose attribute is missing


def link_token(store: "GameStore", token: "Token", character: "Character") -> None:
    """Copy the avatar and fill the represents/name properties when unset."""
    if character.avatar:
        store.set_token_field(token, "imgsrc", character.avatar)
    if not token.represents:
        store.set_token_field(token, "represents", character.id)
    if not token.name:
        store.set_token_field(token, "name", character.name)


def link_bars(
    store: "GameStore",
    token_id: str,
    config: "HelperConfig",
    mook: bool = False,
    character_id: str | None = None,
) -> BarLinkSummary | None:
    """
    Link a token to a character and set up its bars.

    Args:
        store: Game data
        token_id: Token to set up
        config: Helper configuration (universe, bar overrides)
        mook: Copy gauge values instead of linking. Always on for NPCs.
        character_id: Character to link, defaults to the one the token represents

    Returns:
        BarLinkSummary, or None when the token or character is unknown
    """
    token = store.get_token(token_id)
    if token is None:
        return None
    character = store.get_character(character_id or token.represents)
    if character is None:
        return None

    link_token(store, token, character)

    archetype = archetype_of(store, character.id)
    mook = mook or archetype == Archetype.NON_PLAYER
    summary = BarLinkSummary(token_id=token.id, character_id=character.id, mook=mook)

    table = bar_table_for(config.universe, archetype, config.bar_overrides) if archetype else None
    if table is None:
        logger.debug(f"No bar table for {config.universe.value}/{archetype}")
        return summary

    for number, link in table.links():
        attribute = store.find_attribute(character.id, link.attribute)
        if attribute is None:
            logger.debug(f"Bar {number}: no attribute '{link.attribute}' on {character.name}")
            summary.skipped.append(number)
            continue

        if link.use_max and mook:
            store.set_token_field(token, f"bar{number}_link", "")
            store.set_token_field(token, f"bar{number}_value", attribute.current)
            store.set_token_field(token, f"bar{number}_max", attribute.max)
            summary.assignments.append(BarAssignment(
                bar=number,
                attribute=attribute.name,
                mode=BarMode.COPIED,
                value=attribute.current,
                max=attribute.max,
            ))
        else:
            store.set_token_field(token, f"bar{number}_link", attribute.id)
            summary.assignments.append(BarAssignment(
                bar=number,
                attribute=attribute.name,
                mode=BarMode.LINKED,
            ))

    return summary
