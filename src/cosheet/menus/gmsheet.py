"""
GM stat block.

A compact HTML summary of a character (characteristics, combat values,
hit points) whispered to the GM.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from ..sheets.registry import StatBlock, StatSpec, archetype_of, schema_for
from ..state.schema import Archetype
from .chat import GM, GM_WHISPER, ChatMessage, character_name

if TYPE_CHECKING:
    from ..config import HelperConfig
    from ..state.store import GameStore


def _kebab(name: str) -> str:
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower()


def get_style(**properties: str) -> str:
    """CSS declarations from camelCase keyword arguments."""
    return "".join(f"{_kebab(prop)}:{value};" for prop, value in properties.items())


def get_element(tag: str, content: str | None, **attributes: str) -> str:
    """HTML element. A None content gives a self-closing element."""
    html = f"<{tag}"
    for prop, value in attributes.items():
        html += f' {_kebab(prop)}="{value}"'
    if content is None:
        return html + " />"
    return html + f">{content}</{tag}>"


def stat_span(store: "GameStore", character_id: str, spec: StatSpec, suffix: str = "") -> str | None:
    """`Label : value` span, or None when the attribute is absent."""
    attribute = store.find_attribute(character_id, spec.attribute)
    if attribute is None:
        return None
    return get_element("span", f"{spec.display}&nbsp;:&nbsp;<b>{attribute.current}</b>{suffix}")


def _spans(store: "GameStore", character_id: str, specs: tuple[StatSpec, ...]) -> list[str]:
    spans = [stat_span(store, character_id, spec) for spec in specs]
    return [span for span in spans if span is not None]


def _characteristic_rows(store: "GameStore", character_id: str, stats: StatBlock) -> list[str]:
    if not stats.characteristics:
        return []
    if not stats.modifiers:
        return [" ".join(_spans(store, character_id, stats.characteristics))]

    try:
        modifiers = json.loads(store.get_attribute_value(character_id, "CARACS") or "{}")
    except json.JSONDecodeError:
        modifiers = {}
    if not isinstance(modifiers, dict):
        modifiers = {}

    spans = []
    for spec in stats.characteristics:
        buff = store.get_attribute_value(character_id, f"{spec.modifier}_BUFF")
        if buff not in ("", "0"):
            buff = "+" + buff
        else:
            buff = ""
        span = stat_span(store, character_id, spec, f" ({modifiers.get(spec.modifier, '')}{buff})")
        if span is not None:
            spans.append(span)

    # Physical then mental characteristics
    return [" ".join(spans[:3]), " ".join(spans[3:])]


def _combat_row(store: "GameStore", character_id: str, stats: StatBlock) -> str:
    parts = _spans(store, character_id, stats.combat)

    if stats.health:
        health = store.find_attribute(character_id, stats.health)
        if health is not None:
            parts.append(get_element("span", f"PV&nbsp;:&nbsp;<b>{health.current}</b>")
                         + " / " + get_element("span", f"<b>{health.max}</b>"))

    if stats.threshold:
        threshold = stat_span(store, character_id, stats.threshold)
        if threshold is not None:
            parts.append(f"({threshold})")

    return " ".join(parts)


def render_gm_sheet(store: "GameStore", character_id: str, config: "HelperConfig") -> ChatMessage | None:
    """Stat block of a character for the GM. None when the sheet has none."""
    archetype = archetype_of(store, character_id)
    schema = schema_for(config.universe, archetype) if archetype else None
    if schema is None or schema.stats is None:
        return None

    title = character_name(store, character_id)
    if archetype != Archetype.PLAYER:
        title += f" ({archetype.value})"

    content = get_element(
        "div",
        title,
        style=get_style(backgroundColor="darkgray", color="white", textAlign="center", borderRadius="4px"),
    )

    rows = _characteristic_rows(store, character_id, schema.stats)
    rows.append(_combat_row(store, character_id, schema.stats))
    for row in rows:
        if row:
            content += get_element("div", row, style=get_style(fontSize="smaller", textAlign="justify"))

    html = get_element(
        "div",
        content,
        style=get_style(
            border="1px solid black",
            padding="2px",
            borderRadius="4px",
            boxShadow="2px 2px 2px 1px rgba(0, 0, 0, 0.2)",
        ),
    )
    return ChatMessage(GM_WHISPER + html, GM)
