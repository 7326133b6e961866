"""
Token status markers as pure functions.

apply_marker_ops() computes the new marker string of a token and the side
effects of a batch of operations without touching any store. sync_markers()
reads a token from a store, applies the batch and writes the results back.

Markers are written `tag` or `tag@badge` (badge 1-9). Standard markers also
mirror their state in a legacy `status_<name>` token property. Some custom
markers set a character attribute (see MARKER_ATTRIBUTES).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..state.schema import MarkerDefinition
    from ..state.store import GameStore

logger = logging.getLogger(__name__)

STANDARD_MARKERS = ("red", "blue", "green", "brown", "purple", "pink", "yellow", "dead")
WILDCARD = "*"


class MarkerAction(str, Enum):
    ADD = "+"
    REMOVE = "-"


class MarkerOp(BaseModel):
    """Add or remove one marker."""
    op: MarkerAction
    name: str
    badge: int = Field(default=0, ge=0, le=9)  # 0 = no badge


@dataclass(frozen=True)
class MarkerAttributeEffect:
    """Attribute overwritten when a marker is added or removed."""
    attribute: str
    on_add: str
    on_remove: str


# Conditions carried by markers and the sheet attribute they drive
MARKER_ATTRIBUTES: dict[str, MarkerAttributeEffect] = {
    "affaibli": MarkerAttributeEffect(attribute="ETATDE", on_add="12", on_remove="20"),
}


@dataclass
class MarkerUpdate:
    """Result of a batch of marker operations."""
    markers: str
    legacy: dict[str, bool | int] = field(default_factory=dict)  # status_<name> -> state
    attribute_writes: list[tuple[str, str]] = field(default_factory=list)  # (attribute, value)
    ignored: list[str] = field(default_factory=list)  # Unresolved marker names


def is_standard(name: str) -> bool:
    return name in STANDARD_MARKERS


def _in_catalogue(name: str, catalogue: list["MarkerDefinition"]) -> bool:
    return any(definition.name == name for definition in catalogue)


def resolve_tag(name: str, catalogue: list["MarkerDefinition"]) -> str | None:
    """Display tag of a marker: campaign catalogue first, then standard names."""
    for definition in catalogue:
        if definition.name == name:
            return definition.tag
    if is_standard(name):
        return name
    return None


def apply_marker_ops(
    markers: str,
    ops: list[MarkerOp],
    catalogue: list["MarkerDefinition"],
) -> MarkerUpdate:
    """
    Apply marker operations in order.

    - Add appends the tag (with `@badge`) unless that exact string is
      present, so "dead" and "dead@3" can coexist. The legacy property is
      only set when the standard vocabulary supplied the tag.
    - Remove "*" clears every marker.
    - Remove <name> drops every marker starting with the resolved tag,
      badge variants included.

    Unresolvable names are skipped; the rest of the batch still applies.
    """
    current = markers.split(",")
    update = MarkerUpdate(markers=markers)

    for op in ops:
        adding = op.op == MarkerAction.ADD

        effect = MARKER_ATTRIBUTES.get(op.name)
        if effect is not None:
            update.attribute_writes.append(
                (effect.attribute, effect.on_add if adding else effect.on_remove)
            )

        if not adding and op.name == WILDCARD:
            for marker in current:
                base = marker.split("@")[0]
                if is_standard(base):
                    update.legacy[f"status_{base}"] = False
            current = []
            continue

        tag = resolve_tag(op.name, catalogue)
        if tag is None:
            logger.debug(f"Ignoring unknown marker '{op.name}'")
            update.ignored.append(op.name)
            continue

        if adding:
            if is_standard(op.name) and not _in_catalogue(op.name, catalogue):
                update.legacy[f"status_{op.name}"] = op.badge if op.badge else True
            if op.badge:
                tag = f"{tag}@{op.badge}"
            if current == [""]:
                current = [tag]
            elif tag not in current:
                current.append(tag)
        else:
            current = [marker for marker in current if not marker.startswith(tag)]
            if is_standard(op.name):
                update.legacy[f"status_{op.name}"] = False

    update.markers = ",".join(marker for marker in current if marker)
    return update


def sync_markers(store: "GameStore", token_id: str, ops: list[MarkerOp]) -> MarkerUpdate | None:
    """
    Apply marker operations to a token in the store.

    Writes the legacy status properties, the new marker string and, when
    the token represents a character, the marker-driven attributes that
    already exist on that character. Returns None for an unknown token.
    """
    token = store.get_token(token_id)
    if token is None:
        return None

    update = apply_marker_ops(store.get_token_markers(token), ops, store.get_marker_catalogue())

    for prop, value in update.legacy.items():
        store.set_token_field(token, prop, value)
    store.set_token_markers(token, update.markers)

    if token.represents and store.get_character(token.represents) is not None:
        for name, value in update.attribute_writes:
            if store.find_attribute(token.represents, name) is not None:
                store.set_attribute_value(token.represents, name, "current", value)

    return update
