"""
Game data storage abstraction.

The live store belongs to the host tabletop. COSheet only talks to it
through the GameStore protocol, which keeps menus, markers and bars
testable against an in-memory implementation.
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

from .schema import Attribute, Character, GameSnapshot, MarkerDefinition, Token

logger = logging.getLogger(__name__)

Facet = Literal["current", "max"]


@runtime_checkable
class GameStore(Protocol):
    """
    Abstract interface to the host's characters, attributes and tokens.

    Implementations:
    - MemoryGameStore: In-memory storage (testing, scripting)
    - JsonGameStore: Snapshot file persistence
    """

    def get_character(self, character_id: str) -> Character | None:
        """Return a character by ID, or None."""
        ...

    def find_attributes(self, character_id: str, prefix: str | None = None) -> list[Attribute]:
        """All attributes of a character, optionally filtered by name prefix."""
        ...

    def find_attribute(self, character_id: str, name: str) -> Attribute | None:
        """A single attribute by exact name, or None."""
        ...

    def get_attribute_value(self, character_id: str, name: str, facet: Facet = "current") -> str:
        """Attribute value. Empty string when the attribute is absent."""
        ...

    def set_attribute_value(self, character_id: str, name: str, facet: Facet, value: str) -> None:
        """Write one facet of an attribute."""
        ...

    def get_token(self, token_id: str) -> Token | None:
        """Return a token by ID, or None."""
        ...

    def set_token_field(self, token: Token, field: str, value: Any) -> None:
        """Write a token property."""
        ...

    def get_token_markers(self, token: Token) -> str:
        """Comma-separated status markers of a token."""
        ...

    def set_token_markers(self, token: Token, markers: str) -> None:
        """Replace the status markers of a token."""
        ...

    def get_marker_catalogue(self) -> list[MarkerDefinition]:
        """Campaign custom markers."""
        ...


class MemoryGameStore:
    """
    In-memory game storage.

    Attributes keep their insertion order, which is the discovery order
    seen by the repeating section resolver.
    """

    def __init__(self, snapshot: GameSnapshot | None = None):
        self.characters: dict[str, Character] = {}
        self.attributes: list[Attribute] = []
        self.tokens: dict[str, Token] = {}
        self.token_markers: list[MarkerDefinition] = []
        if snapshot is not None:
            self.restore(snapshot)

    # -------------------------------------------------------------------------
    # Population helpers
    # -------------------------------------------------------------------------

    def add_character(self, character: Character, **attributes: str) -> Character:
        """Register a character, with optional `name=current` attributes."""
        self.characters[character.id] = character
        for name, value in attributes.items():
            self.add_attribute(character.id, name, value)
        return character

    def add_attribute(
        self,
        character_id: str,
        name: str,
        current: str = "",
        max: str = "",
    ) -> Attribute:
        attribute = Attribute(character_id=character_id, name=name, current=current, max=max)
        self.attributes.append(attribute)
        return attribute

    def add_token(self, token: Token) -> Token:
        self.tokens[token.id] = token
        return token

    def set_marker_catalogue(self, markers: list[MarkerDefinition]) -> None:
        self.token_markers = list(markers)

    def restore(self, snapshot: GameSnapshot) -> None:
        """Replace all content with a snapshot."""
        self.characters = {c.id: c for c in snapshot.characters}
        self.attributes = list(snapshot.attributes)
        self.tokens = {t.id: t for t in snapshot.tokens}
        self.token_markers = list(snapshot.token_markers)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            characters=list(self.characters.values()),
            attributes=list(self.attributes),
            tokens=list(self.tokens.values()),
            token_markers=list(self.token_markers),
        )

    def clear(self) -> None:
        """Drop everything (test utility)."""
        self.characters.clear()
        self.attributes.clear()
        self.tokens.clear()
        self.token_markers.clear()

    # -------------------------------------------------------------------------
    # GameStore protocol
    # -------------------------------------------------------------------------

    def get_character(self, character_id: str) -> Character | None:
        return self.characters.get(character_id)

    def find_attributes(self, character_id: str, prefix: str | None = None) -> list[Attribute]:
        return [
            a for a in self.attributes
            if a.character_id == character_id
            and (prefix is None or a.name.startswith(prefix))
        ]

    def find_attribute(self, character_id: str, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.character_id == character_id and attribute.name == name:
                return attribute
        return None

    def get_attribute_value(self, character_id: str, name: str, facet: Facet = "current") -> str:
        attribute = self.find_attribute(character_id, name)
        if attribute is None:
            return ""
        return getattr(attribute, facet)

    def set_attribute_value(self, character_id: str, name: str, facet: Facet, value: str) -> None:
        attribute = self.find_attribute(character_id, name)
        if attribute is None:
            attribute = self.add_attribute(character_id, name)
        setattr(attribute, facet, str(value))

    def get_token(self, token_id: str) -> Token | None:
        return self.tokens.get(token_id)

    def set_token_field(self, token: Token, field: str, value: Any) -> None:
        setattr(token, field, value)

    def get_token_markers(self, token: Token) -> str:
        return token.statusmarkers

    def set_token_markers(self, token: Token, markers: str) -> None:
        token.statusmarkers = markers

    def get_marker_catalogue(self) -> list[MarkerDefinition]:
        return list(self.token_markers)


class JsonGameStore(MemoryGameStore):
    """
    Game storage backed by a JSON snapshot file.

    Features:
    - Missing file loads as an empty game
    - Automatic backup on save
    """

    def __init__(self, path: Path | str = "game.json"):
        super().__init__()
        self.path = Path(path)
        self.load()

    def load(self) -> None:
        """Reload the snapshot file. Keeps current content if unreadable."""
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self.restore(GameSnapshot.model_validate(data))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Could not read game snapshot {self.path}: {e}")

    def save(self) -> None:
        """Write the snapshot file, keeping the previous one as .bak."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if self.path.exists():
            backup = self.path.with_suffix(".json.bak")
            backup.write_text(self.path.read_text(encoding="utf-8"), encoding="utf-8")

        self.path.write_text(self.snapshot().model_dump_json(indent=2), encoding="utf-8")
