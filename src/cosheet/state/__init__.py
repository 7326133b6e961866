"""Host game data seen by COSheet."""

from .schema import (
    Universe,
    Archetype,
    ARCHETYPE_ATTRIBUTE,
    Character,
    Attribute,
    Token,
    MarkerDefinition,
    GameSnapshot,
)
from .store import GameStore, MemoryGameStore, JsonGameStore

__all__ = [
    # Schema
    "Universe",
    "Archetype",
    "ARCHETYPE_ATTRIBUTE",
    "Character",
    "Attribute",
    "Token",
    "MarkerDefinition",
    "GameSnapshot",
    # Store
    "GameStore",
    "MemoryGameStore",
    "JsonGameStore",
]
