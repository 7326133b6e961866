"""
Pytest fixtures for COSheet tests.

Provides in-memory stores, sample characters and a recording broadcaster.
"""

import pytest
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cosheet.config import HelperConfig
from cosheet.interface import RecordingBroadcaster, SheetHelper
from cosheet.state import (
    Character,
    MarkerDefinition,
    MemoryGameStore,
    Token,
    Universe,
)


@pytest.fixture
def store():
    """Empty in-memory game store."""
    return MemoryGameStore()


@pytest.fixture
def coc_config():
    return HelperConfig(universe=Universe.COC)


@pytest.fixture
def cog_config():
    return HelperConfig(universe=Universe.COG)


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def helper(store, broadcaster):
    """Helper running commands against the in-memory store."""
    return SheetHelper(store, broadcaster)


@pytest.fixture
def pilot(store):
    """COG player character with one acquired rank in one path."""
    return store.add_character(
        Character(id="pilot", name="Kara"),
        voie1nom="Pilote",
        v1r1="1",
        **{"v1r1-t": "Manoeuvre"},
    )


@pytest.fixture
def soldier(store):
    """COC player character with weapons and skill rolls."""
    character = store.add_character(
        Character(id="soldier", name="Marc", avatar="https://img/marc.png"),
        type_personnage="pj",
    )
    cid = character.id
    store.add_attribute(cid, "repeating_armes_-Mk1_armenom", "Pistolet")
    store.add_attribute(cid, "repeating_armes_-Mk1_armejetn", "Tir")
    store.add_attribute(cid, "repeating_armes_-Mk1_armeatk", "@{ATKTIR}")
    store.add_attribute(cid, "repeating_armes_-Mk1_armeportee", "20")
    store.add_attribute(cid, "repeating_armes_-Mk2_armenom", "Couteau")
    store.add_attribute(cid, "repeating_armes_-Mk2_armeatk", "@{ATKCAC}")
    store.add_attribute(cid, "repeating_jetcapas_-Jc1_jetcapanom", "Conduite")
    store.add_attribute(cid, "repeating_jetcapas_-Jc1_jetcapatitre", "Pilotage")
    store.add_attribute(cid, "repeating_jetcapas_-Jc2_jetcapanom", "Discrétion")
    store.add_attribute(cid, "PV", "8", "14")
    store.add_attribute(cid, "DEF", "15")
    return character


@pytest.fixture
def grunt(store):
    """Non-player character."""
    return store.add_character(
        Character(id="grunt", name="Sbire"),
        type_personnage="pnj",
    )


@pytest.fixture
def catalogue(store):
    """Campaign custom markers."""
    markers = [
        MarkerDefinition(name="affaibli", tag="affaibli::1234", id=1234),
        MarkerDefinition(name="etourdi", tag="etourdi::5678", id=5678),
    ]
    store.set_marker_catalogue(markers)
    return markers


@pytest.fixture
def token(store):
    """Token not linked to any character."""
    return store.add_token(Token(id="tok1"))
