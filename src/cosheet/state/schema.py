"""
Pydantic models for the host game data COSheet works against.

Characters, attributes and tokens mirror the objects a virtual tabletop
exposes. The helper never owns them: they are read and written through a
GameStore (see store.py).
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from uuid import uuid4


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class Universe(str, Enum):
    COC = "COC"  # Chroniques Oubliées Contemporain
    COG = "COG"  # Chroniques Oubliées Galactiques


class Archetype(str, Enum):
    """Sheet type, as stored in the `type_personnage` attribute."""
    PLAYER = "pj"
    NON_PLAYER = "pnj"
    VEHICLE = "vehicule"
    STARSHIP = "vaisseau"
    MECHA = "mecha"


# Attribute holding the sheet type of a character
ARCHETYPE_ATTRIBUTE = "type_personnage"


def generate_id() -> str:
    return str(uuid4())[:8]


# -----------------------------------------------------------------------------
# Core Models
# -----------------------------------------------------------------------------

class Character(BaseModel):
    """A journal entry: player character, NPC, vehicle, starship or mecha."""
    id: str = Field(default_factory=generate_id)
    name: str
    avatar: str = ""  # Image URL copied onto linked tokens


class Attribute(BaseModel):
    """
    A named value on a character sheet.

    Names starting with `repeating_<section>_<rowId>_` belong to a
    repeating row. `max` is only meaningful for gauges (hit points...).
    """
    id: str = Field(default_factory=generate_id)
    character_id: str
    name: str
    current: str = ""
    max: str = ""


class Token(BaseModel):
    """
    A graphic on the tabletop, optionally representing a character.

    Legacy status properties (`status_dead`, `status_red`...) are not
    declared: they are stored as extra fields when first set.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=generate_id)
    name: str = ""
    represents: str = ""  # Character id, empty when unlinked
    imgsrc: str = ""
    statusmarkers: str = ""  # Comma-separated marker tags, tag[@badge]

    bar1_value: str = ""
    bar1_max: str = ""
    bar1_link: str = ""  # Attribute id when live-linked
    bar2_value: str = ""
    bar2_max: str = ""
    bar2_link: str = ""
    bar3_value: str = ""
    bar3_max: str = ""
    bar3_link: str = ""


class MarkerDefinition(BaseModel):
    """A campaign custom token marker."""
    name: str
    tag: str
    id: int | None = None
    url: str = ""


class GameSnapshot(BaseModel):
    """Everything a store holds, in a serializable form."""
    characters: list[Character] = Field(default_factory=list)
    attributes: list[Attribute] = Field(default_factory=list)
    tokens: list[Token] = Field(default_factory=list)
    token_markers: list[MarkerDefinition] = Field(default_factory=list)
