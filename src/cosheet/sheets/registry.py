"""
Schema registry for the COC and COG character sheets.

Each (universe, archetype) pair maps to a SheetSchema naming the physical
attributes and repeating sections that play each semantic role. A role
left as None means the feature does not apply to that sheet. Adding a new
sheet type means adding one entry to SCHEMAS (and BAR_TABLES); renderers
never test the archetype themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ..state.schema import ARCHETYPE_ATTRIBUTE, Archetype, Universe

if TYPE_CHECKING:
    from ..state.store import GameStore

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Role types
# -----------------------------------------------------------------------------

class PathFields(BaseModel):
    """
    Attribute name templates for paths ("voies") and their ranks.

    Templates are formatted with `path` (1-9) and `rank` (1-5).
    """
    model_config = ConfigDict(frozen=True)

    name: str = "voie{path}nom"
    flag: str = "v{path}r{rank}"  # "1" when the rank is acquired
    title: str = "voie{path}-t{rank}"
    description: str = "voie{path}-{rank}"


class StatSpec(BaseModel):
    """One value shown on the GM stat block."""
    model_config = ConfigDict(frozen=True)

    attribute: str
    label: str = ""
    modifier: str = ""  # Key in the CARACS modifiers map (COC sheets)

    @property
    def display(self) -> str:
        return self.label or self.attribute


class StatBlock(BaseModel):
    """Layout of the GM stat block for one sheet type."""
    model_config = ConfigDict(frozen=True)

    characteristics: tuple[StatSpec, ...] = ()
    combat: tuple[StatSpec, ...] = ()
    health: str | None = None  # Gauge attribute, current / max
    threshold: StatSpec | None = None
    modifiers: bool = False  # Append CARACS modifier and _BUFF to characteristics


class SheetSchema(BaseModel):
    """
    Physical names for every semantic role of one sheet type.

    Attack roles (atk_*) name fields of the attack repeating section,
    ability roles (capa_*) fields of the skill roll section, trait roles
    (trait_*) fields of the traits section.
    """
    model_config = ConfigDict(frozen=True)

    togm: str | None = None  # Attribute holding the "to GM" whisper prefix

    atk_section: str | None = None
    atk_name: str | None = None
    atk_roll: str | None = None
    atk_label: str | None = None  # Roll label shown after the weapon
    atk_type: str | None = None
    atk_limited: str | None = None  # Limited use qualifier
    atk_range: str | None = None

    capa_section: str | None = None
    capa_name: str | None = None
    capa_skill: str | None = None
    capa_roll: str | None = None
    capa_link: str | None = None  # Rank id (vXrY) the roll belongs to

    trait_section: str | None = None
    trait_name: str | None = None
    trait_roll: str | None = None

    paths: PathFields | None = None
    characteristic_rolls: tuple[str, ...] = ()
    stats: StatBlock | None = None

    def roles(self) -> set[str]:
        """Names of the roles this sheet defines."""
        return {
            name for name, value in self
            if value is not None and value != ()
        }

    def has(self, *roles: str) -> bool:
        """True when every listed role is defined."""
        return all(getattr(self, role) is not None for role in roles)


class BarLink(BaseModel):
    """Attribute feeding one token bar."""
    model_config = ConfigDict(frozen=True)

    attribute: str
    use_max: bool = False  # Gauge with a max facet


class BarTable(BaseModel):
    """Attributes feeding bars 1 to 3. A None bar is left alone."""
    model_config = ConfigDict(frozen=True)

    bar1: BarLink | None = None
    bar2: BarLink | None = None
    bar3: BarLink | None = None

    def links(self) -> list[tuple[int, BarLink]]:
        """(bar number, link) for every defined bar."""
        bars = [(1, self.bar1), (2, self.bar2), (3, self.bar3)]
        return [(number, link) for number, link in bars if link is not None]


# -----------------------------------------------------------------------------
# Registry tables
# -----------------------------------------------------------------------------

PC_ROLLS = ("jet_for", "jet_dex", "jet_con", "jet_int", "jet_per", "jet_cha")
NPC_ROLLS = ("pnj_jet_for", "pnj_jet_dex", "pnj_jet_con", "pnj_jet_int", "pnj_jet_per", "pnj_jet_cha")


def _stats(*specs: str) -> tuple[StatSpec, ...]:
    """Build stat specs from `attribute::label` shorthands."""
    result = []
    for spec in specs:
        attribute, _, label = spec.partition("::")
        result.append(StatSpec(attribute=attribute, label=label, modifier=label or attribute))
    return tuple(result)


_PC_ATTACKS = dict(
    atk_section="armes",
    atk_name="armenom",
    atk_roll="pjatk",
    atk_label="armejetn",
    atk_type="armeatk",
    atk_limited="armelim",
    atk_range="armeportee",
)

_NPC_ATTACKS = dict(
    atk_section="pnjatk",
    atk_name="atknom",
    atk_roll="pnjatk",
)

_PC_TRAITS = dict(
    trait_section="traits",
    trait_name="traitnom",
    trait_roll="pjtrait",
)

_NPC_SKILLS = dict(
    capa_section="pnjcapas",
    capa_name="capanom",
    capa_roll="pnjcapa",
)

_NPC_STATS = _stats(
    "pnj_for::FOR", "pnj_dex::DEX", "pnj_con::CON",
    "pnj_int::INT", "pnj_per::PER", "pnj_cha::CHA",
)


SCHEMAS: dict[tuple[Universe, Archetype], SheetSchema] = {
    (Universe.COC, Archetype.PLAYER): SheetSchema(
        togm="togm",
        **_PC_ATTACKS,
        capa_section="jetcapas",
        capa_name="jetcapanom",
        capa_skill="jetcapatitre",
        capa_roll="pjcapa",
        capa_link="jetcapavr",
        **_PC_TRAITS,
        paths=PathFields(),
        characteristic_rolls=PC_ROLLS,
        stats=StatBlock(
            characteristics=_stats(
                "FORCE::FOR", "DEXTERITE::DEX", "CONSTITUTION::CON",
                "INTELLIGENCE::INT", "PERCEPTION::PER", "CHARISME::CHA",
            ),
            combat=_stats("INIT", "DEF", "RDS::RD"),
            health="PV",
            threshold=StatSpec(attribute="SEUILBG", label="BG"),
            modifiers=True,
        ),
    ),
    (Universe.COC, Archetype.NON_PLAYER): SheetSchema(
        togm="pnj_togm",
        **_NPC_ATTACKS,
        **_NPC_SKILLS,
        paths=PathFields(),
        characteristic_rolls=NPC_ROLLS,
        stats=StatBlock(
            characteristics=_NPC_STATS,
            combat=_stats("pnj_init::Init", "pnj_def::DEF", "pnj_rd::RD"),
            health="pnj_pv",
            threshold=StatSpec(attribute="pnj_sbg", label="BG"),
            modifiers=True,
        ),
    ),
    (Universe.COC, Archetype.VEHICLE): SheetSchema(
        togm="togm",
        capa_section="jetv",
        capa_name="jetvnom",
        capa_roll="vehicule",
        stats=StatBlock(
            combat=_stats("FOV::FOR", "AGI", "DEFV::DEF", "RDV::RD"),
            health="PVV",
        ),
    ),
    (Universe.COG, Archetype.PLAYER): SheetSchema(
        togm="togm",
        **_PC_ATTACKS,
        capa_section="jetcapas",
        capa_name="jetcapanom",
        capa_roll="pjcapa",
        capa_link="jetcapavr",
        **_PC_TRAITS,
        paths=PathFields(title="v{path}r{rank}-t"),
        characteristic_rolls=PC_ROLLS,
        stats=StatBlock(
            characteristics=_stats(
                "FOR_TEST::FOR", "DEX_TEST::DEX", "CON_TEST::CON",
                "INT_TEST::INT", "PER_TEST::PER", "CHA_TEST::CHA",
            ),
            combat=_stats("INIT", "DEF", "RDS::RD", "DEP"),
            health="PV",
            threshold=StatSpec(attribute="SEUILBG", label="BG"),
        ),
    ),
    (Universe.COG, Archetype.NON_PLAYER): SheetSchema(
        togm="pnj_togm",
        **_NPC_ATTACKS,
        **_NPC_SKILLS,
        paths=PathFields(title="v{path}r{rank}-t"),
        characteristic_rolls=NPC_ROLLS,
        stats=StatBlock(
            characteristics=_NPC_STATS,
            combat=_stats("pnj_init::Init", "pnj_def::DEF", "pnj_rd::RD", "pnj_dep::DEP"),
            health="pnj_pv",
            threshold=StatSpec(attribute="pnj_sbg", label="BG"),
        ),
    ),
    (Universe.COG, Archetype.STARSHIP): SheetSchema(
        togm="togm",
        atk_section="armesv",
        atk_name="armenom",
        atk_roll="vatk",
        atk_label="armejetn",
        stats=StatBlock(
            characteristics=_stats(
                "FOR_TEST::PUI", "DEX_TEST::MAN", "CON_TEST::COQ",
                "INT_TEST::ORD", "PER_TEST::SEN", "CHA_TEST::COM",
            ),
            combat=_stats("INITV::Init", "DEFRAP::DEFrap", "DEFSOL::DEFsol"),
            health="PV",
            threshold=StatSpec(attribute="seuil_avarie", label="Av."),
        ),
    ),
    (Universe.COG, Archetype.MECHA): SheetSchema(
        togm="togm",
        stats=StatBlock(
            characteristics=_stats(
                "mec_for::FOR", "mec_dex::DEX", "mec_con::CON",
                "mec_int::INT", "mec_per::PER", "mec_cha::CHA",
            ),
            combat=_stats("mec_init::Init", "mec_defrap::DEFrap", "mec_defsol::DEFsol"),
            health="mec_pv",
        ),
    ),
}


_PC_BARS = BarTable(
    bar1=BarLink(attribute="DEF"),
    bar2=BarLink(attribute="PR", use_max=True),
    bar3=BarLink(attribute="PV", use_max=True),
)

_NPC_BARS = BarTable(
    bar1=BarLink(attribute="pnj_def"),
    bar3=BarLink(attribute="pnj_pv", use_max=True),
)

BAR_TABLES: dict[tuple[Universe, Archetype], BarTable] = {
    (Universe.COC, Archetype.PLAYER): _PC_BARS,
    (Universe.COC, Archetype.NON_PLAYER): _NPC_BARS,
    (Universe.COC, Archetype.VEHICLE): BarTable(
        bar1=BarLink(attribute="DEFV"),
        bar3=BarLink(attribute="PVV", use_max=True),
    ),
    (Universe.COG, Archetype.PLAYER): _PC_BARS,
    (Universe.COG, Archetype.NON_PLAYER): _NPC_BARS,
    (Universe.COG, Archetype.STARSHIP): BarTable(
        bar1=BarLink(attribute="DEFRAP"),
        bar2=BarLink(attribute="seuil_avarie"),
        bar3=BarLink(attribute="PV", use_max=True),
    ),
    (Universe.COG, Archetype.MECHA): BarTable(
        bar1=BarLink(attribute="mec_defrap"),
        bar3=BarLink(attribute="mec_pv", use_max=True),
    ),
}


# -----------------------------------------------------------------------------
# Lookups
# -----------------------------------------------------------------------------

def _key(universe: Universe | str, archetype: Archetype | str) -> tuple[Universe, Archetype] | None:
    try:
        return Universe(universe), Archetype(archetype)
    except ValueError:
        return None


def schema_for(universe: Universe | str, archetype: Archetype | str) -> SheetSchema | None:
    """
    Get the schema of a sheet type.

    Returns None for unknown combinations: callers treat every role as
    absent.
    """
    key = _key(universe, archetype)
    if key is None or key not in SCHEMAS:
        logger.debug(f"No sheet schema for {universe}/{archetype}")
        return None
    return SCHEMAS[key]


def bar_table_for(
    universe: Universe | str,
    archetype: Archetype | str,
    overrides: dict[Universe, dict[Archetype, BarTable]] | None = None,
) -> BarTable | None:
    """Get the bar table of a sheet type, configured overrides first."""
    key = _key(universe, archetype)
    if key is None:
        return None
    if overrides:
        table = overrides.get(key[0], {}).get(key[1])
        if table is not None:
            return table
    return BAR_TABLES.get(key)


def archetype_of(store: "GameStore", character_id: str) -> Archetype | None:
    """Sheet type of a character. Unset means player character."""
    value = store.get_attribute_value(character_id, ARCHETYPE_ATTRIBUTE) or Archetype.PLAYER.value
    try:
        return Archetype(value)
    except ValueError:
        logger.debug(f"Unknown sheet type '{value}' for character {character_id}")
        return None
