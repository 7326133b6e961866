"""Tests for the sheet schema registry."""

import pytest

from cosheet.config import HelperConfig
from cosheet.sheets.registry import (
    BAR_TABLES,
    SCHEMAS,
    BarLink,
    BarTable,
    SheetSchema,
    archetype_of,
    bar_table_for,
    schema_for,
)
from cosheet.state import Archetype, Character, Universe


class TestSchemaFor:
    """Test schema lookups."""

    def test_known_pair(self):
        """Returns the schema of a registered pair."""
        schema = schema_for(Universe.COC, Archetype.PLAYER)
        assert schema is not None
        assert schema.atk_section == "armes"
        assert schema.capa_skill == "jetcapatitre"

    def test_accepts_raw_values(self):
        """String values work like enum members."""
        assert schema_for("COG", "vaisseau") is schema_for(Universe.COG, Archetype.STARSHIP)

    def test_unknown_pair_returns_none(self):
        """Unregistered combinations are not an error."""
        assert schema_for(Universe.COC, Archetype.STARSHIP) is None
        assert schema_for(Universe.COG, Archetype.VEHICLE) is None

    def test_unknown_values_return_none(self):
        """Garbage universe or archetype gives None, never raises."""
        assert schema_for("D&D", "pj") is None
        assert schema_for("COC", "dragon") is None

    @pytest.mark.parametrize("key", list(SCHEMAS))
    def test_roles_are_known(self, key):
        """Every registered schema only uses roles from the vocabulary."""
        schema = SCHEMAS[key]
        assert schema.roles() <= set(SheetSchema.model_fields)
        assert "togm" in schema.roles()

    def test_asymmetric_roles(self):
        """Sheets expose different role sets."""
        vehicle = schema_for(Universe.COC, Archetype.VEHICLE)
        starship = schema_for(Universe.COG, Archetype.STARSHIP)
        npc = schema_for(Universe.COG, Archetype.NON_PLAYER)

        assert vehicle.capa_link is None
        assert vehicle.atk_section is None
        assert starship.atk_limited is None
        assert starship.atk_range is None
        assert npc.atk_limited is None
        assert npc.paths is not None

    def test_path_title_naming_per_universe(self):
        """COC and COG name rank titles differently."""
        coc = schema_for(Universe.COC, Archetype.PLAYER).paths
        cog = schema_for(Universe.COG, Archetype.PLAYER).paths
        assert coc.title.format(path=2, rank=3) == "voie2-t3"
        assert cog.title.format(path=2, rank=3) == "v2r3-t"
        assert cog.flag.format(path=2, rank=3) == "v2r3"


class TestBarTables:
    """Test bar table lookups."""

    def test_every_schema_has_bars(self):
        """Each sheet type has a bar table."""
        assert set(BAR_TABLES) == set(SCHEMAS)

    def test_npc_hit_points_on_bar_three(self):
        table = bar_table_for(Universe.COC, Archetype.NON_PLAYER)
        assert table.bar3 == BarLink(attribute="pnj_pv", use_max=True)
        assert table.bar2 is None

    def test_links_skip_empty_bars(self):
        table = BarTable(bar2=BarLink(attribute="X"))
        assert table.links() == [(2, BarLink(attribute="X"))]

    def test_overrides_win(self):
        """Configured overrides replace the built-in table."""
        custom = BarTable(bar1=BarLink(attribute="PM", use_max=True))
        config = HelperConfig(bar_overrides={Universe.COC: {Archetype.PLAYER: custom}})

        assert bar_table_for(Universe.COC, Archetype.PLAYER, config.bar_overrides) == custom
        assert bar_table_for(Universe.COG, Archetype.PLAYER, config.bar_overrides) == BAR_TABLES[
            (Universe.COG, Archetype.PLAYER)
        ]


class TestArchetypeOf:
    """Test sheet type detection."""

    def test_defaults_to_player(self, store):
        character = store.add_character(Character(name="Anon"))
        assert archetype_of(store, character.id) == Archetype.PLAYER

    def test_reads_sheet_type(self, store, grunt):
        assert archetype_of(store, grunt.id) == Archetype.NON_PLAYER

    def test_unknown_sheet_type(self, store):
        character = store.add_character(Character(name="Odd"), type_personnage="monstre")
        assert archetype_of(store, character.id) is None
