"""Tests for the command surface and chat output."""

import io
import logging

import pytest
from pydantic import ValidationError
from rich.console import Console

from cosheet.config import ConfigUpdate, HelperConfig
from cosheet.interface import (
    ApplyMarkerOps,
    ConsoleBroadcaster,
    LinkBars,
    RenderMenu,
    RollStats,
    SheetHelper,
    ShowGMSheet,
    UpdateConfig,
    parse_command,
)
from cosheet.menus import ALL, GM, MenuArgs, MenuKind
from cosheet.rules.markers import MarkerAction
from cosheet.state import Token, Universe


class TestParseCommand:
    """Test building commands from dicts."""

    def test_menu(self):
        command = parse_command({
            "kind": "menu",
            "menu": "voie",
            "character_id": "pilot",
            "args": {"path": 2, "descriptions": True},
        })

        assert isinstance(command, RenderMenu)
        assert command.menu == MenuKind.PATH
        assert command.args.path == 2

    def test_markers(self):
        command = parse_command({
            "kind": "markers",
            "token_id": "tok1",
            "ops": [{"op": "+", "name": "dead", "badge": 3}, {"op": "-", "name": "*"}],
        })

        assert isinstance(command, ApplyMarkerOps)
        assert [op.op for op in command.ops] == [MarkerAction.ADD, MarkerAction.REMOVE]

    def test_config(self):
        command = parse_command({"kind": "config", "update": {"universe": "COG"}})
        assert command.update.universe == Universe.COG

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            parse_command({"kind": "handout"})

    def test_path_out_of_range(self):
        with pytest.raises(ValidationError):
            parse_command({"kind": "menu", "menu": "voie", "character_id": "x", "args": {"path": 10}})


class TestSheetHelper:
    """Test command execution."""

    def test_menu_is_broadcast(self, helper, broadcaster, soldier):
        result = helper.execute(RenderMenu(menu=MenuKind.ATTACKS, character_id=soldier.id))

        assert len(result.messages) == 1
        assert broadcaster.last.text == result.messages[0].text
        assert broadcaster.last.recipient == ALL
        assert "Pistolet" in broadcaster.last.text

    def test_empty_menu_not_broadcast(self, helper, broadcaster, grunt):
        result = helper.execute(RenderMenu(menu=MenuKind.ABILITIES, character_id=grunt.id))

        assert result.messages == []
        assert broadcaster.messages == []

    def test_single_attack(self, helper, broadcaster, soldier):
        helper.execute(RenderMenu(menu=MenuKind.ATTACK, character_id=soldier.id, args=MenuArgs(row_id="1")))
        assert broadcaster.last.text == "%{Marc|repeating_armes_$1_pjatk}"

    def test_markers_not_broadcast(self, helper, broadcaster, store, token):
        result = helper.execute(ApplyMarkerOps(token_id=token.id, ops=[{"op": "+", "name": "dead"}]))

        assert result.markers.markers == "dead"
        assert store.get_token(token.id).statusmarkers == "dead"
        assert broadcaster.messages == []

    def test_link_bars(self, helper, store, soldier):
        token = store.add_token(Token(represents=soldier.id))

        result = helper.execute(LinkBars(token_id=token.id, mook=True))

        assert result.bars.mook is True
        assert token.bar3_value == "8"

    def test_gm_sheet_whispered(self, helper, broadcaster, soldier):
        helper.execute(ShowGMSheet(character_id=soldier.id))

        assert broadcaster.last.recipient == GM
        assert broadcaster.last.text.startswith("/w gm ")

    def test_roll_stats(self, helper, broadcaster):
        helper.execute(RollStats(values=[7, 7, 7]))
        assert "[[13]] [[12]] [[13]] [[12]] [[13]] [[12]]" in broadcaster.last.text

    def test_config_update(self, helper, broadcaster, pilot):
        """Universe switch applies to later commands."""
        assert helper.execute(RenderMenu(menu=MenuKind.PATH, character_id=pilot.id,
                                         args=MenuArgs(path=1))).messages == []

        result = helper.execute(UpdateConfig(update=ConfigUpdate(universe=Universe.COG)))

        assert result.config.universe == Universe.COG
        assert helper.config.universe == Universe.COG
        assert broadcaster.last.recipient == GM
        assert broadcaster.last.text.startswith("/w gm &{template:default}")

        helper.execute(RenderMenu(menu=MenuKind.PATH, character_id=pilot.id, args=MenuArgs(path=1)))
        assert "[1. Manoeuvre](~pilot|v1r1)" in broadcaster.last.text

    def test_whisper_toggle(self, helper, broadcaster, soldier):
        helper.execute(UpdateConfig(update=ConfigUpdate(toggle_whisper=True)))
        helper.execute(RenderMenu(menu=MenuKind.CHARACTERISTICS, character_id=soldier.id))

        assert broadcaster.last.recipient == GM

    def test_logging_level(self, store, broadcaster, soldier, caplog):
        helper = SheetHelper(store, broadcaster, HelperConfig(logging=True))

        with caplog.at_level(logging.INFO, logger="cosheet.interface.commands"):
            helper.execute(RenderMenu(menu=MenuKind.CHARACTERISTICS, character_id=soldier.id))

        assert any("Mod:COSH |" in record.message for record in caplog.records)


class TestConsoleBroadcaster:

    def test_prints_panel(self):
        output = io.StringIO()
        console = Console(file=output, width=100, force_terminal=False)

        ConsoleBroadcaster(console).broadcast("[FOR](~c1|jet_for)", GM)

        printed = output.getvalue()
        assert "to gm" in printed
        assert "[FOR](~c1|jet_for)" in printed
