"""Tests for the token marker rules."""

import pytest
from pydantic import ValidationError

from cosheet.rules.markers import (
    MarkerAction,
    MarkerOp,
    apply_marker_ops,
    resolve_tag,
    sync_markers,
)
from cosheet.state import Character, MarkerDefinition, Token


def add(name, badge=0):
    return MarkerOp(op=MarkerAction.ADD, name=name, badge=badge)


def remove(name):
    return MarkerOp(op=MarkerAction.REMOVE, name=name)


CATALOGUE = [MarkerDefinition(name="etourdi", tag="etourdi::5678", id=5678)]


class TestResolveTag:
    """Test marker name resolution."""

    def test_catalogue_first(self):
        assert resolve_tag("etourdi", CATALOGUE) == "etourdi::5678"

    def test_standard_names(self):
        assert resolve_tag("dead", []) == "dead"
        assert resolve_tag("purple", CATALOGUE) == "purple"

    def test_unknown(self):
        assert resolve_tag("flying", CATALOGUE) is None


class TestApplyMarkerOps:
    """Test the marker string state machine."""

    def test_add_to_empty(self):
        update = apply_marker_ops("", [add("dead")], [])
        assert update.markers == "dead"

    def test_add_is_deduplicated(self):
        update = apply_marker_ops("", [add("dead"), add("dead")], [])
        assert update.markers == "dead"

    def test_badge_variants_coexist(self):
        update = apply_marker_ops("", [add("dead"), add("dead", badge=3)], [])
        assert update.markers == "dead,dead@3"

    def test_existing_markers_kept(self):
        update = apply_marker_ops("red,blue", [add("etourdi", badge=2)], CATALOGUE)
        assert update.markers == "red,blue,etourdi::5678@2"

    def test_remove_drops_badge_variants(self):
        update = apply_marker_ops("dead@2,red,dead@5", [remove("dead")], [])
        assert update.markers == "red"

    def test_remove_last_marker(self):
        update = apply_marker_ops("dead@2,dead@5", [remove("dead")], [])
        assert update.markers == ""

    def test_remove_absent_marker(self):
        update = apply_marker_ops("red", [remove("blue")], [])
        assert update.markers == "red"
        assert update.legacy == {"status_blue": False}

    def test_wildcard_clears_everything(self):
        update = apply_marker_ops("red,dead@2,etourdi::5678", [remove("*")], CATALOGUE)

        assert update.markers == ""
        assert update.legacy == {"status_red": False, "status_dead": False}

    def test_wildcard_then_add(self):
        update = apply_marker_ops("red,blue", [remove("*"), add("green")], [])
        assert update.markers == "green"

    def test_operations_apply_in_order(self):
        update = apply_marker_ops("", [add("red"), remove("red"), add("blue")], [])

        assert update.markers == "blue"
        assert update.legacy == {"status_red": False, "status_blue": True}

    def test_legacy_badge_value(self):
        update = apply_marker_ops("", [add("yellow", badge=4)], [])
        assert update.legacy == {"status_yellow": 4}

    def test_custom_markers_have_no_legacy(self):
        update = apply_marker_ops("", [add("etourdi")], CATALOGUE)

        assert update.markers == "etourdi::5678"
        assert update.legacy == {}

    def test_catalogue_marker_with_standard_name(self):
        """A campaign marker shadowing a standard name has no legacy property."""
        catalogue = [MarkerDefinition(name="dead", tag="dead::42", id=42)]

        update = apply_marker_ops("", [add("dead")], catalogue)

        assert update.markers == "dead::42"
        assert update.legacy == {}

    def test_unknown_marker_is_skipped(self):
        """The rest of the batch still applies."""
        update = apply_marker_ops("red", [add("flying"), add("blue")], [])

        assert update.markers == "red,blue"
        assert update.ignored == ["flying"]

    def test_attribute_effect_recorded(self):
        update = apply_marker_ops("", [add("affaibli"), remove("affaibli")], [])
        assert update.attribute_writes == [("ETATDE", "12"), ("ETATDE", "20")]

    def test_no_ops(self):
        update = apply_marker_ops("red,blue", [], [])
        assert update.markers == "red,blue"


class TestMarkerOp:
    """Test operation validation."""

    def test_badge_range(self):
        with pytest.raises(ValidationError):
            MarkerOp(op=MarkerAction.ADD, name="dead", badge=10)

    def test_action_from_symbol(self):
        assert MarkerOp(op="-", name="dead").op == MarkerAction.REMOVE


class TestSyncMarkers:
    """Test marker updates written to a store."""

    def test_writes_markers_and_legacy(self, store, token):
        update = sync_markers(store, token.id, [add("dead"), add("red", badge=2)])

        assert token.statusmarkers == "dead,red@2"
        assert token.status_dead is True
        assert token.status_red == 2
        assert update.markers == token.statusmarkers

    def test_uses_store_catalogue(self, store, token, catalogue):
        sync_markers(store, token.id, [add("etourdi")])
        assert token.statusmarkers == "etourdi::5678"

    def test_weakened_sets_dice(self, store, catalogue):
        character = store.add_character(Character(name="Marc"), ETATDE="20")
        token = store.add_token(Token(represents=character.id))

        sync_markers(store, token.id, [add("affaibli")])
        assert store.get_attribute_value(character.id, "ETATDE") == "12"
        assert token.statusmarkers == "affaibli::1234"

        sync_markers(store, token.id, [remove("affaibli")])
        assert store.get_attribute_value(character.id, "ETATDE") == "20"
        assert token.statusmarkers == ""

    def test_missing_attribute_not_created(self, store, catalogue):
        character = store.add_character(Character(name="Marc"))
        token = store.add_token(Token(represents=character.id))

        sync_markers(store, token.id, [add("affaibli")])

        assert store.find_attribute(character.id, "ETATDE") is None

    def test_unlinked_token_skips_attributes(self, store, token, catalogue):
        update = sync_markers(store, token.id, [add("affaibli")])

        assert update.attribute_writes == [("ETATDE", "12")]
        assert store.attributes == []

    def test_unknown_token(self, store):
        assert sync_markers(store, "nope", [add("dead")]) is None
