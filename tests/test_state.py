"""Tests for the immutable palette states."""

import dataclasses

import pytest

from touchgrass.bible.state import BiblePaletteState
from touchgrass.bible.verse_ref import DEFAULT_VERSE, VerseRef
from touchgrass.config.constants import DEFAULT_BOOKMARK_TAG, DEFAULT_MAX_RESULTS
from touchgrass.exceptions import InvalidStateError, PaletteError
from touchgrass.palette.state import PaletteState


class TestPaletteState:
    def test_defaults(self):
        state = PaletteState()
        assert state.query == ""
        assert state.max_results == DEFAULT_MAX_RESULTS
        assert state.active_category is None
        assert state.expanded is False
        assert dict(state.extras) == {}

    def test_update_returns_new_state(self):
        state = PaletteState(query="love")
        updated = state.update({"query": "hope"}, expanded=True)

        assert updated is not state
        assert updated.query == "hope"
        assert updated.expanded is True
        assert state.query == "love"
        assert state.expanded is False

    def test_update_inherits_absent_fields(self):
        state = PaletteState(query="love", active_category="topics")
        assert state.update(max_results=5).active_category == "topics"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PaletteState().query = "x"  # type: ignore[misc]

    def test_unknown_keys_go_to_extras(self):
        state = PaletteState().update(fruit="fig")
        assert state.get("fruit") == "fig"
        assert state.extras["fruit"] == "fig"
        assert state.get("missing", "default") == "default"

    def test_extras_are_read_only(self):
        state = PaletteState().update(fruit="fig")
        with pytest.raises(TypeError):
            state.extras["fruit"] = "plum"  # type: ignore[index]

    def test_reserved_keys_rejected(self):
        with pytest.raises(InvalidStateError):
            PaletteState().update(events=None)

    def test_negative_max_results_rejected(self):
        with pytest.raises(InvalidStateError):
            PaletteState(max_results=-1)
        with pytest.raises(ValueError):
            PaletteState().update(max_results=-5)

    def test_invalid_state_is_palette_error(self):
        assert issubclass(InvalidStateError, PaletteError)

    def test_update_emits_changes(self):
        state = PaletteState()
        seen = []
        state.events.on("update", seen.append)

        state.update(query="peace", fruit="fig")

        assert seen == [{"query": "peace", "fruit": "fig"}]

    def test_events_shared_by_derived_states(self):
        state = PaletteState()
        assert state.update(query="a").update(query="b").events is state.events

    def test_reset_keeps_extension_values(self):
        state = PaletteState(query="q", max_results=3, active_category="x", expanded=True)
        reset = state.update(fruit="fig").reset()

        assert reset.query == ""
        assert reset.max_results == DEFAULT_MAX_RESULTS
        assert reset.active_category is None
        assert reset.expanded is False
        assert reset.get("fruit") == "fig"

    def test_as_patch_reopens_same_values(self):
        state = PaletteState(query="q", active_category="x").update(fruit="fig")
        copy = PaletteState().update(state.as_patch())

        assert copy.query == "q"
        assert copy.active_category == "x"
        assert copy.get("fruit") == "fig"


class TestBiblePaletteState:
    def test_defaults(self):
        state = BiblePaletteState()
        assert state.verse == DEFAULT_VERSE
        assert state.specificity == 0
        assert state.topic == ""
        assert state.tag == DEFAULT_BOOKMARK_TAG

    def test_update_keeps_subclass(self):
        verse = VerseRef("JOHN", 1, 1)
        state = BiblePaletteState().update(verse=verse, query="word")
        assert isinstance(state, BiblePaletteState)
        assert state.verse == verse
        assert state.get("verse") == verse

    def test_normalises_missing_values(self):
        state = BiblePaletteState().update(verse=None, tag="", topic=None)
        assert state.verse == DEFAULT_VERSE
        assert state.tag == DEFAULT_BOOKMARK_TAG
        assert state.topic == ""

    def test_specificity_range(self):
        with pytest.raises(InvalidStateError):
            BiblePaletteState(specificity=3)

    def test_reset_keeps_verse(self):
        verse = VerseRef("GENESIS", 2, 1)
        state = BiblePaletteState(verse=verse, query="x", active_category="topics").reset()
        assert state.verse == verse
        assert state.active_category is None
