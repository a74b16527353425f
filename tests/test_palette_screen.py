"""Tests for the reader app and its command palette screen."""

import pytest

from touchgrass.bible.categories import BIBLE_SEARCH, CROSS_REFERENCES
from touchgrass.bible.verse_ref import VerseRef
from touchgrass.config.constants import WELCOME_QUERY
from touchgrass.config.settings import Settings
from touchgrass.ui.app import TouchGrassApp, render_chapter
from touchgrass.ui.palette_screen import CommandPaletteScreen, highlight, truncate


@pytest.fixture
def make_app(bible_data, tmp_path):
    def factory(show_help=False):
        settings = Settings(
            {"show_help": show_help, "bookmarks": bible_data.bookmarks.to_json()}
        )
        return TouchGrassApp(bible_data, settings, settings_path=tmp_path / "settings.json")

    return factory


class TestHelpers:
    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("a  b\nc", 10) == "a b c"
        assert truncate("abcdefghijkl", 8) == "abcde..."

    def test_highlight(self):
        text = highlight("In the beginning", "BEGIN")
        assert text.plain == "In the beginning"
        assert len(text.spans) == 1

        assert highlight("In the beginning", "").spans == []

    def test_render_chapter(self, bible_data):
        text = render_chapter(bible_data, VerseRef("GENESIS", 1, 2))
        assert "2 And the earth was without form" in text.plain
        assert text.plain.startswith("1 In the beginning")

    def test_render_missing_chapter(self, bible_data):
        text = render_chapter(bible_data, VerseRef("JOHN", 9, 1))
        assert "John 9:1 is not available" in text.plain


class TestReaderApp:
    @pytest.mark.asyncio
    async def test_mounts_on_default_verse(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.verse == VerseRef("GENESIS", 1, 1)
            assert app.sub_title == "Genesis 1:1"

    @pytest.mark.asyncio
    async def test_move_verse(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("j")
            await pilot.pause()
            assert app.verse == VerseRef("GENESIS", 1, 2)

            await pilot.press("k", "k")
            await pilot.pause()
            assert app.verse == VerseRef("GENESIS", 1, 1)


class TestPaletteScreen:
    @pytest.mark.asyncio
    async def test_enter_opens_palette(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()

            assert isinstance(app.screen, CommandPaletteScreen)
            assert app.palette.is_open

    @pytest.mark.asyncio
    async def test_first_open_shows_welcome(self, make_app):
        app = make_app(show_help=True)
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()

            assert app.palette.current_state.query == WELCOME_QUERY
            assert app.screen.query_one("#palette-input").value == WELCOME_QUERY

    @pytest.mark.asyncio
    async def test_welcome_query_is_selected(self, make_app):
        app = make_app(show_help=True)
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()

            input_widget = app.screen.query_one("#palette-input")
            assert tuple(input_widget.selection) == (0, len(WELCOME_QUERY))

    @pytest.mark.asyncio
    async def test_set_value_selects_only_when_asked(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            input_widget = app.screen.query_one("#palette-input")

            app.palette.set_value("love", select_text=True)
            await pilot.pause()
            assert input_widget.value == "love"
            assert tuple(input_widget.selection) == (0, 4)

            app.palette.set_value("hope")
            await pilot.pause()
            assert input_widget.value == "hope"
            assert tuple(input_widget.selection) == (4, 4)

    @pytest.mark.asyncio
    async def test_typing_updates_query(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            await pilot.press("l", "i", "g", "h", "t")
            await pilot.pause()

            assert app.palette.current_state.query == "light"

    @pytest.mark.asyncio
    async def test_escape_closes_and_saves(self, make_app, tmp_path):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()

            assert not app.palette.is_open
            assert not isinstance(app.screen, CommandPaletteScreen)
        assert (tmp_path / "settings.json").exists()

    @pytest.mark.asyncio
    async def test_enter_on_verse_moves_reader(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            app.palette.display({"active_category": BIBLE_SEARCH, "query": "light"})
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()

            assert not app.palette.is_open
            assert app.verse == VerseRef("GENESIS", 1, 3)

    @pytest.mark.asyncio
    async def test_tab_drills_into_verse(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            await pilot.press("tab")
            await pilot.pause()

            state = app.palette.current_state
            assert state.active_category == CROSS_REFERENCES
            assert len(app.palette.context_stack) == 2

            await pilot.press("shift+tab")
            await pilot.pause()
            assert len(app.palette.context_stack) == 1

    @pytest.mark.asyncio
    async def test_cross_references_binding(self, make_app):
        app = make_app()
        async with app.run_test() as pilot:
            await pilot.press("ctrl+r")
            await pilot.pause()

            assert app.palette.current_state.active_category == CROSS_REFERENCES
            assert app.palette.sections[0].title == "Cross References for Genesis 1:1"
