"""
Touch Grass Bible reader.

Shows the chapter of the focused verse. The command palette is the only way
to move around: whatever verse the palette closes on becomes the focused
verse, is filed under today's history tag and the settings are saved.
"""

import logging
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from touchgrass.bible.categories import CROSS_REFERENCES
from touchgrass.bible.data import BibleData
from touchgrass.bible.palette import build_palette
from touchgrass.bible.verse_ref import DEFAULT_VERSE, VerseRef
from touchgrass.config.constants import APP_NAME, WELCOME_QUERY
from touchgrass.config.settings import SETTINGS_CHANGE, Settings, save_settings
from touchgrass.exceptions import ConfigurationError
from touchgrass.history import AppHistory
from touchgrass.palette.controller import HISTORY_ENTRY_NAME
from touchgrass.palette.state import PaletteState

from .palette_screen import CommandPaletteScreen

logger = logging.getLogger(__name__)


def render_chapter(data: BibleData, verse: VerseRef) -> Text:
    """Chapter text with verse numbers, the focused verse emphasised."""
    text = Text()
    for number, verse_text in enumerate(data.chapter(verse.book, verse.chapter), start=1):
        if not verse_text:
            continue
        style = "bold reverse" if number == verse.verse else ""
        text.append(f"{number} ", style="dim")
        text.append(verse_text.replace("#", "").strip(), style=style)
        text.append("\n")
    if not text:
        text.append(f"{verse.title()} is not available in this translation", style="dim italic")
    return text


class TouchGrassApp(App):
    """Chapter reader driven by the command palette."""

    TITLE = APP_NAME

    CSS = """
    #chapter-scroll {
        padding: 1 2;
    }

    #chapter {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("enter", "open_palette", "Palette"),
        Binding("ctrl+k", "open_palette", "Palette", show=False),
        Binding("ctrl+r", "cross_references", "Cross Refs"),
        Binding("o", "reopen_palette", "Reopen"),
        Binding("j", "move_verse(1)", "Next Verse", show=False),
        Binding("k", "move_verse(-1)", "Previous Verse", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        data: BibleData,
        settings: Settings,
        settings_path: Path | None = None,
        export_dir: Path | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.data = data
        self.settings = settings
        self.settings_path = settings_path
        self.history = AppHistory()
        self.palette = build_palette(data, settings, history=self.history, export_dir=export_dir)
        self.verse: VerseRef = self.palette.state.get("verse", DEFAULT_VERSE)
        self._first_open = True
        self._palette_screen: CommandPaletteScreen | None = None

        self.palette.events.on("open", self._on_palette_open)
        self.palette.events.on("close", self._on_palette_close)
        self.settings.events.on(SETTINGS_CHANGE, self._on_settings_change)

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="chapter-scroll"):
            yield Static(id="chapter")
        yield Footer()

    def on_mount(self) -> None:
        self.show_verse(self.verse)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def show_verse(self, verse: VerseRef) -> None:
        self.verse = verse
        self.sub_title = verse.title()
        self.query_one("#chapter", Static).update(render_chapter(self.data, verse))

    def action_move_verse(self, delta: int) -> None:
        target = VerseRef(self.verse.book, self.verse.chapter, self.verse.verse + delta)
        if self.data.has_verse(target):
            self.show_verse(target)

    # ------------------------------------------------------------------
    # Palette
    # ------------------------------------------------------------------

    def open_palette(self, patch: dict | None = None) -> None:
        self.palette.open({"verse": self.verse, **(patch or {})})
        if self._first_open and self.settings.get("show_help", True):
            self.palette.set_value(WELCOME_QUERY, select_text=True)
        self._first_open = False

    def action_open_palette(self) -> None:
        self.open_palette({"topic": "", "specificity": 0})

    def action_cross_references(self) -> None:
        self.open_palette({"active_category": CROSS_REFERENCES, "specificity": 0})

    def action_reopen_palette(self) -> None:
        """Reopen the palette on the last context it displayed."""
        entry = self.history.latest(HISTORY_ENTRY_NAME)
        if entry is None:
            self.action_open_palette()
            return
        self.palette.open(entry.data.as_patch())

    def _on_palette_open(self, state: PaletteState) -> None:
        if self._palette_screen is None:
            self._palette_screen = CommandPaletteScreen(self.palette)
            self.push_screen(self._palette_screen, callback=self._on_palette_dismissed)

    def _on_palette_dismissed(self, result: None) -> None:
        self._palette_screen = None
        # Reopened (e.g. by a prompt) while the old screen was going away
        if self.palette.is_open:
            self._on_palette_open(self.palette.current_state)

    def _on_palette_close(self, state: PaletteState) -> None:
        verse = state.get("verse")
        if verse is not None and not verse.is_same(self.verse) and self.data.has_verse(verse):
            self.show_verse(verse)
        tag = self.data.bookmarks.add_to_history(self.verse)
        logger.debug(f"Recorded {self.verse} under {tag}")
        self.settings.set("bookmarks", self.data.bookmarks.to_json())

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _on_settings_change(self, changed: dict) -> None:
        try:
            save_settings(self.settings, self.settings_path)
        except ConfigurationError as e:
            logger.error(f"Failed to save settings: {e}")
            self.notify(str(e), severity="error")
