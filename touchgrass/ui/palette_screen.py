"""
Command Palette Screen - modal overlay driven by a NavigationController.

The screen owns no navigation logic: keys become ``PaletteKey`` values for
``controller.handle_key``, typing becomes ``controller.update_query``, and
the list is rebuilt from ``controller.sections`` on every ``display`` event.
"""

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, ListItem, ListView, Static

from touchgrass.config.constants import DESCRIPTION_TRUNCATE_LENGTH, TITLE_TRUNCATE_LENGTH
from touchgrass.palette.controller import NavigationController, PaletteItem
from touchgrass.palette.keys import DEFAULT_KEYMAP, PaletteKey
from touchgrass.palette.state import PaletteState

logger = logging.getLogger(__name__)

HINTS = "↑↓ Navigate │ Enter Select │ Tab Open │ Shift+Tab Back │ Ctrl+E Details │ Esc Close"


def truncate(text: str, length: int) -> str:
    text = " ".join(text.split())
    if len(text) > length:
        return text[: length - 3] + "..."
    return text


def highlight(text: str, query: str) -> Text:
    """Rich text with every occurrence of the query emphasised."""
    rendered = Text(text)
    if query:
        rendered.highlight_words([query], style="bold underline", case_sensitive=False)
    return rendered


class SectionHeader(ListItem):
    """Category title above its rows. Not selectable."""

    DEFAULT_CSS = """
    SectionHeader {
        height: 1;
        padding: 0 1;
        color: $text-muted;
        text-style: bold;
    }
    """

    def __init__(self, title: str, **kwargs):
        super().__init__(Static(Text(title)), disabled=True, **kwargs)


class PaletteResultWidget(ListItem):
    """Widget for a single palette row."""

    DEFAULT_CSS = """
    PaletteResultWidget {
        height: auto;
        padding: 0 1;
    }
    """

    def __init__(self, item: PaletteItem, query: str, expanded: bool, **kwargs):
        super().__init__(**kwargs)
        self.item = item
        self.search_text = query
        self.expanded = expanded

    def compose(self) -> ComposeResult:
        render = self.item.render
        title = highlight(truncate(render.title, TITLE_TRUNCATE_LENGTH), self.search_text)
        if render.detail:
            title.append("  ›", style="dim")
        yield Static(title)

        if render.description and (self.expanded or render.show_description):
            description = render.description
            if not render.show_description:
                description = truncate(description, DESCRIPTION_TRUNCATE_LENGTH)
            text = highlight(description, self.search_text)
            text.stylize("dim")
            yield Static(text, classes="description")


class CommandPaletteScreen(ModalScreen[None]):
    """Command palette modal overlay."""

    CSS = """
    CommandPaletteScreen {
        align: center top;
        padding-top: 3;
    }

    #palette-container {
        width: 90;
        height: auto;
        max-height: 34;
        background: $surface;
        border: solid $primary;
    }

    #palette-input {
        width: 100%;
        height: 3;
        border: none;
        border-bottom: solid $primary-darken-1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #palette-input:focus {
        border-bottom: solid $primary;
    }

    #palette-results {
        height: auto;
        max-height: 26;
        min-height: 3;
        padding: 0;
    }

    #palette-hints {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }

    ListItem.--highlight {
        background: $accent;
    }
    """

    # Priority bindings so the Input never swallows navigation keys
    BINDINGS = [
        Binding(
            key,
            f"palette_key('{command.value}')",
            command.value.title(),
            show=False,
            priority=True,
        )
        for key, command in DEFAULT_KEYMAP.items()
    ]

    def __init__(self, controller: NavigationController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self._render_id = 0
        # ListView position of each rendered item
        self._positions: list[int] = []
        self._select_on_mount = False
        # The host may set the query before this screen is mounted
        controller.events.on("value", self._on_value)

    def compose(self) -> ComposeResult:
        with Vertical(id="palette-container"):
            yield Input(placeholder="Search verses, topics, bookmarks...", id="palette-input")
            yield ListView(id="palette-results")
            yield Static(HINTS, id="palette-hints")

    async def on_mount(self) -> None:
        events = self.controller.events
        events.on("display", self._on_display)
        events.on("select", self._on_select)
        events.on("close", self._on_close)

        input_widget = self.query_one("#palette-input", Input)
        input_widget.value = self.controller.current_state.query
        input_widget.focus()
        if self._select_on_mount:
            input_widget.select_all()
        await self._render_results(self._next_render_id())

    def on_unmount(self) -> None:
        events = self.controller.events
        events.off("display", self._on_display)
        events.off("select", self._on_select)
        events.off("value", self._on_value)
        events.off("close", self._on_close)

    # ------------------------------------------------------------------
    # Controller events
    # ------------------------------------------------------------------

    def _next_render_id(self) -> int:
        self._render_id += 1
        return self._render_id

    def _on_display(self, state: PaletteState) -> None:
        input_widget = self.query_one("#palette-input", Input)
        if input_widget.value != state.query:
            input_widget.value = state.query
            input_widget.cursor_position = len(state.query)
        self.call_later(self._render_results, self._next_render_id())

    def _on_select(self, index: int) -> None:
        self._highlight(index)

    def _on_value(self, value: tuple[str, bool]) -> None:
        text, select_text = value
        if not self.is_mounted:
            self._select_on_mount = select_text
            return
        input_widget = self.query_one("#palette-input", Input)
        input_widget.value = text
        if select_text:
            input_widget.select_all()
        else:
            input_widget.cursor_position = len(text)

    def _on_close(self, state: PaletteState) -> None:
        if self.is_current:
            self.dismiss()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    async def _render_results(self, render_id: int) -> None:
        """Rebuild the ListView from the controller's sections."""
        # Skip if a newer render was requested
        if render_id != self._render_id or not self.controller.is_open:
            return

        state = self.controller.current_state
        results_view = self.query_one("#palette-results", ListView)
        await results_view.clear()

        if not self.controller.sections:
            await results_view.append(ListItem(Static("[dim]No results found[/dim]"), disabled=True))
            self._positions = []
            return

        widgets: list[ListItem] = []
        positions: list[int] = []
        for section in self.controller.sections:
            widgets.append(SectionHeader(section.title))
            for item in section.items:
                positions.append(len(widgets))
                widgets.append(PaletteResultWidget(item, state.query, state.expanded))
        await results_view.extend(widgets)
        self._positions = positions
        self._highlight(self.controller.selected_index)

    def _highlight(self, index: int) -> None:
        if 0 <= index < len(self._positions):
            self.query_one("#palette-results", ListView).index = self._positions[index]

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "palette-input":
            return
        self.controller.update_query(event.value)

    def action_palette_key(self, name: str) -> None:
        """Forward a bound key to the controller."""
        handled = self.controller.handle_key(PaletteKey(name))
        logger.debug(f"Palette key {name}: handled={handled}")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Mouse selection activates the clicked row."""
        if isinstance(event.item, PaletteResultWidget):
            self.controller.select_index(event.item.item.index)
            self.controller.activate_selected()
