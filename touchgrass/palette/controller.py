"""
Navigation controller for the command palette.

Owns the open/close lifecycle, the context stack used for back-navigation,
the flattened result list and the selected index. Categories only ever
contribute candidates and state patches; every call into a category hook is
isolated so one failing category cannot take the palette down.

Events emitted on ``controller.events``:
- ``open``: the initial state
- ``display``: the state now shown (after every render)
- ``close``: the last state shown before closing
- ``select``: the new selected index
- ``value``: ``(text, select_text)`` when the query is set programmatically
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from touchgrass.events import EventChannel
from touchgrass.exceptions import CategoryRegistrationError, PaletteError
from touchgrass.history import AppHistory

from .category import Category, CloseWith, RenderInfo, StatePatch
from .commands import CommandAction, CommandCategory, CommandPredicate, CommandRender, PaletteCommand
from .keys import PaletteKey
from .prompt import PromptCategory
from .state import PaletteState

logger = logging.getLogger(__name__)

HISTORY_ENTRY_NAME = "Command Palette"

_NO_RESULT = object()


@dataclass
class PaletteItem:
    """One rendered row. Valid for a single render pass."""

    index: int
    category: Category
    candidate: Any
    render: RenderInfo
    patch: StatePatch


@dataclass
class PaletteSection:
    """Rows contributed by one category, under its title."""

    category: Category
    title: str
    items: list[PaletteItem] = field(default_factory=list)


class NavigationController:
    """
    Drives categories from palette states.

    Args:
        default_state: State the first ``open()`` derives from
        data: Read-only context handed to categories registered by class
        history: Optional host history that records every displayed context
    """

    def __init__(
        self,
        default_state: PaletteState | None = None,
        data: Any = None,
        history: AppHistory | None = None,
    ):
        self.state = default_state if default_state is not None else PaletteState()
        self.data = data
        self.history = history
        self.events = EventChannel()

        self.context_stack: list[PaletteState] = []
        self.items: list[PaletteItem] = []
        self.sections: list[PaletteSection] = []
        self.selected_index = -1
        self.is_open = False

        self.commands = CommandCategory(data)
        self._categories: dict[str, Category] = {}
        self._prompt: PromptCategory | None = None
        self._prompt_counter = 0
        self._session = 0
        self._rendering = False

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add_category(
        self, category: Category | type[Category], key: str | None = None
    ) -> Category:
        """
        Register a category instance, or a class instantiated with ``data``.

        Raises:
            CategoryRegistrationError: if the key is empty or already taken
        """
        instance = category(self.data) if isinstance(category, type) else category
        if key:
            instance.key = key
        if not instance.key:
            raise CategoryRegistrationError("Category has no key", name=instance.name)
        if instance.key in self._categories or instance.key == self.commands.key:
            raise CategoryRegistrationError("Category key already registered", key=instance.key)
        self._categories[instance.key] = instance
        logger.debug(f"Registered category: {instance.key}")
        return instance

    def remove_category(self, key: str) -> bool:
        """Deregister a category. Returns True if found."""
        return self._categories.pop(key, None) is not None

    def get_category(self, key: str) -> Category | None:
        if key == self.commands.key:
            return self.commands
        return self._categories.get(key)

    @property
    def categories(self) -> list[Category]:
        """Registered categories in registration order."""
        return list(self._categories.values())

    def add_command(
        self,
        name: str,
        description: str = "",
        action: CommandAction | None = None,
        render: CommandRender | None = None,
        predicate: CommandPredicate | None = None,
        keywords: list[str] | None = None,
    ) -> PaletteCommand:
        """Register an ad-hoc command without writing a category."""
        return self.commands.register(
            PaletteCommand(
                name=name,
                description=description,
                action=action,
                render=render,
                predicate=predicate,
                keywords=keywords or [],
            )
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def current_state(self) -> PaletteState:
        """Top of the context stack, or the base state while closed."""
        return self.context_stack[-1] if self.context_stack else self.state

    def open(self, initial_patch: Mapping[str, Any] | None = None) -> None:
        """Start a fresh palette session from the base state."""
        self._guard("open")
        self._session += 1
        self._settle_prompt()
        self.context_stack.clear()
        self.is_open = True
        state = self.state.update(initial_patch or {})
        self.events.emit("open", state)
        self._show(state, push=True)

    def display(self, patch: Mapping[str, Any] | None = None) -> None:
        """Push ``current_state.update(patch)`` and render it."""
        self._guard("display")
        if not self.is_open:
            self.open(patch)
            return
        self._show(self.current_state.update(patch or {}), push=True)

    def close(self) -> None:
        """Close the palette. The base state keeps domain fields, nothing else."""
        self._guard("close")
        was_open = self.is_open
        final = self.current_state
        self.is_open = False
        self.context_stack.clear()
        self.items = []
        self.sections = []
        self.selected_index = -1
        self.state = final.reset()
        self._settle_prompt()
        if was_open:
            self.events.emit("close", final)

    def refresh(self) -> None:
        """Re-render the current context without pushing a new one."""
        if self.is_open:
            self._show(self.current_state, push=False)

    def go_back(self) -> bool:
        """Return to the previous context, or close when there is none.

        Returns:
            True if a previous context is now displayed
        """
        if len(self.context_stack) > 1:
            self.context_stack.pop()
            self._show(self.context_stack[-1], push=False)
            return True
        self.close()
        return False

    # ------------------------------------------------------------------
    # Query and view toggles (replace the top context in place)
    # ------------------------------------------------------------------

    def update_query(self, text: str) -> None:
        """Re-filter for a new query typed by the user."""
        if not self.is_open or self.current_state.query == text:
            return
        self._replace_top(self.current_state.update(query=text))

    def set_value(self, text: str, select_text: bool = False) -> None:
        """Set the query programmatically; hosts mirror it via the ``value`` event."""
        self.events.emit("value", (text, select_text))
        self.update_query(text)

    def toggle_category(self, key: str) -> None:
        """Show only ``key`` (and its siblings), or everything if already shown."""
        if not self.is_open:
            return
        active = None if self.current_state.active_category == key else key
        self._replace_top(self.current_state.update(active_category=active))

    def toggle_expanded(self) -> None:
        if not self.is_open:
            return
        self._replace_top(self.current_state.update(expanded=not self.current_state.expanded))

    def _replace_top(self, state: PaletteState) -> None:
        self.context_stack[-1] = state
        self._show(state, push=False)

    # ------------------------------------------------------------------
    # Selection and activation
    # ------------------------------------------------------------------

    @property
    def selected_item(self) -> PaletteItem | None:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None

    def move_selection(self, delta: int) -> None:
        self.select_index(self.selected_index + delta)

    def select_index(self, index: int) -> None:
        """Select a row, clamped to the rendered range."""
        if not self.items:
            self.selected_index = -1
        else:
            self.selected_index = max(0, min(index, len(self.items) - 1))
        self.events.emit("select", self.selected_index)

    def activate_selected(self) -> bool:
        """Invoke the selected row. Returns False when nothing is selected."""
        item = self.selected_item
        if item is None:
            return False
        self.activate(item)
        return True

    def activate(self, item: PaletteItem) -> None:
        """Run a row's terminal action and apply its outcome."""
        session = self._session
        result = self._call(item.category, "invoke", item.candidate)
        if result is _NO_RESULT:
            return
        if session != self._session or not self.is_open:
            # The action opened a new session (e.g. a prompt) or closed us
            return
        if result is None:
            self.close()
        elif isinstance(result, CloseWith):
            state = self._derive(item.category, "invoke", result.patch)
            if state is not None:
                self.context_stack[-1] = state
                self.close()
        elif not result:
            self.refresh()
        else:
            state = self._derive(item.category, "invoke", result)
            if state is not None:
                self._show(state, push=True)

    def drill_into(self, item: PaletteItem | None = None) -> bool:
        """Descend into a row by displaying the patch its category describes."""
        item = item if item is not None else self.selected_item
        if item is None:
            return False
        described = self._call(
            item.category, "describe", item.candidate, convert=_unpack_description
        )
        if described is _NO_RESULT:
            return False
        _, patch = described
        state = self._derive(item.category, "describe", patch)
        if state is None:
            return False
        self._show(state, push=True)
        return True

    def handle_key(self, key: PaletteKey) -> bool:
        """Apply an abstract keyboard command. Returns True if it was handled."""
        if not self.is_open:
            return False
        if key is PaletteKey.NEXT:
            self.move_selection(1)
        elif key is PaletteKey.PREVIOUS:
            self.move_selection(-1)
        elif key is PaletteKey.ACTIVATE:
            return self.activate_selected()
        elif key is PaletteKey.DRILL:
            item = self.selected_item
            if item is None or not item.render.detail:
                return False
            return self.drill_into(item)
        elif key is PaletteKey.BACK:
            self.go_back()
        elif key is PaletteKey.CANCEL:
            self.close()
        elif key is PaletteKey.EXPAND:
            self.toggle_expanded()
        else:
            return False
        return True

    # ------------------------------------------------------------------
    # Prompt
    # ------------------------------------------------------------------

    def prompt(self, text: str) -> asyncio.Future:
        """
        Ask the user for a line of text.

        Opens the palette on a transient Confirm/Cancel category with ``text``
        as the query. Must be called with a running event loop.

        Returns:
            Future resolving to the query on Confirm, or None on Cancel or
            when the palette is closed first.
        """
        future = asyncio.get_running_loop().create_future()
        self._prompt_counter += 1
        category = PromptCategory(text, future, key=f"prompt-{self._prompt_counter}")
        self._categories[category.key] = category
        future.add_done_callback(lambda _: self._drop_prompt(category))
        self.open({"query": text, "active_category": category.key})
        self._prompt = category
        return future

    async def confirm(self, text: str) -> bool:
        """True if the user confirms, False if they cancel or close."""
        return (await self.prompt(text)) is not None

    def _settle_prompt(self) -> None:
        prompt = self._prompt
        if prompt is None:
            return
        self._prompt = None
        prompt.resolve(None)
        self._drop_prompt(prompt)

    def _drop_prompt(self, category: PromptCategory) -> None:
        if self._categories.get(category.key) is category:
            del self._categories[category.key]
        if self._prompt is category:
            self._prompt = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _guard(self, operation: str) -> None:
        if self._rendering:
            raise PaletteError("Palette navigation during render", operation=operation)

    def _show(self, state: PaletteState, push: bool) -> None:
        if push:
            self.context_stack.append(state)
        self._render(state)
        if push and self.history is not None:
            self.history.push(HISTORY_ENTRY_NAME, state)
        self.events.emit("display", state)

    def _render(self, state: PaletteState) -> None:
        self._rendering = True
        try:
            for category in self._all_categories():
                self._call(category, "trigger", state)

            items: list[PaletteItem] = []
            sections: list[PaletteSection] = []
            for category in self._categories_to_show(state):
                if len(items) >= state.max_results:
                    break
                candidates = self._call(category, "list", state.query, convert=list)
                if candidates is _NO_RESULT or not candidates:
                    continue
                section = PaletteSection(category=category, title=category.title or category.name)
                for candidate in candidates:
                    if len(items) >= state.max_results:
                        break
                    described = self._call(
                        category, "describe", candidate, convert=_unpack_description
                    )
                    if described is _NO_RESULT:
                        continue
                    render, patch = described
                    item = PaletteItem(len(items), category, candidate, render, patch)
                    items.append(item)
                    section.items.append(item)
                if section.items:
                    sections.append(section)
        finally:
            self._rendering = False

        self.items = items
        self.sections = sections
        self.selected_index = 0 if items else -1

    def _all_categories(self) -> list[Category]:
        """Registered, secondary and default categories, each once."""
        seen: list[Category] = []
        for category in self._categories.values():
            for candidate in (category, category.secondary):
                if candidate is not None and all(candidate is not c for c in seen):
                    seen.append(candidate)
        if all(self.commands is not c for c in seen):
            seen.append(self.commands)
        return seen

    def _categories_to_show(self, state: PaletteState) -> list[Category]:
        if state.active_category is not None:
            active = self.get_category(state.active_category)
            if active is None:
                logger.warning(f"Unknown active category: {state.active_category}")
                return []
            if active.exclusive:
                return [active]
            primary = [active]
            for key in active.siblings:
                sibling = self._categories.get(key)
                if sibling is not None and all(sibling is not c for c in primary):
                    primary.append(sibling)
        else:
            primary = [c for c in self._categories.values() if not c.exclusive]

        shown = list(primary)
        for category in primary:
            secondary = category.secondary
            if secondary is not None and all(secondary is not c for c in shown):
                shown.append(secondary)
        if all(self.commands is not c for c in shown):
            shown.append(self.commands)
        return shown

    def _call(self, category: Category, hook: str, *args: Any, convert: Any = None) -> Any:
        """Run one category hook; failures are logged and yield ``_NO_RESULT``."""
        try:
            result = getattr(category, hook)(*args)
            return convert(result) if convert is not None else result
        except Exception as e:
            logger.error(f"Error in {category.key}.{hook}: {e}", exc_info=True)
            return _NO_RESULT

    def _derive(self, category: Category, hook: str, patch: Any) -> PaletteState | None:
        """Apply a patch returned by a category hook; an invalid patch yields None."""
        try:
            return self.current_state.update(patch)
        except Exception as e:
            logger.error(f"Invalid state patch from {category.key}.{hook}: {e}", exc_info=True)
            return None

    @property
    def length(self) -> int:
        """Number of rendered rows."""
        return len(self.items)


def _unpack_description(described: Any) -> tuple[RenderInfo, dict[str, Any]]:
    render, patch = described
    return render, dict(patch or {})
