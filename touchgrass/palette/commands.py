"""
Ad-hoc commands for the command palette.

Applications that only need a labelled action do not have to write a full
category: they call ``controller.add_command(...)`` and the command lands in
the controller's ``CommandCategory``, which is rendered after the primary
results of every palette view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .category import Category, InvokeResult, RenderInfo, StatePatch, slugify
from .state import PaletteState

logger = logging.getLogger(__name__)

CommandAction = Callable[[PaletteState], InvokeResult]
CommandRender = Callable[["PaletteCommand", PaletteState], "tuple[RenderInfo | None, StatePatch]"]
CommandPredicate = Callable[[str, PaletteState], bool]


@dataclass
class PaletteCommand:
    """A command that can be executed from the palette."""

    name: str  # Display name: "Delete Tag"
    description: str = ""  # What it does
    action: CommandAction | None = None  # Called with the current state on invoke
    render: CommandRender | None = None  # Custom row and drill-in patch
    predicate: CommandPredicate | None = None  # (query, state) -> visible?
    keywords: list[str] = field(default_factory=list)  # Extra match text
    id: str = ""  # Unique identifier, defaults to a slug of the name

    def __post_init__(self) -> None:
        if not self.id:
            self.id = slugify(self.name)


class CommandCategory(Category[PaletteCommand]):
    """Registry of ad-hoc commands, filtered by name, description and keywords."""

    key = "commands"
    name = "Commands"
    description = "Application commands"

    def __init__(self, data=None, secondary=None):
        super().__init__(data, secondary)
        self._commands: dict[str, PaletteCommand] = {}
        self._state = PaletteState()

    def register(self, command: PaletteCommand) -> PaletteCommand:
        """Register a command, replacing any with the same id."""
        if command.id in self._commands:
            logger.debug(f"Replacing command: {command.id}")
        self._commands[command.id] = command
        logger.debug(f"Registered command: {command.id}")
        return command

    def unregister(self, command_id: str) -> bool:
        """Unregister a command. Returns True if found."""
        return self._commands.pop(command_id, None) is not None

    def get(self, command_id: str) -> PaletteCommand | None:
        """Get a command by ID."""
        return self._commands.get(command_id)

    def get_all(self) -> list[PaletteCommand]:
        """All commands in registration order."""
        return list(self._commands.values())

    def trigger(self, state: PaletteState) -> None:
        self._state = state
        self.title = self.name

    def _predicate_allows(self, command: PaletteCommand, query: str) -> bool:
        try:
            return bool(command.predicate(query, self._state))
        except Exception:
            logger.exception(f"Predicate of command {command.id} failed; hiding it")
            return False

    def list(self, query: str) -> list[PaletteCommand]:
        """
        Commands without a predicate are matched against the query; a
        predicate sees the raw query itself and alone decides visibility.
        Text matches come first.
        """
        plain = [cmd for cmd in self._commands.values() if cmd.predicate is None]
        matched = self.match(
            query,
            plain,
            lambda cmd: cmd.name,
            lambda cmd: cmd.description,
            lambda cmd: " ".join(cmd.keywords),
        )
        gated = [
            cmd
            for cmd in self._commands.values()
            if cmd.predicate is not None and self._predicate_allows(cmd, query)
        ]
        return matched + gated

    def describe(self, candidate: PaletteCommand) -> tuple[RenderInfo, StatePatch]:
        info: RenderInfo | None = None
        patch: StatePatch = {}
        if candidate.render is not None:
            info, patch = candidate.render(candidate, self._state)
        if info is None:
            info = RenderInfo(
                title=candidate.name,
                description=candidate.description,
                detail=bool(patch),
            )
        return info, patch

    def invoke(self, candidate: PaletteCommand) -> InvokeResult:
        if candidate.action is None:
            # Informational entry: stay where we are
            return {}
        return candidate.action(self._state)
