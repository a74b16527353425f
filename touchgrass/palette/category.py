"""
Category contract for the command palette.

A category owns one kind of candidate (verses, topics, commands...). The
controller drives it through four hooks:

- ``trigger(state)``: refresh the candidate buffer and ``title`` from a state
- ``list(query)``: narrow the buffer for the current query
- ``describe(candidate)``: how to draw a row, and the state patch that
  drilling into the row produces
- ``invoke(candidate)``: the terminal action. Returning ``None`` closes the
  palette; returning a patch displays it instead (an empty patch re-renders
  the current context); ``CloseWith(patch)`` applies the patch to the
  current context and then closes, so close listeners see the result.

Categories never call back into the controller. Navigation targets are
category keys, resolved through the controller's registry.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .matching import filter_candidates, filter_fuzzy
from .state import PaletteState

T = TypeVar("T")
U = TypeVar("U")

StatePatch = Mapping[str, Any]


@dataclass(frozen=True)
class CloseWith:
    """Invoke outcome: apply ``patch`` to the current context, then close."""

    patch: StatePatch


InvokeResult = StatePatch | CloseWith | None


@dataclass
class RenderInfo:
    """How a candidate is drawn."""

    title: str
    description: str = ""
    detail: bool = False  # Row can be drilled into
    show_description: bool = False  # Show description even when collapsed


def slugify(name: str) -> str:
    """Stable key for a category name: "Go To Verse" -> "go-to-verse"."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class Category(ABC, Generic[T]):
    """Base class for palette categories."""

    key: str = ""
    name: str = ""
    description: str = ""
    # Keys of categories shown alongside this one while it is active
    siblings: tuple[str, ...] = ()
    # Shown only while active, without secondary or default commands
    exclusive: bool = False

    def __init__(self, data: Any = None, secondary: Category | None = None):
        self.data = data
        self.secondary = secondary
        self.title = self.name
        if not self.key:
            self.key = slugify(self.name or type(self).__name__)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key!r}>"

    @abstractmethod
    def trigger(self, state: PaletteState) -> None:
        """Refresh candidates and title for ``state``."""

    @abstractmethod
    def list(self, query: str) -> Sequence[T]:
        """Candidates matching ``query``, best first."""

    @abstractmethod
    def describe(self, candidate: T) -> tuple[RenderInfo, StatePatch]:
        """Row rendering plus the patch for drilling into ``candidate``."""

    @abstractmethod
    def invoke(self, candidate: T) -> InvokeResult:
        """Run the terminal action for ``candidate``."""

    def match(self, query: str, candidates: Sequence[U], *extractors: Callable[[U], str]) -> list[U]:
        """Substring match helper, see ``filter_candidates``."""
        return filter_candidates(query, candidates, *extractors)

    def match_fuzzy(
        self, query: str, candidates: Sequence[U], *extractors: Callable[[U], str]
    ) -> list[U]:
        """Edit-distance match helper, see ``filter_fuzzy``."""
        return filter_fuzzy(query, candidates, *extractors)
