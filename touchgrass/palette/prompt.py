"""
Transient prompt category.

``NavigationController.prompt`` registers one of these, opens the palette on
it with the prompt text as the query, and hands back a future. The future
resolves exactly once: to the (possibly edited) query on Confirm, or to
``None`` on Cancel or when the palette closes first.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from .category import Category, InvokeResult, RenderInfo, StatePatch
from .state import PaletteState

logger = logging.getLogger(__name__)


class PromptChoice(Enum):
    """The two terminal rows of a prompt."""

    CONFIRM = "Confirm"
    CANCEL = "Cancel"


class PromptCategory(Category[PromptChoice]):
    """Offers Confirm/Cancel for a pending prompt."""

    name = "Prompt"
    exclusive = True
    description = "Answer the pending question"

    def __init__(self, text: str, future: asyncio.Future, key: str):
        super().__init__()
        self.key = key
        self.text = text
        self.future = future
        self._answer = text

    def trigger(self, state: PaletteState) -> None:
        self._answer = state.query
        self.title = self.text or self.name

    def list(self, query: str) -> list[PromptChoice]:
        return [PromptChoice.CONFIRM, PromptChoice.CANCEL]

    def describe(self, candidate: PromptChoice) -> tuple[RenderInfo, StatePatch]:
        if candidate is PromptChoice.CONFIRM:
            return RenderInfo(title="Confirm", description=self._answer, show_description=True), {}
        return RenderInfo(title="Cancel"), {}

    def invoke(self, candidate: PromptChoice) -> InvokeResult:
        if candidate is PromptChoice.CONFIRM:
            self.resolve(self._answer)
        else:
            self.resolve(None)
        return None

    def resolve(self, value: str | None) -> bool:
        """Settle the future unless it already is. Returns True if settled now."""
        if self.future.done():
            return False
        self.future.set_result(value)
        logger.debug(f"Prompt {self.key} resolved to {value!r}")
        return True
