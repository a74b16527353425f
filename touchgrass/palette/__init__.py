"""
Command palette engine.

Provides:
- NavigationController: lifecycle, context stack, selection, prompt
- Category: base class for candidate providers
- PaletteState: immutable palette state
- filter_candidates / filter_fuzzy: multi-field matching
"""

from .category import Category, CloseWith, RenderInfo
from .commands import CommandCategory, PaletteCommand
from .controller import NavigationController, PaletteItem, PaletteSection
from .keys import DEFAULT_KEYMAP, PaletteKey
from .matching import edit_distance, filter_candidates, filter_fuzzy
from .prompt import PromptCategory, PromptChoice
from .state import PaletteState

__all__ = [
    "Category",
    "CloseWith",
    "CommandCategory",
    "DEFAULT_KEYMAP",
    "NavigationController",
    "PaletteCommand",
    "PaletteItem",
    "PaletteKey",
    "PaletteSection",
    "PaletteState",
    "PromptCategory",
    "PromptChoice",
    "RenderInfo",
    "edit_distance",
    "filter_candidates",
    "filter_fuzzy",
]
