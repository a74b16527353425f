"""Assembles the scripture command palette."""

import logging
from pathlib import Path

from touchgrass.config.settings import Settings
from touchgrass.history import AppHistory
from touchgrass.palette.controller import NavigationController

from .categories import register_bible_categories
from .commands import register_app_commands
from .data import BibleData
from .state import BiblePaletteState

logger = logging.getLogger(__name__)


def build_palette(
    data: BibleData,
    settings: Settings,
    history: AppHistory | None = None,
    export_dir: Path | None = None,
) -> NavigationController:
    """
    Create a controller with every scripture category and app command.

    Args:
        data: Bible text, cross references, topics and bookmarks
        settings: Settings the commands write to
        history: Optional host history recording displayed contexts
        export_dir: Directory for Export Settings

    Returns:
        A closed controller whose base state is a ``BiblePaletteState``
    """
    controller = NavigationController(default_state=BiblePaletteState(), data=data, history=history)
    register_bible_categories(controller)
    register_app_commands(controller, data, settings, export_dir=export_dir)
    logger.debug(f"Palette ready with {len(controller.categories)} categories")
    return controller
