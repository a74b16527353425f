"""
Application commands registered on the palette's command category.

Bookmark edits go through ``settings.set("bookmarks", ...)`` so whoever
listens for ``settings_change`` (the reader app) persists them.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from touchgrass import __build_id__, __version__
from touchgrass.config.constants import (
    APP_AUTHOR,
    APP_DESCRIPTION,
    APP_LICENSE,
    APP_NAME,
    DEFAULT_BOOKMARK_TAG,
    EXPORT_FILENAME,
    WELCOME_DESCRIPTION,
    WELCOME_QUERY,
)
from touchgrass.config.settings import Settings, export_settings, import_settings
from touchgrass.exceptions import ConfigurationError
from touchgrass.palette.category import RenderInfo
from touchgrass.palette.commands import PaletteCommand
from touchgrass.palette.controller import NavigationController
from touchgrass.palette.state import PaletteState

from .categories import BOOKMARK_VERSES, BOOKMARKS
from .data import BibleData

logger = logging.getLogger(__name__)

# Keeps import tasks alive until they finish
_background_tasks: set[asyncio.Task] = set()


def about_text() -> str:
    return (
        f"Version: {__version__}\nAuthor: {APP_AUTHOR}\nBuild: {__build_id__}\n"
        f"License: {APP_LICENSE}\n\n{APP_DESCRIPTION}"
    )


def register_app_commands(
    controller: NavigationController,
    data: BibleData,
    settings: Settings,
    export_dir: Path | None = None,
) -> list[PaletteCommand]:
    """
    Register bookmark, settings and informational commands.

    Args:
        controller: Palette to register on
        data: Shared bible data whose bookmarks the commands edit
        settings: Settings that receive bookmark and help changes
        export_dir: Where Export Settings writes its file (default: cwd)
    """

    def sync_bookmarks() -> None:
        settings.set("bookmarks", data.bookmarks.to_json())

    # --- bookmarks -------------------------------------------------------

    def render_delete_verse(cmd: PaletteCommand, state: PaletteState):
        verse, tag = state.get("verse"), state.get("tag")
        info = RenderInfo(
            title=f'Delete {verse.title()} from "{tag}"', description=cmd.description, detail=True
        )
        return info, {"active_category": BOOKMARKS, "tag": tag}

    def delete_verse(state: PaletteState) -> dict[str, Any]:
        verse, tag = state.get("verse"), state.get("tag")
        data.bookmarks.remove(tag, verse)
        sync_bookmarks()
        logger.info(f"Removed {verse} from bookmark tag {tag!r}")
        return {}

    def render_delete_tag(cmd: PaletteCommand, state: PaletteState):
        tag = state.get("tag")
        info = RenderInfo(title=f"Delete Tag: {tag}", description=cmd.description, detail=True)
        return info, {"active_category": BOOKMARKS, "tag": tag}

    def delete_tag(state: PaletteState) -> dict[str, Any]:
        tag = state.get("tag")
        data.bookmarks.delete(tag)
        sync_bookmarks()
        logger.info(f"Deleted bookmark tag {tag!r}")
        return {}

    def save_tag(state: PaletteState) -> str:
        return state.query.title() or DEFAULT_BOOKMARK_TAG

    def render_save(cmd: PaletteCommand, state: PaletteState):
        verse, tag = state.get("verse"), save_tag(state)
        info = RenderInfo(
            title=f'Save {verse.title()} to "{tag}"', description=cmd.description, detail=True
        )
        return info, {"active_category": BOOKMARK_VERSES, "tag": tag}

    def save_to_bookmarks(state: PaletteState) -> dict[str, Any]:
        verse, tag = state.get("verse"), save_tag(state)
        data.bookmarks.add(tag, verse)
        sync_bookmarks()
        logger.info(f"Saved {verse} to bookmark tag {tag!r}")
        return {}

    # --- settings file ---------------------------------------------------

    def export(state: PaletteState) -> None:
        path = export_settings(settings, export_dir or Path.cwd())
        logger.info(f"Exported settings to {path}")

    async def run_import(default_path: Path) -> None:
        answer = await controller.prompt(str(default_path))
        if not answer:
            logger.debug("Settings import cancelled")
            return
        try:
            import_settings(settings, Path(answer).expanduser())
        except ConfigurationError as e:
            logger.error(f"Failed to import settings: {e}")
            return
        try:
            data.bookmarks.add_data(settings["bookmarks"])
        except Exception as e:
            logger.error(f"Failed to merge imported bookmarks: {e}", exc_info=True)
            return
        logger.info(f"Merged {len(settings['bookmarks'])} imported bookmark tag(s)")

    def start_import(state: PaletteState) -> None:
        task = asyncio.get_running_loop().create_task(
            run_import((export_dir or Path.cwd()) / EXPORT_FILENAME)
        )
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)

    # --- informational ---------------------------------------------------

    def render_welcome(cmd: PaletteCommand, state: PaletteState):
        info = RenderInfo(title=cmd.name, description=cmd.description, show_description=True)
        return info, {"active_category": None}

    def toggle_help(state: PaletteState) -> dict[str, Any]:
        settings.set("show_help", not settings.get("show_help", True))
        return {}

    def render_about(cmd: PaletteCommand, state: PaletteState):
        return RenderInfo(title=cmd.name, description=cmd.description, show_description=True), {}

    commands = [
        controller.add_command(
            "Delete Verse from tag",
            "Delete a verse from a bookmark tag",
            action=delete_verse,
            render=render_delete_verse,
        ),
        controller.add_command(
            "Delete Tag",
            "Delete a bookmark tag",
            action=delete_tag,
            render=render_delete_tag,
        ),
        controller.add_command(
            "Save To Bookmarks",
            "Save the current verse to a bookmark tag",
            action=save_to_bookmarks,
            render=render_save,
            predicate=lambda query, state: query != WELCOME_QUERY,
        ),
        controller.add_command(
            "Export Settings",
            "Write your current settings to a JSON file",
            action=export,
        ),
        controller.add_command(
            "Import Settings",
            "Load settings from a JSON file",
            action=start_import,
        ),
        controller.add_command(
            WELCOME_QUERY,
            WELCOME_DESCRIPTION,
            action=toggle_help,
            render=render_welcome,
            predicate=lambda query, state: query == WELCOME_QUERY,
        ),
        controller.add_command(APP_NAME, about_text(), render=render_about),
    ]
    logger.debug(f"Registered {len(commands)} app commands")
    return commands
