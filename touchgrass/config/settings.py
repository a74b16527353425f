"""
Touch Grass Bible settings.

Settings live in ~/.config/touchgrass/settings.json and are merged over
DEFAULT_SETTINGS on load. Mutation goes through ``Settings.set`` /
``Settings.update`` so listeners on ``settings.events`` hear about every
change as a ``settings_change`` event carrying the changed keys.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, TypedDict

from touchgrass.events import EventChannel
from touchgrass.exceptions import ConfigurationError

from .constants import (
    DEFAULT_BOOKMARKS,
    DEFAULT_TRANSLATION,
    EXPORT_FILENAME,
    SETTINGS_FILENAME,
    TOUCHGRASS_CONFIG_DIR,
)

logger = logging.getLogger(__name__)

SETTINGS_CHANGE = "settings_change"


class SettingsData(TypedDict):
    """Shape of the settings file."""

    enable_logging: bool
    debug: bool
    show_help: bool
    translation: str
    bookmarks: dict[str, list[Any]]


DEFAULT_SETTINGS: SettingsData = {
    "enable_logging": False,
    "debug": False,
    "show_help": True,
    "translation": DEFAULT_TRANSLATION,
    "bookmarks": {tag: [[osis, 0] for osis in refs] for tag, refs in DEFAULT_BOOKMARKS.items()},
}

# Expected JSON type of each known key
_VALUE_TYPES: dict[str, type] = {
    "enable_logging": bool,
    "debug": bool,
    "show_help": bool,
    "translation": str,
    "bookmarks": dict,
}


class Settings:
    """Mutable settings with change notification."""

    def __init__(self, values: Mapping[str, Any] | None = None, events: EventChannel | None = None):
        self._values: dict[str, Any] = {**copy.deepcopy(DEFAULT_SETTINGS), **(values or {})}
        self.events = events if events is not None else EventChannel()

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set one value and notify listeners."""
        self.update({key: value})

    def update(self, values: Mapping[str, Any]) -> None:
        """Set several values and emit one ``settings_change`` with the changed keys."""
        changed = {key: value for key, value in values.items() if self._values.get(key) != value}
        if not changed:
            return
        self._values.update(changed)
        # Writes made by settings_change listeners are not re-emitted
        if self.events.active_event == SETTINGS_CHANGE:
            logger.debug(f"Nested settings change not re-emitted: {sorted(changed)}")
            return
        self.events.emit(SETTINGS_CHANGE, changed)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)


def get_settings_path() -> Path:
    """
    Get path to the settings file.

    Returns:
        Path to ~/.config/touchgrass/settings.json
    """
    return TOUCHGRASS_CONFIG_DIR / SETTINGS_FILENAME


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError("Cannot read settings file", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError("Invalid JSON in settings file", path=str(path)) from e
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must contain a JSON object", path=str(path))
    _check_types(data, path)
    return data


def _check_types(data: dict[str, Any], path: Path) -> None:
    for key, expected in _VALUE_TYPES.items():
        if key in data and not isinstance(data[key], expected):
            raise ConfigurationError(
                f"Setting {key!r} must be a {expected.__name__}",
                path=str(path),
                value=data[key],
            )
    for tag, refs in data.get("bookmarks", {}).items():
        if not isinstance(refs, list) or not all(_is_bookmark_ref(ref) for ref in refs):
            raise ConfigurationError(
                "Bookmark tag must be a list of OSIS references",
                path=str(path),
                tag=tag,
            )


def _is_bookmark_ref(ref: Any) -> bool:
    # "Gen.1.1" or ["Gen.1.1", rating]
    if isinstance(ref, str):
        return True
    return (
        isinstance(ref, list)
        and 1 <= len(ref) <= 2
        and isinstance(ref[0], str)
        and all(isinstance(r, int) and not isinstance(r, bool) for r in ref[1:])
    )


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from file.

    Returns:
        Settings merged over the defaults; defaults alone if the file is
        missing or unreadable
    """
    path = path or get_settings_path()
    if not path.exists():
        return Settings()
    try:
        return Settings(_read_settings_file(path))
    except ConfigurationError as e:
        logger.warning(f"Using default settings: {e}")
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """
    Save settings to file.

    Raises:
        ConfigurationError: if the file cannot be written
    """
    path = path or get_settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError("Cannot write settings file", path=str(path)) from e
    logger.debug(f"Saved settings to {path}")
    return path


def export_settings(settings: Settings, directory: Path) -> Path:
    """Write a portable copy of the settings into ``directory``."""
    return save_settings(settings, Path(directory) / EXPORT_FILENAME)


def import_settings(settings: Settings, path: Path) -> dict[str, Any]:
    """
    Replace settings with the contents of an exported file.

    Values missing from the file fall back to the defaults.

    Returns:
        The imported values

    Raises:
        ConfigurationError: if the file is missing, not a JSON object or
            holds a value of the wrong type; settings are left untouched
    """
    imported = _read_settings_file(Path(path))
    settings.update({**copy.deepcopy(DEFAULT_SETTINGS), **imported})
    logger.info(f"Imported settings from {path}")
    return imported
