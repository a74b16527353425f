"""
Keyboard contract of the palette, independent of any input library.

Hosts translate their own key names into ``PaletteKey`` values and pass them
to ``NavigationController.handle_key``.
"""

from enum import Enum


class PaletteKey(Enum):
    """Abstract palette commands."""

    NEXT = "next"  # Move selection down
    PREVIOUS = "previous"  # Move selection up
    ACTIVATE = "activate"  # Invoke the selected row
    DRILL = "drill"  # Go one level deeper into the selected row
    BACK = "back"  # Return to the previous context
    CANCEL = "cancel"  # Close the palette
    EXPAND = "expand"  # Toggle row descriptions


# Textual key names -> palette commands
DEFAULT_KEYMAP: dict[str, PaletteKey] = {
    "down": PaletteKey.NEXT,
    "ctrl+n": PaletteKey.NEXT,
    "up": PaletteKey.PREVIOUS,
    "ctrl+p": PaletteKey.PREVIOUS,
    "enter": PaletteKey.ACTIVATE,
    "tab": PaletteKey.DRILL,
    "shift+tab": PaletteKey.BACK,
    "escape": PaletteKey.CANCEL,
    "ctrl+e": PaletteKey.EXPAND,
}
