"""
Host-level navigation history.

The palette controller records every context it displays here so the
surrounding application can reopen the palette where the user left it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from touchgrass.events import EventChannel

DEFAULT_MAX_HISTORY = 100


@dataclass
class HistoryEntry:
    """One recorded navigation step."""

    name: str
    data: Any = None
    time: datetime = field(default_factory=datetime.now)


class AppHistory:
    """Bounded stack of history entries with push/pop notifications."""

    def __init__(self, max_entries: int = DEFAULT_MAX_HISTORY):
        self.max_entries = max_entries
        self.events = EventChannel()
        self._entries: list[HistoryEntry] = []

    def push(self, name: str, data: Any = None) -> HistoryEntry:
        entry = HistoryEntry(name=name, data=data)
        self._entries.append(entry)
        if len(self._entries) > self.max_entries:
            del self._entries[: len(self._entries) - self.max_entries]
        self.events.emit("push", entry)
        return entry

    def pop(self) -> HistoryEntry | None:
        """Drop the newest entry and return the one now on top."""
        if self._entries:
            self._entries.pop()
        current = self.current
        self.events.emit("pop", current)
        return current

    def clear(self) -> None:
        self._entries.clear()

    def latest(self, name: str) -> HistoryEntry | None:
        """Newest entry recorded under ``name``."""
        for entry in reversed(self._entries):
            if entry.name == name:
                return entry
        return None

    @property
    def current(self) -> HistoryEntry | None:
        return self._entries[-1] if self._entries else None

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
