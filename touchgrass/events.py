"""
Named event channel shared by reference between components.

Components hold an ``EventChannel`` instead of inheriting emitter behaviour:

    events = EventChannel()
    events.on("close", lambda state: print(state.query))
    events.emit("close", state)
"""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventChannel:
    """Registry of handlers per event name with synchronous dispatch."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        self._active: list[str] = []

    def on(self, event: str, handler: Handler) -> "EventChannel":
        """Register ``handler`` for ``event``. Returns self for chaining."""
        self._handlers.setdefault(event, []).append(handler)
        return self

    def off(self, event: str, handler: Handler) -> "EventChannel":
        """Remove a previously registered handler."""
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)
        return self

    def clear(self, event: str | None = None) -> "EventChannel":
        """Remove the handlers of one event, or of every event."""
        if event is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event, None)
        return self

    def emit(self, event: str, payload: Any = None) -> "EventChannel":
        """Call every handler of ``event`` in registration order.

        A failing handler is logged and does not stop the others.
        """
        self._active.append(event)
        try:
            for handler in list(self._handlers.get(event, ())):
                try:
                    handler(payload)
                except Exception:
                    logger.exception(f"Handler for '{event}' event failed")
        finally:
            self._active.pop()
        return self

    @property
    def active_event(self) -> str | None:
        """Name of the event currently being dispatched, if any."""
        return self._active[-1] if self._active else None

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))
