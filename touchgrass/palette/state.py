"""
Immutable palette state.

Every query edit, category activation and navigation step produces a new
``PaletteState`` through ``update()``; the receiver is never modified.
Applications extend the state either by subclassing with extra dataclass
fields or by passing unknown keys, which are kept in ``extras``.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from touchgrass.config.constants import DEFAULT_MAX_RESULTS
from touchgrass.events import EventChannel
from touchgrass.exceptions import InvalidStateError

S = TypeVar("S", bound="PaletteState")

_RESERVED = frozenset({"extras", "events"})


@dataclass(frozen=True)
class PaletteState:
    """What the palette is showing: query, active category and domain fields."""

    query: str = ""
    max_results: int = DEFAULT_MAX_RESULTS
    active_category: str | None = None
    expanded: bool = False
    extras: Mapping[str, Any] = field(default_factory=dict, hash=False)
    # Shared by every state derived from this one
    events: EventChannel = field(default_factory=EventChannel, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_results < 0:
            raise InvalidStateError("max_results must be >= 0", max_results=self.max_results)
        if not isinstance(self.extras, MappingProxyType):
            object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    def update(self: S, patch: Mapping[str, Any] | None = None, **fields: Any) -> S:
        """
        Derive a new state.

        Args:
            patch: Field overrides, e.g. ``{"query": "love"}``
            fields: More overrides, applied after ``patch``

        Returns:
            A new state of the same class; absent fields are inherited.
        """
        changes = {**(patch or {}), **fields}
        reserved = _RESERVED.intersection(changes)
        if reserved:
            raise InvalidStateError("Reserved state fields cannot be patched", fields=sorted(reserved))

        known = {f.name for f in dataclasses.fields(self)}
        direct = {k: v for k, v in changes.items() if k in known}
        extra = {k: v for k, v in changes.items() if k not in known}
        if extra:
            direct["extras"] = {**self.extras, **extra}

        new_state = dataclasses.replace(self, **direct)
        self.events.emit("update", changes)
        return new_state

    def reset(self: S) -> S:
        """Back to the default query, ceiling and category; domain fields stay."""
        return self.update(
            query="",
            max_results=DEFAULT_MAX_RESULTS,
            active_category=None,
            expanded=False,
        )

    def get(self, name: str, default: Any = None) -> Any:
        """Read a field or an extension value."""
        if name in _RESERVED:
            return default
        if any(f.name == name for f in dataclasses.fields(self)):
            return getattr(self, name)
        return self.extras.get(name, default)

    def as_patch(self) -> dict[str, Any]:
        """Every field and extension value as a patch, for reopening this state."""
        patch = {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if f.name not in _RESERVED
        }
        patch.update(self.extras)
        return patch
