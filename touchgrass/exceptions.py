"""Custom exception hierarchy for touchgrass.

Exception Hierarchy:
    TouchGrassError (base)
    ├── PaletteError - command palette wiring
    │   ├── CategoryRegistrationError
    │   └── InvalidStateError
    ├── InvalidReferenceError - unparseable verse references
    ├── DataLoadError - bible data files
    └── ConfigurationError - settings files

Category hook failures are never raised to the host; the palette controller
logs and isolates them. These exceptions cover programmer errors and I/O.

Usage:
    from touchgrass.exceptions import DataLoadError

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise DataLoadError("Invalid bible data file", path=str(path)) from e
"""

from typing import Any, Optional


class TouchGrassError(Exception):
    """Base exception for all touchgrass errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., keys, paths)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Palette Errors
# =============================================================================


class PaletteError(TouchGrassError):
    """Base exception for command palette errors."""

    pass


class CategoryRegistrationError(PaletteError):
    """A category could not be registered with the palette."""

    def __init__(
        self,
        message: str = "Category registration failed",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key is not None:
            context["key"] = key
        super().__init__(message, **context)


class InvalidStateError(PaletteError, ValueError):
    """A palette state was given an invalid field value."""

    pass


# =============================================================================
# Domain Errors
# =============================================================================


class InvalidReferenceError(TouchGrassError, ValueError):
    """A verse reference could not be parsed."""

    def __init__(
        self,
        message: str = "Invalid verse reference",
        *,
        reference: Optional[str] = None,
        **context: Any,
    ) -> None:
        if reference is not None:
            context["reference"] = reference
        super().__init__(message, **context)


class DataLoadError(TouchGrassError):
    """A bible data file is missing or malformed."""

    def __init__(
        self,
        message: str = "Failed to load bible data",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path is not None:
            context["path"] = path
        super().__init__(message, **context)


class ConfigurationError(TouchGrassError):
    """Settings could not be read or written."""

    pass
