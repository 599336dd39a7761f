"""Exception hierarchy for the editor."""
from __future__ import annotations


class EditorError(Exception):
    """Base class for errors raised by editor collaborators."""


class ImageDecodeError(EditorError):
    """Raised when a source exists but its pixels cannot be read."""


class FilterNotFoundError(EditorError, KeyError):
    """Raised when a filter identifier is not registered in a catalogue."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message for the UI.
        return str(self.args[0]) if self.args else ""


__all__ = ["EditorError", "FilterNotFoundError", "ImageDecodeError"]
