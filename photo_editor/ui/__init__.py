"""Qt glue for presenting controller state."""

from .qt_bridge import SlotSignalBridge

__all__ = ["SlotSignalBridge"]
