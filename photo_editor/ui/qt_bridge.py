"""Forward slot updates to Qt widgets.

Slots notify subscribers on whichever thread published, which for terminal
states is a worker thread. :class:`SlotSignalBridge` re-emits each state as a
Qt signal; connections made with the default ``AutoConnection`` to objects
living on the GUI thread are therefore delivered there through the event
loop.
"""

from __future__ import annotations

from typing import Any, Optional

from PyQt5 import QtCore

from photo_editor.core.state import ObservableSlot, OperationState, Subscription


class SlotSignalBridge(QtCore.QObject):
    """Re-emit every state published on a slot as Qt signals."""

    stateChanged = QtCore.pyqtSignal(object)
    loadingChanged = QtCore.pyqtSignal(bool)
    succeeded = QtCore.pyqtSignal(object)
    failed = QtCore.pyqtSignal(str)

    def __init__(self, slot: ObservableSlot, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._slot = slot
        self._subscription: Optional[Subscription] = None

    @property
    def slot(self) -> ObservableSlot:
        return self._slot

    def bind(self) -> "SlotSignalBridge":
        """Subscribe to the slot; the current state, if any, is re-emitted at once."""

        if self._subscription is None or not self._subscription.active:
            self._subscription = self._slot.subscribe(self._forward)
        return self

    def release(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _forward(self, state: Any) -> None:
        self.stateChanged.emit(state)
        if not isinstance(state, OperationState):
            return
        self.loadingChanged.emit(state.loading)
        if state.value is not None:
            self.succeeded.emit(state.value)
        elif state.error is not None:
            self.failed.emit(state.error)


__all__ = ["SlotSignalBridge"]
