"""Observable operation state shared between controllers and views.

An :class:`OperationState` is the immutable tri-state record published for
each stage of a long running editor operation: *loading*, *success* (carrying
a value) or *error* (carrying a message). Records are published to an
:class:`ObservableSlot`, a last-value-cached publish point that replays its
current value to every new subscriber.

Slots never buffer: a subscriber attaching after several publishes only sees
the latest record. A fresh slot is *idle* and holds no value, so subscribing
to it triggers no callback until the first publish.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar


LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


@dataclass(frozen=True)
class OperationState(Generic[T]):
    """Immutable snapshot of one operation's progress.

    At most one of ``loading``, ``value`` and ``error`` is meaningful for a
    given record; constructing a record that sets more than one raises
    :class:`ValueError`.
    """

    loading: bool = False
    value: Optional[T] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        flags = (self.loading, self.value is not None, self.error is not None)
        if sum(flags) > 1:
            raise ValueError(
                "OperationState accepts only one of loading, value or error "
                f"(loading={self.loading!r}, value set={flags[1]}, error={self.error!r})"
            )

    @classmethod
    def in_progress(cls) -> "OperationState[T]":
        return cls(loading=True)

    @classmethod
    def success(cls, value: T) -> "OperationState[T]":
        if value is None:
            raise ValueError("A successful state requires a value")
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> "OperationState[T]":
        return cls(error=str(message))

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` for success and error records."""

        return not self.loading

    @property
    def succeeded(self) -> bool:
        return self.value is not None

    @property
    def failed(self) -> bool:
        return self.error is not None


class Subscription:
    """Handle returned by :meth:`ObservableSlot.subscribe`."""

    def __init__(self, slot: "ObservableSlot", callback: Callable) -> None:
        self._slot = slot
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Detach the callback; calling this twice is harmless."""

        if not self._active:
            return
        self._active = False
        self._slot._detach(self._callback)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class ObservableSlot(Generic[S]):
    """Thread-safe, replay-latest publish point for state records.

    Storing a value and notifying subscribers happen under one re-entrant
    lock, so every subscriber observes values in the order they were stored
    and a subscription made concurrently with a publish sees each value at
    most once.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name or "slot"
        self._lock = threading.RLock()
        self._value: Optional[S] = None
        self._has_value = False
        self._subscribers: List[Callable[[S], None]] = []

    @property
    def value(self) -> Optional[S]:
        """Return the most recently published value, or ``None`` when idle."""

        with self._lock:
            return self._value

    @property
    def is_idle(self) -> bool:
        with self._lock:
            return not self._has_value

    def publish(self, value: S) -> None:
        """Store ``value`` and synchronously notify every current subscriber."""

        with self._lock:
            self._value = value
            self._has_value = True
            for callback in list(self._subscribers):
                self._notify(callback, value)

    def subscribe(self, callback: Callable[[S], None]) -> Subscription:
        """Register ``callback`` and replay the current value, if any."""

        with self._lock:
            self._subscribers.append(callback)
            if self._has_value:
                self._notify(callback, self._value)
        return Subscription(self, callback)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def _detach(self, callback: Callable[[S], None]) -> None:
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

    def _notify(self, callback: Callable[[S], None], value: S) -> None:
        try:
            callback(value)
        except Exception:
            LOGGER.exception(
                "Slot subscriber raised",
                extra={"component": "ObservableSlot", "slot": self.name},
            )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"ObservableSlot(name={self.name!r}, value={self.value!r})"


__all__ = ["OperationState", "ObservableSlot", "Subscription"]
