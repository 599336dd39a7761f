"""Dispatch fallible operations off the interactive thread.

:class:`AsyncCommandController` turns a plain callable into a well formed
sequence of :class:`~photo_editor.core.state.OperationState` records on an
:class:`~photo_editor.core.state.ObservableSlot`::

    loading  ->  success(value) | error(message)

The loading record is published synchronously, before :meth:`run` returns.
The operation then runs on the background executor and exactly one terminal
record follows. A ``None`` result is a failure carrying the caller supplied
``empty_message``; a raised exception is a failure carrying the exception's
own message.

Invocations are independent: two runs against the same slot both publish and
whichever terminal record lands last is what the slot holds afterwards.
"""
from __future__ import annotations

import concurrent.futures
import logging
from typing import Any, Callable, Optional, Protocol, TypeVar

from .state import ObservableSlot, OperationState


LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class Executor(Protocol):
    """Anything accepting work the way ``ThreadPoolExecutor.submit`` does."""

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> concurrent.futures.Future:
        ...


def describe_failure(exc: BaseException) -> str:
    """Return the user facing message for a raised failure."""

    message = str(exc)
    return message if message else exc.__class__.__name__


class AsyncCommandController:
    """Run operations in the background and publish their outcome."""

    def __init__(self, executor: Executor) -> None:
        self._executor = executor

    @property
    def executor(self) -> Executor:
        return self._executor

    def run(
        self,
        operation: Callable[[], Optional[T]],
        slot: ObservableSlot[OperationState[T]],
        *,
        empty_message: str,
        description: str = "",
    ) -> Optional[concurrent.futures.Future]:
        """Publish loading to ``slot`` and schedule ``operation``.

        Returns the future tracking the background work, or ``None`` when the
        executor refused the submission (the refusal is published as the
        terminal error in that case).
        """

        label = description or slot.name
        slot.publish(OperationState.in_progress())

        def _execute() -> None:
            try:
                result = operation()
            except BaseException as exc:
                LOGGER.warning(
                    "Operation failed: %s",
                    label,
                    exc_info=exc,
                    extra={"component": "AsyncCommandController"},
                )
                slot.publish(OperationState.failure(describe_failure(exc)))
                # Interpreter-level exits still reach the worker once the slot is settled.
                if not isinstance(exc, Exception):
                    raise
                return
            if result is None:
                LOGGER.info(
                    "Operation produced no result: %s",
                    label,
                    extra={"component": "AsyncCommandController"},
                )
                slot.publish(OperationState.failure(empty_message))
                return
            LOGGER.debug("Operation completed: %s", label, extra={"component": "AsyncCommandController"})
            slot.publish(OperationState.success(result))

        try:
            return self._executor.submit(_execute)
        except RuntimeError as exc:
            LOGGER.error(
                "Executor rejected operation: %s",
                label,
                exc_info=exc,
                extra={"component": "AsyncCommandController"},
            )
            slot.publish(OperationState.failure(describe_failure(exc)))
            return None


__all__ = ["AsyncCommandController", "Executor", "describe_failure"]
