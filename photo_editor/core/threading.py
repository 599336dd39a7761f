"""Background execution pool shared by the editor controllers.

The :class:`ThreadController` owns a ``ThreadPoolExecutor`` that runs every
fallible operation dispatched by :class:`~photo_editor.core.commands.AsyncCommandController`.
Work submitted here always runs to completion. There is no cancellation or
pause support; a caller that wants a fresh result simply submits again.
"""
from __future__ import annotations

import concurrent.futures
import logging
import threading
import time
from collections import deque
from typing import Any, Callable, Deque, List, Optional


class ThreadController:
    """Coordinates threaded execution of background tasks."""

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="photo-editor"
        )
        self._pending: Deque[concurrent.futures.Future] = deque()
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> concurrent.futures.Future:
        """Submit a callable to execute in the background.

        Raises :class:`RuntimeError` once :meth:`shutdown` has been called,
        mirroring ``ThreadPoolExecutor.submit``.
        """

        future = self._executor.submit(fn, *args, **kwargs)
        with self._lock:
            self._pending.append(future)
        future.add_done_callback(self._cleanup_future)
        self._logger.debug(
            "Task submitted",
            extra={"component": "ThreadController", "pending": self.pending_count()},
        )
        return future

    def _unfinished(self) -> List[concurrent.futures.Future]:
        with self._lock:
            return [future for future in self._pending if not future.done()]

    def pending_count(self) -> int:
        """Return the number of submitted tasks that have not finished yet."""

        return len(self._unfinished())

    def wait_for_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until every pending task has finished.

        Returns ``False`` if ``timeout`` elapsed first. Intended for CLI and
        test harnesses; interactive code should subscribe to state slots.
        """

        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            unfinished = self._unfinished()
            if not unfinished:
                return True
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            _done, not_done = concurrent.futures.wait(unfinished, timeout=remaining)
            if not_done and deadline is not None and time.monotonic() >= deadline:
                return False

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the executor; already submitted work still runs to completion."""

        self._executor.shutdown(wait=wait)
        self._logger.info("Thread controller shutdown", extra={"component": "ThreadController"})

    def _cleanup_future(self, future: concurrent.futures.Future) -> None:
        with self._lock:
            if future in self._pending:
                self._pending.remove(future)
        self._logger.debug("Task finished", extra={"component": "ThreadController"})

    def __enter__(self) -> "ThreadController":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown(wait=True)


__all__ = ["ThreadController"]
