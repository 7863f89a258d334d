"""Slot for the first asynchronous failure raised during a test run.

Support-object coroutines are not always awaited by the step loop, so their
failures cannot travel up the call stack. They are parked here instead and the
run reporter reads them back once the current step settles.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class Recorder:
    """Keeps the first asynchronous error of a run and ignores the rest."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._first_error: BaseException | None = None
        self._discarded = 0

    @property
    def first_async_error(self) -> BaseException | None:
        return self._first_error

    @property
    def discarded(self) -> int:
        """Number of failures dropped because an earlier one was kept."""

        return self._discarded

    def save_first_async_error(self, error: BaseException) -> None:
        """Record ``error`` unless another error was already recorded this run."""

        with self._lock:
            if self._first_error is None:
                self._first_error = error
                return
            self._discarded += 1
        logger.warning("Discarding asynchronous error after the first one: %r", error)

    def raise_first_async_error(self) -> None:
        """Raise the recorded error, if any, and clear the slot."""

        with self._lock:
            error, self._first_error = self._first_error, None
        if error is not None:
            raise error

    def reset(self) -> None:
        """Forget any recorded error; called at the start of every run."""

        with self._lock:
            self._first_error = None
            self._discarded = 0


recorder = Recorder()

__all__ = ["Recorder", "recorder"]
