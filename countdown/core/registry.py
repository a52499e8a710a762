# countdown/core/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from countdown.core.errors import InvalidTimerError, TimerNotFoundError
from countdown.core.timer import Timer
from countdown.runtime.concurrency import get_lock, with_lock

logger = logging.getLogger(__name__)


def _new_timer_id() -> str:
    return str(uuid.uuid4())


class TimerRegistry:
    """
    Owns every timer, keyed by identifier, behind a single exclusive lock.

    Each method takes the lock itself. Callers that need several steps to happen
    atomically (a transition followed by a read, a bulk pass) wrap them in
    :meth:`locked`; the lock is reentrant so the inner calls do not block.

    The registry hands out the stored Timer objects. Code outside the lock must
    work on copies.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        """
        :param id_factory: Callable producing fresh identifiers, UUID4 strings by default.
        """
        self._timers: Dict[str, Timer] = {}
        self._lock = get_lock()
        self._id_factory = id_factory or _new_timer_id

    @contextmanager
    def locked(self, timeout: Optional[float] = None, operation: Optional[str] = None) -> Iterator["TimerRegistry"]:
        """
        Hold the registry lock for the duration of the with-block.

        :param timeout: Seconds to wait for the lock, or None to block.
        :param operation: Name reported in a LockFailureError.
        :raises LockFailureError: If the lock cannot be acquired.
        """
        with with_lock(self._lock, timeout, operation):
            yield self

    def create(self, duration_seconds: int, label: str) -> Timer:
        """
        Register a new Idle timer whose remaining time equals its duration.

        :raises InvalidTimerError: If the duration is negative or the label is not a string.
        """
        with self._lock:
            timer_id = self._id_factory()
            if timer_id in self._timers:
                raise InvalidTimerError("Generated timer id is already in use", "id", timer_id)
            timer = Timer(timer_id, label, duration_seconds)
            self._timers[timer_id] = timer
        logger.info("Created timer %s (%r, %ds)", timer_id, label, duration_seconds)
        return timer

    def get(self, timer_id: str) -> Timer:
        with self._lock:
            try:
                return self._timers[timer_id]
            except KeyError:
                raise TimerNotFoundError(timer_id) from None

    def update(self, timer: Timer) -> Timer:
        """Replace the stored timer that has ``timer.id``."""
        with self._lock:
            if timer.id not in self._timers:
                raise TimerNotFoundError(timer.id)
            self._timers[timer.id] = timer
            return timer

    def delete(self, timer_id: str) -> None:
        with self._lock:
            if self._timers.pop(timer_id, None) is None:
                raise TimerNotFoundError(timer_id)
        logger.info("Deleted timer %s", timer_id)

    def list(self) -> List[Timer]:
        """Return the stored timers in insertion order."""
        with self._lock:
            return list(self._timers.values())

    def replace_all(self, timers: Iterable[Timer]) -> None:
        """
        Drop every stored timer and insert ``timers``. A later timer with the
        same id replaces an earlier one.
        """
        with self._lock:
            self._timers.clear()
            for timer in timers:
                self._timers[timer.id] = timer

    def clear(self) -> None:
        with self._lock:
            self._timers.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._timers)

    def __contains__(self, timer_id: object) -> bool:
        with self._lock:
            return timer_id in self._timers
