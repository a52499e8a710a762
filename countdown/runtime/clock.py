# countdown/runtime/clock.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
import time
from typing import Protocol, runtime_checkable

from countdown.core.errors import CountdownError


@runtime_checkable
class Clock(Protocol):
    """
    Source of the current wall-clock time in whole unix seconds.

    Deadlines are absolute instants on this clock, so every consumer in one
    process must share the same clock instance.
    """

    def now(self) -> int:
        ...


class SystemClock:
    """Wall clock of the host, truncated to whole seconds."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """
    A clock that only moves when told to. Used to drive timers deterministically,
    e.g. when replaying a session or in tests.
    """

    def __init__(self, start: int = 0) -> None:
        self._now = start
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._now

    def set(self, value: int) -> None:
        with self._lock:
            self._now = value

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new time."""
        if seconds < 0:
            raise CountdownError("ManualClock cannot move backwards", {"seconds": seconds})
        with self._lock:
            self._now += seconds
            return self._now
