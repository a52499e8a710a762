# countdown/runtime/sinks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import queue
from typing import Callable, List, Optional

from countdown.core.timer import TimerTick

TickSink = Callable[[TimerTick], None]


def null_sink(tick: TimerTick) -> None:
    pass


class QueueSink:
    """
    Collects tick notifications in a thread-safe FIFO so another thread (a UI
    loop, a test) can pick them up at its own pace.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: "queue.Queue[TimerTick]" = queue.Queue(maxsize)

    def __call__(self, tick: TimerTick) -> None:
        self._queue.put(tick)

    def get(self, timeout: Optional[float] = None) -> TimerTick:
        return self._queue.get(timeout=timeout)

    def drain(self) -> List[TimerTick]:
        """Return every queued notification and empty the queue."""
        ticks = []
        while True:
            try:
                ticks.append(self._queue.get_nowait())
            except queue.Empty:
                return ticks


class CompositeSink:
    """Forwards each notification to several sinks, in registration order."""

    def __init__(self, *sinks: TickSink) -> None:
        self._sinks: List[TickSink] = list(sinks)

    def add(self, sink: TickSink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)

    def __call__(self, tick: TimerTick) -> None:
        for sink in list(self._sinks):
            sink(tick)
