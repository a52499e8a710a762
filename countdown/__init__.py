"""countdown: independent countdown timers with wall-clock reconciliation

This package tracks a set of countdown timers for a desktop utility. Each timer
can be created, started, paused, reset, extended, edited and bulk-paused or
resumed, while a background tick scheduler reconciles elapsed wall-clock time
and notifies a sink about every running timer.

Responsibilities:
    - Timer entity and registry
    - Single-timer transitions (start, pause, reset, extend, edit, expire)
    - Bulk operations (pause all, resume all, sync from a snapshot)
    - Periodic reconciliation against an injected clock

Interactions:
    - Host UI or command layer through TimerContext
    - Tick notifications through an injected sink
    - Persisted snapshots through persistence.serializer and TimerContext.sync

Cross-cutting Concerns:
    Thread Safety:
        - One exclusive, reentrant lock guards the registry
        - Operations and tick passes are serialized by that lock

    Error Handling:
        - CountdownError hierarchy in countdown.core.errors
        - Clock arithmetic saturates at zero

    Logging:
        - Standard library logging, one logger per module
        - No handlers installed by the library
"""

from countdown.core.errors import (
    ConfigurationError,
    CountdownError,
    InvalidTimerError,
    LockFailureError,
    TimerNotFoundError,
)
from countdown.core.registry import TimerRegistry
from countdown.core.timer import Ended, Idle, Paused, Running, Timer, TimerStatus, TimerTick
from countdown.runtime.async_support import AsyncTickScheduler
from countdown.runtime.clock import Clock, ManualClock, SystemClock
from countdown.runtime.config import CountdownConfig
from countdown.runtime.context import TimerContext, TimerHooks
from countdown.runtime.scheduler import TickScheduler
from countdown.runtime.sinks import CompositeSink, QueueSink

__version__ = "0.1.0"

__all__ = [
    # Errors
    "CountdownError",
    "TimerNotFoundError",
    "LockFailureError",
    "InvalidTimerError",
    "ConfigurationError",
    # Timer model
    "Timer",
    "TimerStatus",
    "TimerTick",
    "Idle",
    "Running",
    "Paused",
    "Ended",
    "TimerRegistry",
    # Runtime
    "TimerContext",
    "TimerHooks",
    "TickScheduler",
    "AsyncTickScheduler",
    "Clock",
    "SystemClock",
    "ManualClock",
    "CountdownConfig",
    "QueueSink",
    "CompositeSink",
]
