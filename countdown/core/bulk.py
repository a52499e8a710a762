# countdown/core/bulk.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Union

from countdown.core import transitions
from countdown.core.registry import TimerRegistry
from countdown.core.timer import Ended, Paused, Running, Timer

logger = logging.getLogger(__name__)

SnapshotEntry = Union[Timer, Mapping[str, Any]]


def pause_all(registry: TimerRegistry, now: int) -> List[str]:
    """
    Pause every running timer. Other timers are left alone.

    :return: Ids of the timers that were paused.
    """
    paused = []
    with registry.locked(operation="pause_all"):
        for timer in registry.list():
            if timer.is_running:
                transitions.pause(timer, now)
                paused.append(timer.id)
    logger.info("Paused %d timer(s)", len(paused))
    return paused


def resume_all(registry: TimerRegistry, now: int) -> List[str]:
    """
    Re-arm every Paused timer against ``now``. Idle and Ended timers stay put.

    :return: Ids of the timers that were resumed.
    """
    resumed = []
    with registry.locked(operation="resume_all"):
        for timer in registry.list():
            if isinstance(timer.phase, Paused):
                transitions.start(timer, now)
                resumed.append(timer.id)
    logger.info("Resumed %d timer(s)", len(resumed))
    return resumed


def _reconcile_snapshot_entry(timer: Timer, now: int) -> Timer:
    # The stored remaining time of a running entry is stale; only the deadline counts.
    if not timer.is_running:
        return timer
    if timer.end_time_unix > now:
        timer.remaining_seconds = timer.end_time_unix - now
    else:
        timer.remaining_seconds = 0
        timer.phase = Ended()
    return timer


def sync(registry: TimerRegistry, now: int, snapshot: Iterable[SnapshotEntry]) -> List[Timer]:
    """
    Replace the registry contents with ``snapshot``, typically state persisted by
    a previous session.

    Running entries are reconciled against ``now``: a deadline still in the future
    sets the remaining time, a deadline already passed ends the timer. Every other
    entry is stored as given. Entries may be Timer objects, which are copied, or
    wire-format mappings.

    :return: The timers now held by the registry.
    :raises InvalidTimerError: If a mapping entry is malformed; the registry is
                               left untouched in that case.
    """
    timers = []
    ended_on_load = 0
    for entry in snapshot:
        timer = entry.copy() if isinstance(entry, Timer) else Timer.from_dict(entry)
        was_running = timer.is_running
        timers.append(_reconcile_snapshot_entry(timer, now))
        if was_running and not timer.is_running:
            ended_on_load += 1

    with registry.locked(operation="sync"):
        registry.replace_all(timers)
        stored = registry.list()

    running = sum(1 for timer in stored if isinstance(timer.phase, Running))
    logger.info("Synced %d timer(s): %d running, %d ended on load", len(stored), running, ended_on_load)
    return stored
