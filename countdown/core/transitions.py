# countdown/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Single-timer transitions.

Every function mutates the given timer in place and returns it. None of them
touch the registry or read the clock; the current time is passed in.
"""

from __future__ import annotations

import logging
from typing import Optional

from countdown.core.errors import InvalidTimerError
from countdown.core.timer import Ended, Idle, Paused, Running, Timer, saturating_sub

logger = logging.getLogger(__name__)


def _refresh(timer: Timer, now: int) -> None:
    # Bring the cached remaining time in line with the deadline before using it.
    if timer.is_running:
        timer.remaining_seconds = timer.remaining_at(now)


def start(timer: Timer, now: int) -> Timer:
    """
    Arm the timer: the deadline becomes ``now + remaining_seconds``.
    Starting a running timer leaves its deadline untouched.
    """
    if timer.is_running:
        return timer
    timer.phase = Running(now + timer.remaining_seconds)
    logger.debug("Started timer %s, deadline %d", timer.id, timer.end_time_unix)
    return timer


def pause(timer: Timer, now: int) -> Timer:
    """
    Halt a running timer, keeping the time left until its deadline.
    Timers that are not running are returned unchanged.
    """
    if not timer.is_running:
        return timer
    timer.remaining_seconds = saturating_sub(timer.end_time_unix, now)
    timer.phase = Paused()
    logger.debug("Paused timer %s with %d seconds left", timer.id, timer.remaining_seconds)
    return timer


def reset(timer: Timer) -> Timer:
    timer.remaining_seconds = timer.duration_seconds
    timer.phase = Idle()
    logger.debug("Reset timer %s", timer.id)
    return timer


def extend(timer: Timer, delta_seconds: int, now: int) -> Timer:
    """
    Add time to a timer. The duration and remaining time both grow by
    ``delta_seconds``; a running timer's deadline moves out by the same amount.

    An Ended timer is revived: it starts running again with the added time.

    :param timer: Timer to extend.
    :param delta_seconds: Seconds to add, zero or more.
    :param now: Current wall-clock time in unix seconds.
    :raises InvalidTimerError: If ``delta_seconds`` is negative.
    """
    if isinstance(delta_seconds, bool) or not isinstance(delta_seconds, int) or delta_seconds < 0:
        raise InvalidTimerError("Extra time must be a non-negative integer", "delta_seconds", delta_seconds)

    _refresh(timer, now)
    timer.duration_seconds += delta_seconds
    timer.remaining_seconds += delta_seconds

    if timer.is_running:
        timer.phase = Running(timer.end_time_unix + delta_seconds)
    elif isinstance(timer.phase, Ended):
        timer.phase = Running(now + timer.remaining_seconds)
        logger.debug("Revived ended timer %s", timer.id)

    logger.debug("Extended timer %s by %d seconds", timer.id, delta_seconds)
    return timer


def edit(
    timer: Timer,
    now: int,
    duration_seconds: Optional[int] = None,
    label: Optional[str] = None,
) -> Timer:
    """
    Change a timer's label and/or configured duration.

    A duration change shifts the remaining time (and the deadline of a running
    timer) by the signed difference between the new and old durations, floored
    at zero. Afterwards an Ended timer that has time left again becomes Paused;
    it is never restarted, unlike :func:`extend`. A timer left with no time is
    forced to Ended whatever its previous status.

    :param timer: Timer to edit.
    :param now: Current wall-clock time in unix seconds.
    :param duration_seconds: New configured duration, or None to keep it.
    :param label: New label, or None to keep it.
    :raises InvalidTimerError: If the new duration is negative or the label is not
                               a string. The timer is left untouched in that case.
    """
    if duration_seconds is not None and (
        isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int) or duration_seconds < 0
    ):
        raise InvalidTimerError("Duration must be a non-negative integer", "duration_seconds", duration_seconds)
    if label is not None and not isinstance(label, str):
        raise InvalidTimerError("label must be a string", "label", label)

    if label is not None:
        timer.label = label

    if duration_seconds is None:
        return timer

    _refresh(timer, now)
    diff = duration_seconds - timer.duration_seconds
    timer.duration_seconds = duration_seconds
    timer.remaining_seconds = max(0, timer.remaining_seconds + diff)

    if timer.is_running:
        timer.phase = Running(max(0, timer.end_time_unix + diff))

    if isinstance(timer.phase, Ended) and timer.remaining_seconds > 0:
        timer.phase = Paused()
    elif timer.remaining_seconds == 0:
        timer.phase = Ended()

    logger.debug("Edited timer %s: duration %d, status %s", timer.id, duration_seconds, timer.status.value)
    return timer


def expire(timer: Timer, now: int) -> Timer:
    """
    Move a running timer whose deadline has passed to Ended. Anything else is
    returned unchanged.
    """
    if not timer.is_running or timer.remaining_at(now) > 0:
        return timer
    timer.remaining_seconds = 0
    timer.phase = Ended()
    logger.debug("Timer %s ended", timer.id)
    return timer


def reconcile(timer: Timer, now: int) -> bool:
    """
    Recompute a running timer's remaining time from its deadline and expire it
    when nothing is left.

    :return: True if the timer ended during this call.
    """
    if not timer.is_running:
        return False
    timer.remaining_seconds = timer.remaining_at(now)
    if timer.remaining_seconds == 0:
        expire(timer, now)
        return True
    return False
