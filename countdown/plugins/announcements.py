# countdown/plugins/announcements.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Scheduled spoken announcements driven by tick notifications.

An :class:`AnnouncementTracker` is plugged in as (or alongside) the tick sink.
Each timer gets its own copy of an announcement schedule; an entry fires once,
on the first tick whose remaining time falls inside the window just below its
trigger point. Speaking the text is left to the callback.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional

from countdown.core.errors import TimerNotFoundError
from countdown.core.timer import TimerStatus, TimerTick
from countdown.runtime.context import TimerContext, TimerHooks

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

NUMBER_WORDS = {
    1: "one",
    2: "two",
    3: "three",
    4: "four",
    5: "five",
    6: "six",
    7: "seven",
    8: "eight",
    9: "nine",
    10: "ten",
    15: "fifteen",
    20: "twenty",
    30: "thirty",
    45: "forty-five",
    60: "sixty",
}


@dataclass(frozen=True)
class AnnouncementEntry:
    id: str
    trigger_at_seconds: int
    message: str
    enabled: bool = True
    has_been_spoken: bool = False


@dataclass(frozen=True)
class Announcement:
    """A resolved announcement ready to be spoken. Lower priority values go first."""

    id: str
    timer_id: str
    text: str
    priority: int


DEFAULT_SCHEDULE = (
    AnnouncementEntry("default-60min", 3600, "{label}, you have one hour remaining."),
    AnnouncementEntry("default-30min", 1800, "{label}, you have thirty minutes remaining."),
    AnnouncementEntry("default-15min", 900, "{label}, you have fifteen minutes remaining."),
    AnnouncementEntry("default-10min", 600, "{label}, you have ten minutes remaining."),
    AnnouncementEntry("default-5min", 300, "{label}, you have five minutes remaining."),
    AnnouncementEntry("default-1min", 60, "{label}, you have one minute remaining."),
    AnnouncementEntry("default-end", 0, "Time is up for {label}. Stop writing. Put your pens down."),
)


def resolve_template(template: str, label: str, duration_seconds: int, remaining_seconds: int) -> str:
    """
    Substitute ``{name}`` placeholders in ``template``. Known names are label,
    program (same as label), remainingMinutes, remainingSeconds, remainingWords,
    elapsedMinutes and totalMinutes; unknown placeholders are left as written.
    """
    remaining_minutes = remaining_seconds // 60
    elapsed_seconds = max(0, duration_seconds - remaining_seconds)
    values = {
        "label": label,
        "program": label,
        "remainingMinutes": str(remaining_minutes),
        "remainingSeconds": str(remaining_seconds),
        "remainingWords": NUMBER_WORDS.get(remaining_minutes, f"{remaining_minutes} minutes"),
        "elapsedMinutes": str(elapsed_seconds // 60),
        "totalMinutes": str(duration_seconds // 60),
    }
    return _PLACEHOLDER.sub(lambda match: values.get(match.group(1), match.group(0)), template)


class AnnouncementTracker(TimerHooks):
    """
    Tick sink that fires each timer's scheduled announcements.

    Timers are picked up with the default schedule the first time a tick for
    them arrives; :meth:`set_schedule` replaces a timer's schedule and
    :meth:`reset` re-arms it.

    The tracker registers itself as a hook on the context: resetting a timer
    re-arms its schedule, and deleting, clearing or syncing it away drops the
    schedule.
    """

    def __init__(
        self,
        context: TimerContext,
        announce: Callable[[Announcement], None],
        default_schedule: Iterable[AnnouncementEntry] = DEFAULT_SCHEDULE,
        window_seconds: Optional[int] = None,
    ) -> None:
        """
        :param context: Timer context used to look up labels and durations.
        :param announce: Callback receiving each fired announcement.
        :param default_schedule: Schedule copied for newly seen timers.
        :param window_seconds: How far below its trigger an entry may still fire,
                               defaults to the context config.
        """
        self._context = context
        self._announce = announce
        self._default_schedule = tuple(default_schedule)
        self._window = (
            window_seconds if window_seconds is not None else context.config.announcement_window_seconds
        )
        self._schedules: Dict[str, List[AnnouncementEntry]] = {}
        self._lock = threading.Lock()
        context.register_hook(self)

    def close(self) -> None:
        """Stop following the context's reset and removal events."""
        self._context.unregister_hook(self)

    def on_reset(self, timer_id: str) -> None:
        self.reset(timer_id)

    def on_remove(self, timer_ids: List[str]) -> None:
        with self._lock:
            for timer_id in timer_ids:
                self._schedules.pop(timer_id, None)

    def schedule(self, timer_id: str) -> List[AnnouncementEntry]:
        with self._lock:
            return list(self._schedules.get(timer_id, self._default_schedule))

    def set_schedule(self, timer_id: str, entries: Iterable[AnnouncementEntry]) -> None:
        with self._lock:
            self._schedules[timer_id] = list(entries)

    def reset(self, timer_id: str) -> None:
        """Mark every entry of the timer's schedule as not yet spoken."""
        with self._lock:
            if timer_id in self._schedules:
                self._schedules[timer_id] = [replace(e, has_been_spoken=False) for e in self._schedules[timer_id]]

    def forget(self, timer_id: str) -> None:
        with self._lock:
            self._schedules.pop(timer_id, None)

    def _due(self, entry: AnnouncementEntry, remaining: int) -> bool:
        if not entry.enabled or entry.has_been_spoken:
            return False
        return entry.trigger_at_seconds - self._window <= remaining <= entry.trigger_at_seconds

    def __call__(self, tick: TimerTick) -> None:
        # An Ended tick is the pass on which the timer reached zero.
        if tick.status not in (TimerStatus.RUNNING, TimerStatus.ENDED):
            return

        with self._lock:
            entries = self._schedules.setdefault(tick.id, list(self._default_schedule))
            due = [entry for entry in entries if self._due(entry, tick.remaining_seconds)]
            if not due:
                return
            self._schedules[tick.id] = [
                replace(entry, has_been_spoken=True) if entry in due else entry for entry in entries
            ]

        try:
            timer = self._context.get(tick.id)
        except TimerNotFoundError:
            logger.debug("Timer %s was removed before its announcement could be resolved", tick.id)
            self.forget(tick.id)
            return

        for entry in due:
            text = resolve_template(entry.message, timer.label, timer.duration_seconds, tick.remaining_seconds)
            announcement = Announcement(
                id=f"{tick.id}-{entry.id}",
                timer_id=tick.id,
                text=text,
                priority=1 if entry.trigger_at_seconds == 0 else 2,
            )
            logger.info("Announcing %s: %s", announcement.id, text)
            self._announce(announcement)
