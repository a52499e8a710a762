# countdown/runtime/context.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from countdown.core import bulk, transitions
from countdown.core.bulk import SnapshotEntry
from countdown.core.registry import TimerRegistry
from countdown.core.timer import Timer
from countdown.runtime.clock import Clock, SystemClock
from countdown.runtime.config import CountdownConfig

logger = logging.getLogger(__name__)


class TimerHooks:
    """
    Base class for objects that follow timer lifecycle events which never show
    up in the tick stream. Override the methods of interest; the defaults do
    nothing.

    Hooks run after the registry lock is released, so they may call back into
    the context.
    """

    def on_reset(self, timer_id: str) -> None:
        """Called after a timer was reset to its full duration."""

    def on_remove(self, timer_ids: List[str]) -> None:
        """Called after timers left the registry (delete, clear_all or sync)."""


class TimerContext:
    """
    Application-wide owner of the timer registry, the clock and the lock policy.

    This is the operation surface used by the UI/command layer. Every call takes
    the registry lock for its whole duration, reads the clock once, applies one
    transition (or one bulk pass) and returns a copy of the affected timer, so
    callers never hold references into the registry.

    The same instance is handed to the tick scheduler, which contends for the
    same lock.
    """

    def __init__(
        self,
        registry: Optional[TimerRegistry] = None,
        clock: Optional[Clock] = None,
        config: Optional[CountdownConfig] = None,
    ) -> None:
        self._registry = registry if registry is not None else TimerRegistry()
        self._clock = clock if clock is not None else SystemClock()
        self._config = config if config is not None else CountdownConfig()
        self._hooks: List[TimerHooks] = []

    @property
    def registry(self) -> TimerRegistry:
        return self._registry

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def config(self) -> CountdownConfig:
        return self._config

    def _locked(self, operation: str):
        return self._registry.locked(timeout=self._config.lock_timeout, operation=operation)

    # ----- Hooks -----
    def register_hook(self, hook: TimerHooks) -> None:
        if hook not in self._hooks:
            self._hooks.append(hook)

    def unregister_hook(self, hook: TimerHooks) -> None:
        if hook in self._hooks:
            self._hooks.remove(hook)

    def _notify(self, event: str, *args) -> None:
        for hook in list(self._hooks):
            try:
                getattr(hook, event)(*args)
            except Exception:
                logger.exception("Hook %r failed on %s", hook, event)

    # ----- Single-timer operations -----
    def create(self, duration_seconds: int, label: str) -> Timer:
        with self._locked("create"):
            return self._registry.create(duration_seconds, label).copy()

    def get(self, timer_id: str) -> Timer:
        with self._locked("get"):
            return self._registry.get(timer_id).copy()

    def list(self) -> List[Timer]:
        with self._locked("list"):
            return [timer.copy() for timer in self._registry.list()]

    def start(self, timer_id: str) -> Timer:
        with self._locked("start"):
            timer = self._registry.get(timer_id)
            return transitions.start(timer, self._clock.now()).copy()

    def pause(self, timer_id: str) -> Timer:
        with self._locked("pause"):
            timer = self._registry.get(timer_id)
            return transitions.pause(timer, self._clock.now()).copy()

    def reset(self, timer_id: str) -> Timer:
        with self._locked("reset"):
            timer = transitions.reset(self._registry.get(timer_id)).copy()
        self._notify("on_reset", timer_id)
        return timer

    def delete(self, timer_id: str) -> None:
        with self._locked("delete"):
            self._registry.delete(timer_id)
        self._notify("on_remove", [timer_id])

    def extend(self, timer_id: str, delta_seconds: int) -> Timer:
        with self._locked("extend"):
            timer = self._registry.get(timer_id)
            return transitions.extend(timer, delta_seconds, self._clock.now()).copy()

    def edit(self, timer_id: str, duration_seconds: Optional[int] = None, label: Optional[str] = None) -> Timer:
        with self._locked("edit"):
            timer = self._registry.get(timer_id)
            return transitions.edit(timer, self._clock.now(), duration_seconds, label).copy()

    # ----- Bulk operations -----
    def pause_all(self) -> None:
        with self._locked("pause_all"):
            bulk.pause_all(self._registry, self._clock.now())

    def resume_all(self) -> None:
        with self._locked("resume_all"):
            bulk.resume_all(self._registry, self._clock.now())

    def sync(self, timers: Iterable[SnapshotEntry]) -> None:
        """
        Replace every timer with ``timers`` (Timer objects or wire-format
        mappings), reconciling running ones against the current time.
        Hooks hear about the ids the snapshot dropped.
        """
        with self._locked("sync"):
            before = [timer.id for timer in self._registry.list()]
            stored = bulk.sync(self._registry, self._clock.now(), timers)
        kept = {timer.id for timer in stored}
        removed = [timer_id for timer_id in before if timer_id not in kept]
        if removed:
            self._notify("on_remove", removed)

    def clear_all(self) -> None:
        with self._locked("clear_all"):
            removed = [timer.id for timer in self._registry.list()]
            self._registry.clear()
        logger.info("Cleared %d timer(s)", len(removed))
        if removed:
            self._notify("on_remove", removed)
