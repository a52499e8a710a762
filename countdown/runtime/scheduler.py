# countdown/runtime/scheduler.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from countdown.core import transitions
from countdown.core.errors import ConfigurationError, LockFailureError
from countdown.core.timer import TimerTick
from countdown.runtime.context import TimerContext
from countdown.runtime.sinks import TickSink, null_sink

logger = logging.getLogger(__name__)


class BaseTickScheduler:
    """
    One reconciliation pass over the registry, shared by the thread and asyncio
    schedulers.

    A pass holds the registry lock while it reconciles running timers and
    releases it before handing notifications to the sink.
    """

    def __init__(
        self,
        context: TimerContext,
        sink: Optional[TickSink] = None,
        interval: Optional[float] = None,
    ) -> None:
        """
        :param context: Timer context owning the registry and the clock.
        :param sink: Callable receiving one TimerTick per running timer per pass.
        :param interval: Seconds between passes, defaults to the context config.
        """
        self._context = context
        self._sink = sink or null_sink
        self._interval = interval if interval is not None else context.config.tick_interval
        if self._interval <= 0:
            raise ConfigurationError("Tick interval must be positive", "interval")

    @property
    def interval(self) -> float:
        return self._interval

    def _lock_timeout(self) -> Optional[float]:
        return self._context.config.lock_timeout

    def tick(self, now: Optional[int] = None) -> List[TimerTick]:
        """
        Run one pass: refresh every running timer from its deadline, end the ones
        that reached zero, and notify the sink once per timer that was running
        when the pass began. Timers that are not running are skipped silently.

        :param now: Time to reconcile against, defaults to the context clock.
        :return: The notifications emitted.
        :raises LockFailureError: If the registry lock cannot be acquired.
        """
        if now is None:
            now = self._context.clock.now()

        ticks = []
        registry = self._context.registry
        with registry.locked(timeout=self._lock_timeout(), operation="tick"):
            for timer in registry.list():
                if not timer.is_running:
                    continue
                if transitions.reconcile(timer, now):
                    logger.info("Timer %s (%r) ended", timer.id, timer.label)
                ticks.append(TimerTick.from_timer(timer))

        for tick in ticks:
            self._emit(tick)
        return ticks

    def _emit(self, tick: TimerTick) -> None:
        try:
            self._sink(tick)
        except Exception:
            # The next pass re-emits the current state, so a failed delivery is not retried.
            logger.exception("Tick sink failed for timer %s", tick.id)

    def _run_once(self) -> None:
        try:
            self.tick()
        except LockFailureError as exc:
            logger.warning("Skipping tick: %s", exc.message)


class TickScheduler(BaseTickScheduler):
    """
    Runs tick passes on a background thread at a fixed interval until stopped.

    Example:
        scheduler = TickScheduler(context, sink=print)
        scheduler.start()
        ...
        scheduler.stop()
    """

    def __init__(
        self,
        context: TimerContext,
        sink: Optional[TickSink] = None,
        interval: Optional[float] = None,
    ) -> None:
        super().__init__(context, sink, interval)
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        with self._state_lock:
            return self._running

    def run(self) -> None:
        """
        Block, running a pass every interval, until :meth:`stop` is called.
        Returns immediately if the loop is already running.
        """
        with self._state_lock:
            if self._running:
                return
            self._stop_event.clear()
        self._loop()

    def _loop(self) -> None:
        with self._state_lock:
            if self._running:
                return
            self._running = True

        logger.info("Tick scheduler started (interval %.3fs)", self._interval)
        try:
            while not self._stop_event.wait(self._interval):
                self._run_once()
        finally:
            with self._state_lock:
                self._running = False
            logger.info("Tick scheduler stopped")

    def start(self) -> None:
        """Run the loop on a daemon thread."""
        with self._state_lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._loop, name="countdown-tick", daemon=True)
            self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Signal the loop to stop and wait for the thread to finish its current pass.

        :param timeout: Seconds to wait for the thread, defaults to the config value.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout if timeout is not None else self._context.config.thread_join_timeout)
            if thread.is_alive():
                logger.warning("Tick thread did not stop within the join timeout")
            else:
                self._thread = None

    def __enter__(self) -> "TickScheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
