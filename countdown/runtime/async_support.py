# countdown/runtime/async_support.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from countdown.runtime.context import TimerContext
from countdown.runtime.scheduler import BaseTickScheduler
from countdown.runtime.sinks import TickSink

logger = logging.getLogger(__name__)


class AsyncTickScheduler(BaseTickScheduler):
    """
    Runs tick passes as an asyncio task, for hosts whose UI or transport lives
    on an event loop.

    A pass never awaits while holding the registry lock, so the loop is only
    blocked for the duration of one bounded reconciliation.

    The registry lock is a thread lock taken on the event-loop thread. Unless
    ``lock_timeout`` is configured, a pass does not wait for it at all: when
    another thread holds the lock the pass is skipped with a warning and the
    next one retries, so the loop never stalls behind a slow caller.
    """

    def __init__(
        self,
        context: TimerContext,
        sink: Optional[TickSink] = None,
        interval: Optional[float] = None,
    ) -> None:
        super().__init__(context, sink, interval)
        self._task: Optional[asyncio.Task] = None

    def _lock_timeout(self) -> Optional[float]:
        timeout = self._context.config.lock_timeout
        return 0 if timeout is None else timeout

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self) -> None:
        """Run a pass every interval until cancelled."""
        logger.info("Async tick scheduler started (interval %.3fs)", self._interval)
        try:
            while True:
                await asyncio.sleep(self._interval)
                self._run_once()
        finally:
            logger.info("Async tick scheduler stopped")

    def start(self) -> asyncio.Task:
        """
        Schedule :meth:`run` on the running event loop.

        :return: The task driving the loop.
        """
        if self.is_running:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Cancel the loop task and wait for it to unwind."""
        task = self._task
        if task is None:
            return
        self._task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "AsyncTickScheduler":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()
