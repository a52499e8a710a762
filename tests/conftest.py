# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading

import pytest

from countdown.core.registry import TimerRegistry
from countdown.core.timer import Timer
from countdown.runtime.clock import ManualClock
from countdown.runtime.config import CountdownConfig
from countdown.runtime.context import TimerContext

T0 = 1_700_000_000


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def clock():
    """A manual clock parked at a fixed unix time."""
    return ManualClock(T0)


@pytest.fixture
def registry():
    return TimerRegistry()


@pytest.fixture
def context(registry, clock):
    """A timer context driven by the manual clock."""
    return TimerContext(registry=registry, clock=clock, config=CountdownConfig(tick_interval=0.01))


@pytest.fixture
def make_timer():
    """Factory for detached timers that are not held by any registry."""
    counter = {"n": 0}

    def _make_timer(duration_seconds: int = 60, label: str = "Quiz", **kwargs) -> Timer:
        counter["n"] += 1
        return Timer(f"timer-{counter['n']}", label, duration_seconds, **kwargs)

    return _make_timer


@pytest.fixture
def cleanup_threads():
    yield
    # Join tick threads a failing test left behind
    for thread in threading.enumerate():
        if thread != threading.current_thread() and thread.is_alive() and thread.name == "countdown-tick":
            thread.join(timeout=1.0)
