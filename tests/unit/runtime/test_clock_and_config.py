# tests/unit/runtime/test_clock_and_config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import time

import pytest

from countdown.core.errors import ConfigurationError, CountdownError
from countdown.runtime.clock import Clock, ManualClock, SystemClock
from countdown.runtime.config import CountdownConfig


# -----------------------------------------------------------------------------
# CLOCKS
# -----------------------------------------------------------------------------
def test_system_clock_returns_whole_seconds():
    """Test system clock returns whole seconds."""
    now = SystemClock().now()
    assert isinstance(now, int)
    assert abs(now - time.time()) < 5


def test_clocks_satisfy_protocol():
    """Test clocks satisfy protocol."""
    assert isinstance(SystemClock(), Clock)
    assert isinstance(ManualClock(), Clock)


def test_manual_clock_moves_only_when_told():
    """Test manual clock moves only when told."""
    clock = ManualClock(100)
    assert clock.now() == 100
    assert clock.advance(5) == 105
    clock.set(50)
    assert clock.now() == 50


def test_manual_clock_cannot_go_backwards_by_advance():
    """Test manual clock cannot go backwards by advance."""
    clock = ManualClock(100)
    with pytest.raises(CountdownError):
        clock.advance(-1)
    assert clock.now() == 100


# -----------------------------------------------------------------------------
# CONFIG
# -----------------------------------------------------------------------------
def test_config_defaults():
    """Test config defaults."""
    config = CountdownConfig()
    assert config.tick_interval == 0.5
    assert config.lock_timeout is None
    assert config.thread_join_timeout == 1.0
    assert config.announcement_window_seconds == 3


@pytest.mark.parametrize(
    "kwargs,field",
    [
        ({"tick_interval": 0}, "tick_interval"),
        ({"lock_timeout": -1}, "lock_timeout"),
        ({"thread_join_timeout": 0}, "thread_join_timeout"),
        ({"announcement_window_seconds": -2}, "announcement_window_seconds"),
    ],
)
def test_config_rejects_bad_values(kwargs, field):
    """Test config rejects bad values."""
    with pytest.raises(ConfigurationError) as exc_info:
        CountdownConfig(**kwargs)
    assert exc_info.value.field == field


def test_config_is_frozen():
    """Test config is frozen."""
    config = CountdownConfig()
    with pytest.raises(AttributeError):
        config.tick_interval = 2.0


def test_config_from_mapping_ignores_unknown_keys():
    """Test config from mapping ignores unknown keys."""
    config = CountdownConfig.from_mapping({"tick_interval": 1.0, "lock_timeout": 0.2, "theme": "dark"})
    assert config.tick_interval == 1.0
    assert config.lock_timeout == 0.2
