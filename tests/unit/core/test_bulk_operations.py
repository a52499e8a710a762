# tests/unit/core/test_bulk_operations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging

import pytest

from countdown.core import bulk, transitions
from countdown.core.errors import InvalidTimerError
from countdown.core.timer import Ended, Paused, Running, Timer, TimerStatus

NOW = 50_000


@pytest.fixture
def populated(registry):
    """One timer in each status: idle, running, paused, ended."""
    idle = registry.create(60, "idle")
    running = transitions.start(registry.create(60, "running"), NOW - 10)
    paused = registry.create(60, "paused")
    paused.remaining_seconds = 30
    paused.phase = Paused()
    ended = registry.create(60, "ended")
    ended.remaining_seconds = 0
    ended.phase = Ended()
    return idle, running, paused, ended


# -----------------------------------------------------------------------------
# PAUSE ALL / RESUME ALL
# -----------------------------------------------------------------------------
def test_pause_all_only_touches_running(registry, populated):
    """Test pause all only touches running."""
    idle, running, paused, ended = populated
    assert bulk.pause_all(registry, NOW) == [running.id]
    assert running.status is TimerStatus.PAUSED
    assert running.remaining_seconds == 50
    assert idle.status is TimerStatus.IDLE
    assert paused.remaining_seconds == 30
    assert ended.status is TimerStatus.ENDED
    assert not any(t.is_running for t in registry.list())


def test_resume_all_only_touches_paused(registry, populated):
    """Test resume all only touches paused."""
    idle, running, paused, ended = populated
    assert bulk.resume_all(registry, NOW) == [paused.id]
    assert paused.end_time_unix == NOW + 30
    assert running.end_time_unix == NOW + 50
    assert idle.status is TimerStatus.IDLE
    assert ended.status is TimerStatus.ENDED


def test_pause_all_then_resume_all_preserves_remaining(registry, populated):
    """Test pause all then resume all preserves remaining."""
    _, running, _, _ = populated
    bulk.pause_all(registry, NOW)
    bulk.resume_all(registry, NOW + 1_000)
    assert running.end_time_unix == NOW + 1_000 + 50


def test_bulk_on_empty_registry(registry):
    """Test bulk on empty registry."""
    assert bulk.pause_all(registry, NOW) == []
    assert bulk.resume_all(registry, NOW) == []


# -----------------------------------------------------------------------------
# SYNC
# -----------------------------------------------------------------------------
def test_sync_reconciles_running_entries(registry):
    """Test sync reconciles running entries."""
    snapshot = [
        {
            "id": "future",
            "label": "A",
            "duration_seconds": 600,
            "remaining_seconds": 600,
            "status": "Running",
            "end_time_unix": NOW + 100,
        },
        {
            "id": "past",
            "label": "B",
            "duration_seconds": 600,
            "remaining_seconds": 42,
            "status": "Running",
            "end_time_unix": NOW - 5,
        },
        {
            "id": "paused",
            "label": "C",
            "duration_seconds": 600,
            "remaining_seconds": 7,
            "status": "Paused",
            "end_time_unix": None,
        },
    ]
    stored = bulk.sync(registry, NOW, snapshot)

    assert [t.id for t in stored] == ["future", "past", "paused"]
    future = registry.get("future")
    assert future.remaining_seconds == 100
    assert future.end_time_unix == NOW + 100
    past = registry.get("past")
    assert past.status is TimerStatus.ENDED
    assert past.remaining_seconds == 0
    assert past.end_time_unix is None
    assert registry.get("paused").remaining_seconds == 7


def test_sync_deadline_exactly_now_ends_timer(registry):
    """Test sync deadline exactly now ends timer."""
    bulk.sync(registry, NOW, [Timer("t", "x", 60, 60, Running(NOW))])
    assert registry.get("t").status is TimerStatus.ENDED


def test_sync_replaces_existing_timers(registry):
    """Test sync replaces existing timers."""
    registry.create(60, "stale")
    bulk.sync(registry, NOW, [Timer("fresh", "new", 10)])
    assert [t.id for t in registry.list()] == ["fresh"]


def test_sync_copies_timer_entries(registry):
    """Test sync copies timer entries."""
    original = Timer("t", "x", 60, 60, Running(NOW + 30))
    bulk.sync(registry, NOW, [original])
    assert registry.get("t") is not original
    assert original.remaining_seconds == 60


def test_sync_with_empty_snapshot_clears(registry):
    """Test sync with empty snapshot clears."""
    registry.create(60, "stale")
    assert bulk.sync(registry, NOW, []) == []
    assert len(registry) == 0


def test_sync_bad_entry_leaves_registry_untouched(registry):
    """Test sync bad entry leaves registry untouched."""
    keep = registry.create(60, "keep")
    with pytest.raises(InvalidTimerError):
        bulk.sync(registry, NOW, [{"id": "broken", "status": "Idle"}])
    assert [t.id for t in registry.list()] == [keep.id]


def test_sync_logs_summary(registry, caplog):
    """Test sync logs summary."""
    snapshot = [
        Timer("a", "A", 60, 60, Running(NOW + 10)),
        Timer("b", "B", 60, 60, Running(NOW - 10)),
        Timer("c", "C", 60),
    ]
    with caplog.at_level(logging.INFO, logger="countdown.core.bulk"):
        bulk.sync(registry, NOW, snapshot)
    assert "Synced 3 timer(s): 1 running, 1 ended on load" in caplog.text
