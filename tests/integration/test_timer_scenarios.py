# tests/integration/test_timer_scenarios.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
End-to-end sessions driven through TimerContext and a tick scheduler on a
manual clock.
"""

from countdown import ManualClock, TimerContext, TimerStatus
from countdown.persistence import dumps, loads
from countdown.runtime.scheduler import BaseTickScheduler
from countdown.runtime.sinks import QueueSink


def make_session(start=0):
    clock = ManualClock(start)
    context = TimerContext(clock=clock)
    sink = QueueSink()
    return clock, context, BaseTickScheduler(context, sink), sink


def test_sixty_second_timer_runs_out():
    """Test sixty second timer runs out."""
    clock, context, scheduler, sink = make_session(0)
    timer = context.create(60, "Quiz")
    context.start(timer.id)
    assert context.get(timer.id).end_time_unix == 60

    clock.set(61)
    (tick,) = scheduler.tick()
    assert tick.status is TimerStatus.ENDED
    assert tick.remaining_seconds == 0

    stored = context.get(timer.id)
    assert stored.status is TimerStatus.ENDED
    assert stored.remaining_seconds == 0
    assert stored.end_time_unix is None


def test_pause_survives_long_gap_then_finishes():
    """Test pause survives long gap then finishes."""
    clock, context, scheduler, sink = make_session(1_000)
    timer = context.create(120, "Essay")
    context.start(timer.id)

    clock.advance(50)
    scheduler.tick()
    context.pause(timer.id)

    clock.advance(10_000)
    assert scheduler.tick() == []
    assert context.get(timer.id).remaining_seconds == 70

    context.start(timer.id)
    clock.advance(69)
    assert scheduler.tick()[0].remaining_seconds == 1
    clock.advance(1)
    assert scheduler.tick()[0].status is TimerStatus.ENDED


def test_extend_revives_finished_timer():
    """Test extend revives finished timer."""
    clock, context, scheduler, sink = make_session(0)
    timer = context.create(10, "Lab")
    context.start(timer.id)
    clock.advance(15)
    scheduler.tick()

    revived = context.extend(timer.id, 300)
    assert revived.status is TimerStatus.RUNNING
    assert revived.remaining_seconds == 300
    assert revived.end_time_unix == 15 + 300

    clock.advance(100)
    assert scheduler.tick()[0].remaining_seconds == 200


def test_edit_ended_timer_does_not_restart_it():
    """Test edit ended timer does not restart it."""
    clock, context, scheduler, sink = make_session(0)
    timer = context.create(10, "Lab")
    context.start(timer.id)
    clock.advance(10)
    scheduler.tick()

    edited = context.edit(timer.id, duration_seconds=70)
    assert edited.status is TimerStatus.PAUSED
    assert edited.remaining_seconds == 60
    clock.advance(30)
    assert scheduler.tick() == []


def test_shrinking_running_timer_past_elapsed_ends_it():
    """Test shrinking running timer past elapsed ends it."""
    clock, context, scheduler, sink = make_session(0)
    timer = context.create(600, "Exam")
    context.start(timer.id)
    clock.advance(400)

    edited = context.edit(timer.id, duration_seconds=300)
    assert edited.status is TimerStatus.ENDED
    assert scheduler.tick() == []


def test_independent_timers_with_bulk_pause_and_resume():
    """Test independent timers with bulk pause and resume."""
    clock, context, scheduler, sink = make_session(0)
    short = context.create(30, "short")
    long = context.create(300, "long")
    idle = context.create(90, "idle")
    context.start(short.id)
    context.start(long.id)

    clock.advance(20)
    context.pause_all()
    clock.advance(3_600)
    context.resume_all()

    remaining = {t.id: t.remaining_seconds for t in scheduler.tick()}
    assert remaining == {short.id: 10, long.id: 280}
    assert context.get(idle.id).status is TimerStatus.IDLE

    clock.advance(10)
    statuses = {t.id: t.status for t in scheduler.tick()}
    assert statuses == {short.id: TimerStatus.ENDED, long.id: TimerStatus.RUNNING}


def test_restore_from_snapshot_after_restart():
    """Test restore from snapshot after restart."""
    clock, context, scheduler, sink = make_session(5_000)
    done_soon = context.create(60, "soon")
    later = context.create(600, "later")
    paused = context.create(90, "paused")
    for timer in (done_soon, later, paused):
        context.start(timer.id)
    clock.advance(30)
    context.pause(paused.id)
    saved = dumps(context.list())

    # A new process comes up two minutes later.
    clock2, context2, scheduler2, sink2 = make_session(5_000 + 150)
    context2.sync(loads(saved))

    restored = {t.label: t for t in context2.list()}
    assert restored["soon"].status is TimerStatus.ENDED
    assert restored["later"].remaining_seconds == 450
    assert restored["paused"].status is TimerStatus.PAUSED
    assert restored["paused"].remaining_seconds == 60
    assert [t.id for t in scheduler2.tick()] == [later.id]
