# countdown/core/formatting.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Optional

from countdown.core.timer import Ended, Timer


def format_time(total_seconds: int, force_hours: bool = False) -> str:
    """
    Render a second count as ``MM:SS``, or ``HH:MM:SS`` once an hour is reached
    or when ``force_hours`` is set. Negative input renders as zero.
    """
    seconds = max(0, int(total_seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0 or force_hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def projected_end_time(timer: Timer, now: int) -> Optional[int]:
    """
    Unix time at which ``timer`` finishes: its deadline while running, or when it
    would finish if started at ``now`` while Idle or Paused. Ended timers have no
    projection.
    """
    if timer.is_running:
        return timer.end_time_unix
    if isinstance(timer.phase, Ended):
        return None
    return now + timer.remaining_seconds
