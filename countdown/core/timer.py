# countdown/core/timer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from countdown.core.errors import InvalidTimerError

logger = logging.getLogger(__name__)


class TimerStatus(Enum):
    """Lifecycle status of a countdown timer.

    Values are the names used in the wire/storage representation.
    """

    IDLE = "Idle"  # Created or reset, never armed
    RUNNING = "Running"  # Counting down against a deadline
    PAUSED = "Paused"  # Halted with remaining time kept
    ENDED = "Ended"  # Reached zero


@dataclass(frozen=True)
class Idle:
    status: ClassVar[TimerStatus] = TimerStatus.IDLE
    end_time_unix: ClassVar[Optional[int]] = None


@dataclass(frozen=True)
class Running:
    """
    The only phase that carries a deadline. A timer is running exactly when its
    phase is a Running instance, so status and deadline can never disagree.
    """

    end_time_unix: int
    status: ClassVar[TimerStatus] = TimerStatus.RUNNING


@dataclass(frozen=True)
class Paused:
    status: ClassVar[TimerStatus] = TimerStatus.PAUSED
    end_time_unix: ClassVar[Optional[int]] = None


@dataclass(frozen=True)
class Ended:
    status: ClassVar[TimerStatus] = TimerStatus.ENDED
    end_time_unix: ClassVar[Optional[int]] = None


Phase = Union[Idle, Running, Paused, Ended]

_PHASE_TYPES = (Idle, Running, Paused, Ended)


def saturating_sub(a: int, b: int) -> int:
    """Return ``a - b`` floored at zero."""
    return a - b if a > b else 0


def _check_seconds(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimerError(f"{field} must be an integer number of seconds", field, value)
    if value < 0:
        raise InvalidTimerError(f"{field} cannot be negative", field, value)
    return value


class Timer:
    """
    One countdown: identity, display label, configured duration, cached remaining
    time and the current phase.

    ``status`` and ``end_time_unix`` are read-only views of the phase. While the
    timer is running ``remaining_seconds`` is only a cache refreshed by transitions
    and ticks; use :meth:`remaining_at` for the value derived from the deadline.
    """

    def __init__(
        self,
        timer_id: str,
        label: str,
        duration_seconds: int,
        remaining_seconds: Optional[int] = None,
        phase: Optional[Phase] = None,
    ) -> None:
        """
        :param timer_id: Opaque identifier, stable for the timer's lifetime.
        :param label: Free-form display text.
        :param duration_seconds: Configured total length.
        :param remaining_seconds: Last known remaining time, defaults to the duration.
        :param phase: Initial phase, defaults to Idle.
        """
        if not isinstance(timer_id, str) or not timer_id:
            raise InvalidTimerError("Timer id must be a non-empty string", "id", timer_id)
        self._id = timer_id
        self.label = label
        self.duration_seconds = duration_seconds
        self.remaining_seconds = duration_seconds if remaining_seconds is None else remaining_seconds
        self.phase = Idle() if phase is None else phase

    @property
    def id(self) -> str:
        return self._id

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        if not isinstance(value, str):
            raise InvalidTimerError("label must be a string", "label", value)
        self._label = value

    @property
    def duration_seconds(self) -> int:
        return self._duration_seconds

    @duration_seconds.setter
    def duration_seconds(self, value: int) -> None:
        self._duration_seconds = _check_seconds("duration_seconds", value)

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @remaining_seconds.setter
    def remaining_seconds(self, value: int) -> None:
        self._remaining_seconds = _check_seconds("remaining_seconds", value)

    @property
    def phase(self) -> Phase:
        return self._phase

    @phase.setter
    def phase(self, value: Phase) -> None:
        if not isinstance(value, _PHASE_TYPES):
            raise InvalidTimerError("phase must be Idle, Running, Paused or Ended", "phase", value)
        if isinstance(value, Running):
            _check_seconds("end_time_unix", value.end_time_unix)
        self._phase = value

    @property
    def status(self) -> TimerStatus:
        return self._phase.status

    @property
    def end_time_unix(self) -> Optional[int]:
        return self._phase.end_time_unix

    @property
    def is_running(self) -> bool:
        return isinstance(self._phase, Running)

    def remaining_at(self, now: int) -> int:
        """
        Remaining time as of ``now``. Derived from the deadline while running,
        otherwise the stored value.
        """
        if isinstance(self._phase, Running):
            return saturating_sub(self._phase.end_time_unix, now)
        return self._remaining_seconds

    def copy(self) -> "Timer":
        return Timer(self._id, self._label, self._duration_seconds, self._remaining_seconds, self._phase)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire/storage representation of this timer."""
        return {
            "id": self._id,
            "label": self._label,
            "duration_seconds": self._duration_seconds,
            "remaining_seconds": self._remaining_seconds,
            "status": self.status.value,
            "end_time_unix": self.end_time_unix,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Timer":
        """
        Build a timer from its wire/storage representation.

        A record whose status and deadline disagree is repaired rather than
        rejected: a Running record without a deadline becomes Paused, and a
        deadline on any other status is dropped.

        :param data: Mapping with id, label, duration_seconds, remaining_seconds,
                     status and optionally end_time_unix.
        :raises InvalidTimerError: If a field is missing or out of its domain.
        """
        for key in ("id", "label", "duration_seconds", "remaining_seconds", "status"):
            if key not in data:
                raise InvalidTimerError(f"Timer record is missing '{key}'", key)

        try:
            status = TimerStatus(data["status"])
        except ValueError:
            raise InvalidTimerError(f"Unknown timer status {data['status']!r}", "status", data["status"]) from None

        end_time_unix = data.get("end_time_unix")
        phase: Phase
        if status is TimerStatus.RUNNING:
            if end_time_unix is None:
                logger.warning("Timer %s is Running without a deadline; loading it as Paused", data["id"])
                phase = Paused()
            else:
                phase = Running(end_time_unix)
        else:
            if end_time_unix is not None:
                logger.warning("Dropping deadline of non-running timer %s (%s)", data["id"], status.value)
            phase = {TimerStatus.IDLE: Idle, TimerStatus.PAUSED: Paused, TimerStatus.ENDED: Ended}[status]()

        return cls(
            data["id"],
            data["label"],
            data["duration_seconds"],
            data["remaining_seconds"],
            phase,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timer):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"Timer(id={self._id!r}, label={self._label!r}, duration_seconds={self._duration_seconds}, "
            f"remaining_seconds={self._remaining_seconds}, status={self.status.value}, "
            f"end_time_unix={self.end_time_unix})"
        )


@dataclass(frozen=True)
class TimerTick:
    """
    Notification emitted for a running timer on every tick pass.
    """

    id: str
    remaining_seconds: int
    status: TimerStatus
    end_time_unix: Optional[int]

    @classmethod
    def from_timer(cls, timer: Timer) -> "TimerTick":
        return cls(timer.id, timer.remaining_seconds, timer.status, timer.end_time_unix)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "remaining_seconds": self.remaining_seconds,
            "status": self.status.value,
            "end_time_unix": self.end_time_unix,
        }
