# countdown/runtime/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from countdown.core.errors import ConfigurationError


@dataclass(frozen=True)
class CountdownConfig:
    """
    Runtime settings shared by the timer context and the tick schedulers.

    :param tick_interval: Seconds between reconciliation passes.
    :param lock_timeout: Seconds to wait for the registry lock, None to block.
    :param thread_join_timeout: Seconds to wait for the tick thread on stop.
    :param announcement_window_seconds: How far below its trigger an
                                        announcement may still fire.
    """

    tick_interval: float = 0.5
    lock_timeout: Optional[float] = None
    thread_join_timeout: float = 1.0
    announcement_window_seconds: int = 3

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise ConfigurationError("tick_interval must be positive", "tick_interval")
        if self.lock_timeout is not None and self.lock_timeout < 0:
            raise ConfigurationError("lock_timeout cannot be negative", "lock_timeout")
        if self.thread_join_timeout <= 0:
            raise ConfigurationError("thread_join_timeout must be positive", "thread_join_timeout")
        if self.announcement_window_seconds < 0:
            raise ConfigurationError("announcement_window_seconds cannot be negative", "announcement_window_seconds")

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "CountdownConfig":
        """Build a config from plain settings data, ignoring keys it does not know."""
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{key: value for key, value in settings.items() if key in known})
