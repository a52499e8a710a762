# countdown/persistence/serializer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
JSON snapshot of the timer set in the wire/storage shape, as saved by the host
between sessions and handed back to ``TimerContext.sync`` on start-up.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional

from countdown.core.errors import InvalidTimerError
from countdown.core.timer import Timer

logger = logging.getLogger(__name__)


def dumps(timers: Iterable[Timer], indent: Optional[int] = None) -> str:
    """Serialize ``timers`` as a JSON list of timer records."""
    return json.dumps([timer.to_dict() for timer in timers], indent=indent)


def loads(text: str) -> List[Timer]:
    """
    Parse a JSON list of timer records.

    Running records keep their deadline; reconciliation against the clock is
    left to ``sync``.

    :raises InvalidTimerError: If the text is not a JSON list of valid records.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidTimerError(f"Snapshot is not valid JSON: {exc.msg}", "snapshot") from exc
    if not isinstance(data, list):
        raise InvalidTimerError("Snapshot must be a JSON list of timers", "snapshot", type(data).__name__)

    timers = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise InvalidTimerError(f"Snapshot entry {index} is not an object", "snapshot", record)
        timers.append(Timer.from_dict(record))
    logger.debug("Loaded %d timer(s) from snapshot", len(timers))
    return timers
