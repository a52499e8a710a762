# countdown/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from countdown.core.errors import LockFailureError


def get_lock() -> threading.RLock:
    """
    Provide a new reentrant lock. Registry helpers take the lock themselves and
    may be called by code that already holds it.
    """
    return threading.RLock()


@contextmanager
def with_lock(lock: threading.RLock, timeout: Optional[float] = None, operation: Optional[str] = None) -> Iterator[None]:
    """
    Acquire ``lock`` for the duration of the with-block.

    :param lock: Lock to acquire.
    :param timeout: Seconds to wait, or None to block until acquired.
    :param operation: Name of the guarded operation, reported on failure.
    :raises LockFailureError: If the lock cannot be acquired.
    """
    try:
        acquired = lock.acquire() if timeout is None else lock.acquire(timeout=timeout)
    except RuntimeError as exc:
        raise LockFailureError(f"Could not acquire timer lock: {exc}", operation) from exc
    if not acquired:
        raise LockFailureError(f"Timed out after {timeout}s waiting for timer lock", operation)
    try:
        yield
    finally:
        lock.release()
