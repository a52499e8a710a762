# countdown/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class CountdownError(Exception):
    """
    Base exception class for errors raised by the countdown timer library.

    :param message: Human readable description of the failure.
    :param details: Optional structured data describing the failure.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TimerNotFoundError(CountdownError):
    """
    Raised when an operation names a timer identifier that is not registered.
    Recoverable; callers usually report it straight back to the user.
    """

    def __init__(self, timer_id: str) -> None:
        super().__init__("Timer not found", {"timer_id": timer_id})
        self.timer_id = timer_id


class LockFailureError(CountdownError):
    """
    Raised when exclusive access to the timer registry cannot be obtained.
    Fatal for the current call only.
    """

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message, {"operation": operation})
        self.operation = operation


class InvalidTimerError(CountdownError):
    """
    Raised when a timer field or a timer record holds a value outside its domain,
    for example a negative duration or an unknown status name.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class ConfigurationError(CountdownError):
    """
    Raised when a configuration value is rejected.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message, {"field": field})
        self.field = field
