"""Ready-made `EventAction` implementations.

Most simulations only need one of a few shapes of action: run a function and
let it decide, run once and go away, or run at a fixed interval until some
time. These cover those cases; anything richer should subclass
`EventAction` directly.
"""
from __future__ import annotations

from typing import Callable, Optional

from .event import DELETE, EventAction, EventDisposition, Reschedule, T


class CallbackAction(EventAction[T]):
    """Adapt a plain function ``fn(t) -> EventDisposition`` to an action."""

    def __init__(self, fn: Callable[[T], EventDisposition[T]]) -> None:
        if not callable(fn):
            raise TypeError("fn must be callable")
        self._fn = fn

    def execute(self, execution_time: T) -> EventDisposition[T]:
        return self._fn(execution_time)

    def __repr__(self) -> str:
        return f"CallbackAction({getattr(self._fn, '__name__', self._fn)!r})"


class OneShot(EventAction[T]):
    """An action that calls a function once and is then deleted."""

    def __init__(self, fn: Callable[[T], None]) -> None:
        """
        Define an action that runs exactly once.

        Parameters:
            fn: Called with the execution time. Its return value is ignored.

        """
        self._fn = fn

    def execute(self, execution_time: T) -> EventDisposition[T]:
        self._fn(execution_time)
        return DELETE


class Periodic(EventAction[T]):  # pylint: disable=too-few-public-methods
    """An action that fires at a constant rate."""

    def __init__(self, interval, until: Optional[T] = None,
                 fn: Optional[Callable[[T], None]] = None) -> None:
        """
        Define an action that repeats every `interval` units of time.

        Parameters:
            interval: Time between executions
            until: Stop (delete) once executed at or after this time. None
                repeats forever.
            fn: Optional function called with the execution time on every run

        """
        self.interval = interval
        self.until = until
        self._fn = fn
        self.runs = 0

    def execute(self, execution_time: T) -> EventDisposition[T]:
        self.runs += 1
        if self._fn is not None:
            self._fn(execution_time)
        if self.until is not None and execution_time >= self.until:
            return DELETE
        return Reschedule(execution_time + self.interval)

    def __repr__(self) -> str:
        return f"Periodic(interval={self.interval!r}, until={self.until!r})"


def as_action(action) -> EventAction:
    """Return `action` if it is an EventAction, else wrap a callable."""
    if isinstance(action, EventAction):
        return action
    if callable(action):
        return CallbackAction(action)
    raise TypeError("action must be an EventAction or a callable")
