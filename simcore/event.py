"""Event, action and disposition types stored in the event queue.

An `Event` pairs an execution time with an `EventAction`. When the event is
dispatched the action runs and reports an `EventDisposition`: either delete
itself, or reschedule at a new time. Rescheduling moves the same action
object into a fresh `Event`; actions are never copied.

Time is generic. Anything ordered, subtractable and printable works: ints,
floats, or `datetime.datetime` paired with `datetime.timedelta` intervals.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

_DELETE = "delete"
_RESCHEDULE = "reschedule"


@dataclass(frozen=True)
class EventDisposition(Generic[T]):
    """Outcome of executing an action.

    Use the factories rather than the constructor:
    `EventDisposition.delete()` and `EventDisposition.reschedule(time)`.
    """

    kind: str
    time: Optional[T] = None

    def __post_init__(self) -> None:
        if self.kind not in (_DELETE, _RESCHEDULE):
            raise ValueError(f"unknown disposition kind: {self.kind!r}")
        if self.kind == _RESCHEDULE and self.time is None:
            raise ValueError("a reschedule disposition needs a time")

    @classmethod
    def delete(cls) -> "EventDisposition[Any]":
        return DELETE

    @classmethod
    def reschedule(cls, time: T) -> "EventDisposition[T]":
        return cls(_RESCHEDULE, time)

    @property
    def is_delete(self) -> bool:
        return self.kind == _DELETE

    @property
    def is_reschedule(self) -> bool:
        return self.kind == _RESCHEDULE

    def __repr__(self) -> str:  # pragma: no cover - trivial
        if self.is_delete:
            return "Delete"
        return f"Reschedule({self.time!r})"


DELETE: EventDisposition[Any] = EventDisposition(_DELETE)


def Reschedule(time: T) -> EventDisposition[T]:
    """Shorthand for `EventDisposition.reschedule(time)`."""
    return EventDisposition.reschedule(time)


class EventAction(abc.ABC, Generic[T]):
    """Something that happens at a point in simulated time."""

    @abc.abstractmethod
    def execute(self, execution_time: T) -> EventDisposition[T]:
        """
        Run the action at `execution_time` and decide what happens next.

        Returns:
          `DELETE` to drop the action, or `Reschedule(t)` to run it again
          at time `t`.

        """


@dataclass(frozen=True, eq=False)
class Event(Generic[T]):
    """A scheduled (time, action) pair.

    Comparisons are in the priority sense: an earlier event is *greater*
    than a later one, so `sorted(events, reverse=True)` lists events in
    dispatch order. Events with equal times compare equal whatever their
    actions are.
    """

    execution_time: T
    action: EventAction[T]

    def reschedule(self, time: T) -> "Event[T]":
        """Return the successor event carrying this event's action."""
        return Event(time, self.action)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.execution_time == other.execution_time

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.execution_time != other.execution_time

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.execution_time > other.execution_time

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.execution_time >= other.execution_time

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.execution_time < other.execution_time

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.execution_time <= other.execution_time

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self.execution_time}"
