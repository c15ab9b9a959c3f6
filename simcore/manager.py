"""Time-ordered event queue and the simulation loop that drains it.

`EventManager` keeps pending events in a binary heap ordered by execution
time. `run` repeatedly pops the earliest event, hands it to an
`EventExecutor`, and puts the action back into the queue when it asks to be
rescheduled.

The loop ends only when simulated time reaches `max_time`. If the queue
empties before that, time can no longer advance and the loop keeps polling
the empty queue forever. Pass ``stop_when_drained=True`` to end the run
instead.
"""
from __future__ import annotations

from heapq import heappush, heappop
import logging
from typing import Any, Callable, Generic, List, Optional, Tuple, TYPE_CHECKING, Union

from .actions import as_action
from .event import Event, EventAction, EventDisposition, T
from .executor import EventExecutor, LogSink

if TYPE_CHECKING:
    from .config import RunConfig

_logger = logging.getLogger(__name__)


class EventManager(Generic[T]):
    """Min-priority queue of Events plus the dispatch loop.

    Events with the same execution time have an undefined relative order.

    The standard way to use this class is to:
    - Create the EventManager
    - Add one or more Events (or `schedule` actions)
    - Call EventManager.run()
    """

    def __init__(self) -> None:
        # Heap entries are (execution_time, event). Ties fall through to
        # Event equality, which is by time only, so no secondary key exists.
        self._queue: List[Tuple[T, Event[T]]] = []

    def add(self, *events: Event[T]) -> None:
        """
        Add event(s) to the queue.

        Parameters:
            events: The events to be scheduled

        """
        for event in events:
            if not isinstance(event, Event):
                raise TypeError("event must be an Event instance")
            _logger.debug("enqueue: %s", event)
            heappush(self._queue, (event.execution_time, event))

    def schedule(self, time: T, action: Union[EventAction[T], Callable[[T], EventDisposition[T]]]) -> Event[T]:
        """Wrap `action` in an Event at `time`, add it, and return the Event.

        `action` may be an `EventAction` or a plain function
        ``fn(t) -> EventDisposition``.
        """
        event = Event(time, as_action(action))
        self.add(event)
        return event

    def next(self) -> Optional[Event[T]]:
        """Remove and return the earliest event, or None if the queue is empty."""
        if not self._queue:
            return None
        _time, event = heappop(self._queue)
        return event

    def peek(self) -> Optional[Event[T]]:
        """Return the earliest event without removing it."""
        if not self._queue:
            return None
        return self._queue[0][1]

    def pending(self) -> List[Event[T]]:
        """Snapshot of queued events in dispatch order."""
        return sorted((event for _time, event in self._queue), reverse=True)

    def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def run(self, start_time: T, max_time: T, log_interval: Any,
            log_sink: Optional[LogSink] = None,
            stop_when_drained: bool = False) -> EventExecutor[T]:
        """Dispatch events until simulated time reaches `max_time`.

        The bound is checked before each pop, so an event at or past
        `max_time` that is popped still executes.

        Args:
            start_time: Initial simulated time.
            max_time: The loop exits once the current time is >= this.
            log_interval: Minimum simulated time between progress lines.
            log_sink: Optional callable receiving each progress line.
            stop_when_drained: End the run when the queue is empty rather
                than waiting for time to reach `max_time` (which cannot
                happen once nothing is queued).

        Returns:
            The EventExecutor used for the run.
        """
        executor: EventExecutor[T] = EventExecutor(start_time, log_interval, log_sink)
        current_time = start_time
        warned = False
        while current_time < max_time:
            event = self.next()
            if event is None:
                if not warned:
                    _logger.warning("event queue drained at t=%s before max_time=%s",
                                    current_time, max_time)
                    warned = True
                if stop_when_drained:
                    break
                continue
            current_time = event.execution_time
            disposition = executor.execute(event)
            if disposition.is_reschedule:
                self.add(event.reschedule(disposition.time))
        _logger.debug("run finished at t=%s after %d dispatch(es)",
                      current_time, executor.dispatched)
        return executor

    def run_config(self, config: "RunConfig", log_sink: Optional[LogSink] = None) -> EventExecutor[T]:
        """Run with the parameters held in a `RunConfig`."""
        return self.run(config.start_time, config.max_time, config.log_interval,
                        log_sink=log_sink, stop_when_drained=config.stop_when_drained)
