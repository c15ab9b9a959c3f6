"""Dispatch helper that tracks simulated time and throttles progress logging."""
from __future__ import annotations

import logging
from typing import Callable, Generic, Optional

from .event import Event, EventDisposition, T

_logger = logging.getLogger(__name__)
# Progress lines have their own logger so they can be routed separately
# from diagnostics (see `simcore.config.configure_logging`).
progress_logger = logging.getLogger("simcore.progress")

LogSink = Callable[[str], None]


def default_sink(line: str) -> None:
    progress_logger.info(line)


class EventExecutor(Generic[T]):
    """Runs events one at a time on behalf of `EventManager.run`.

    The executor remembers the current simulated time and emits a
    ``t = <time>`` progress line at most once per `log_frequency` units of
    simulated time, measured from the last line actually emitted. A burst of
    events close together therefore produces a single line.

    Lines go to `log_sink` when one is given, otherwise to the
    ``simcore.progress`` logger at INFO level.
    """

    def __init__(self, start_time: T, log_frequency, log_sink: Optional[LogSink] = None):
        self.log_frequency = log_frequency
        self.last_log_time: T = start_time
        self.current_time: T = start_time
        self._sink: LogSink = log_sink if log_sink is not None else default_sink
        self.dispatched: int = 0
        self.logged: int = 0

    def execute(self, event: Event[T]) -> EventDisposition[T]:
        """Advance to the event's time, maybe log, and run its action.

        The action's disposition is returned unchanged.
        """
        self.current_time = event.execution_time
        elapsed = self.current_time - self.last_log_time
        if elapsed >= self.log_frequency:
            self._sink(f"t = {self.current_time}")
            self.last_log_time = self.current_time
            self.logged += 1

        disposition = event.action.execute(self.current_time)
        self.dispatched += 1
        if not isinstance(disposition, EventDisposition):
            raise TypeError(
                f"action {event.action!r} returned {disposition!r}, expected an EventDisposition")
        _logger.debug("executed %s at t=%s -> %r", event.action, self.current_time, disposition)
        return disposition
