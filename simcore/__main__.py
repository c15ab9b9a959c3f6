"""Demo: seed periodic events, run the event manager, and print progress.

Usage:
  python -m simcore                       # events 10, 5, 11, 2 every 10 units up to 1000
  python -m simcore -c scripts/example.yaml --events 3,7 --step 25
"""
import argparse
import datetime
import logging
from typing import List, Optional

try:
    # Prefer absolute import when run as a module
    from simcore.actions import Periodic
    from simcore.config import LOG_LEVELS, configure_logging, load_config
    from simcore.manager import EventManager
except ImportError:
    from .actions import Periodic
    from .config import LOG_LEVELS, configure_logging, load_config
    from .manager import EventManager

_logger = logging.getLogger("simcore")

DEFAULT_EVENTS = "10,5,11,2"


def _number(text: str):
    try:
        return int(text)
    except ValueError:
        return float(text)


def _event_times(text: str) -> List:
    times = [t.strip() for t in text.split(",") if t.strip()]
    if not times:
        raise argparse.ArgumentTypeError("at least one event time is required")
    try:
        return [_number(t) for t in times]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid event time list: {text!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simcore", description="Run a discrete-event simulation demo.")
    parser.add_argument("-c", "--config", help="YAML run configuration")
    parser.add_argument("--start", type=_number, default=None, help="start time (default 0)")
    parser.add_argument("--max-time", type=_number, default=None, help="end time (default 1000)")
    parser.add_argument("--log-interval", type=_number, default=None, help="progress log interval (default 100)")
    parser.add_argument("--events", type=_event_times, default=_event_times(DEFAULT_EVENTS),
                        help="comma separated initial event times")
    parser.add_argument("--step", type=_number, default=10, help="reschedule interval of each event")
    parser.add_argument("--stop-when-drained", action="store_true", default=None,
                        help="end the run when the queue empties before max-time")
    parser.add_argument("--log-level", type=str.upper, default=None, choices=LOG_LEVELS,
                        help="diagnostic log level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        "start_time": args.start,
        "max_time": args.max_time,
        "log_interval": args.log_interval,
        "stop_when_drained": args.stop_when_drained,
        "log_level": args.log_level,
    }
    if args.config is None:
        defaults = {"start_time": 0, "max_time": 1000, "log_interval": 100}
        for key, value in defaults.items():
            if overrides[key] is None:
                overrides[key] = value
    try:
        config = load_config(args.config, **overrides)
    except (FileNotFoundError, TypeError, ValueError) as exc:
        parser.error(str(exc))
    configure_logging(config.log_level)

    # With calendar times, event times and step are seconds after start_time.
    if isinstance(config.start_time, datetime.datetime):
        times = [config.start_time + datetime.timedelta(seconds=t) for t in args.events]
        step = datetime.timedelta(seconds=args.step)
    else:
        times = args.events
        step = args.step

    manager = EventManager()
    for t in times:
        manager.schedule(t, Periodic(step, until=config.max_time))
    _logger.info("starting run: %d event(s), t=%s..%s", len(manager), config.start_time, config.max_time)

    executor = manager.run_config(config)

    _logger.info("run finished at t=%s: %d dispatched, %d pending",
                 executor.current_time, executor.dispatched, len(manager))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
