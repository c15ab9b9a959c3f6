"""Run configuration and logging setup.

A run is described by a small YAML document, for example::

    start_time: 0
    max_time: 1000
    log_interval: 100
    stop_when_drained: false
    log_level: INFO

Times may also be ISO timestamps (``2025-01-01 00:00:00``), which PyYAML
loads as `datetime.datetime` (a bare date means midnight). In that case
`log_interval` is read as a number of seconds.
"""
from __future__ import annotations

from dataclasses import dataclass
import datetime
import logging
from pathlib import Path
import sys
from typing import Any, Dict, Optional, Union

import yaml

_logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_KEYS = ("start_time", "max_time", "log_interval", "stop_when_drained", "log_level")


@dataclass
class RunConfig:
    max_time: Any
    start_time: Any = 0
    log_interval: Any = 1
    stop_when_drained: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.start_time = _as_datetime(self.start_time)
        if isinstance(self.start_time, datetime.datetime):
            if isinstance(self.log_interval, (int, float)):
                self.log_interval = datetime.timedelta(seconds=float(self.log_interval))
            self.max_time = _as_datetime(self.max_time)
            if not isinstance(self.max_time, datetime.datetime):
                raise TypeError("max_time must be a datetime when start_time is a datetime")
            if self.log_interval <= datetime.timedelta(0):
                raise ValueError("log_interval must be positive")
        else:
            for name in ("start_time", "max_time", "log_interval"):
                value = getattr(self, name)
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise TypeError(f"{name} must be a number, got {value!r}")
            if self.log_interval <= 0:
                raise ValueError("log_interval must be positive")

        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log_level: {self.log_level!r}")
        self.log_level = level
        if not isinstance(self.stop_when_drained, bool):
            raise TypeError(f"stop_when_drained must be a boolean, got {self.stop_when_drained!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Build a RunConfig from a mapping, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise TypeError("run configuration must be a mapping")
        unknown = sorted(set(data) - set(_KEYS))
        if unknown:
            raise ValueError(f"unknown run configuration key(s): {', '.join(unknown)}")
        if data.get("max_time") is None:
            raise ValueError("run configuration missing 'max_time'")
        kwargs = {k: v for k, v in data.items() if v is not None}
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> "RunConfig":
        return cls.from_dict(_read_yaml(filepath))


def _as_datetime(value: Any) -> Any:
    """Promote a plain `datetime.date` (YAML ``2025-01-01``) to midnight."""
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.datetime.combine(value, datetime.time())
    return value


def _read_yaml(filepath: Union[str, Path]) -> Any:
    p = Path(filepath)
    if not p.is_file():
        raise FileNotFoundError(f"run configuration not found: {filepath}")
    with open(p, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    _logger.debug("loaded run configuration from %s: %r", p, data)
    return data


def configure_logging(level: str = "INFO", stream=None) -> logging.Handler:
    """Send progress lines to `stream` (stdout by default) as bare text.

    Diagnostics from the rest of the package go to the root logger at
    `level`. Returns the handler attached to the progress logger.
    """
    numeric_level = getattr(logging, level.upper())
    logging.basicConfig(level=numeric_level,
                        format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(numeric_level)
    progress = logging.getLogger("simcore.progress")
    for handler in list(progress.handlers):
        if getattr(handler, "_simcore_progress", False):
            progress.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._simcore_progress = True  # type: ignore[attr-defined]
    progress.addHandler(handler)
    progress.setLevel(logging.INFO)
    progress.propagate = False
    return handler


def load_config(path: Optional[Union[str, Path]] = None, **overrides: Any) -> RunConfig:
    """Load a YAML config (if given) and apply non-None keyword overrides."""
    data: Dict[str, Any] = {}
    if path is not None:
        data = _read_yaml(path)
        if not isinstance(data, dict):
            raise TypeError("run configuration must be a mapping")
    data.update({k: v for k, v in overrides.items() if v is not None})
    return RunConfig.from_dict(data)
