import datetime
import io
import logging
from datetime import timedelta

import pytest
import yaml

from simcore.config import RunConfig, configure_logging, load_config
from simcore.event import Event
from simcore.actions import OneShot
from simcore.manager import EventManager


class TestRunConfig:
    def test_defaults(self):
        cfg = RunConfig.from_dict({"max_time": 1000})
        assert cfg.start_time == 0
        assert cfg.max_time == 1000
        assert cfg.log_interval == 1
        assert cfg.stop_when_drained is False
        assert cfg.log_level == "INFO"

    def test_missing_max_time(self):
        with pytest.raises(ValueError):
            RunConfig.from_dict({"start_time": 0})

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="max_tim"):
            RunConfig.from_dict({"max_time": 10, "max_tim": 5})

    def test_non_mapping(self):
        with pytest.raises(TypeError):
            RunConfig.from_dict([1, 2])

    def test_non_positive_interval(self):
        with pytest.raises(ValueError):
            RunConfig.from_dict({"max_time": 10, "log_interval": 0})

    def test_non_numeric_time(self):
        with pytest.raises(TypeError):
            RunConfig.from_dict({"max_time": "soon"})

    def test_stop_when_drained_must_be_bool(self):
        with pytest.raises(TypeError):
            RunConfig.from_dict({"max_time": 10, "stop_when_drained": "false"})
        assert RunConfig.from_dict({"max_time": 10, "stop_when_drained": True}).stop_when_drained is True

    def test_date_only_start_time(self):
        cfg = RunConfig.from_dict({"start_time": datetime.date(2025, 1, 1),
                                   "max_time": datetime.date(2025, 1, 2)})
        assert cfg.start_time == datetime.datetime(2025, 1, 1)
        assert cfg.max_time == datetime.datetime(2025, 1, 2)
        assert cfg.log_interval == timedelta(seconds=1)

    def test_log_level_normalized(self):
        assert RunConfig.from_dict({"max_time": 1, "log_level": "debug"}).log_level == "DEBUG"
        with pytest.raises(ValueError):
            RunConfig.from_dict({"max_time": 1, "log_level": "chatty"})


class TestYaml:
    def test_from_yaml(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text(yaml.safe_dump({"start_time": 0, "max_time": 1000, "log_interval": 100,
                                     "stop_when_drained": True}))
        cfg = RunConfig.from_yaml(p)
        assert (cfg.start_time, cfg.max_time, cfg.log_interval) == (0, 1000, 100)
        assert cfg.stop_when_drained is True

    def test_datetime_yaml(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text("start_time: 2025-01-01 00:00:00\nmax_time: 2025-01-02\nlog_interval: 3600\n")
        cfg = RunConfig.from_yaml(p)
        assert cfg.start_time == datetime.datetime(2025, 1, 1)
        assert cfg.max_time == datetime.datetime(2025, 1, 2)
        assert cfg.log_interval == timedelta(hours=1)

    def test_date_only_yaml(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text("start_time: 2025-01-01\nmax_time: 2025-01-02\nlog_interval: 3600\n")
        cfg = RunConfig.from_yaml(p)
        assert cfg.start_time == datetime.datetime(2025, 1, 1)
        assert cfg.max_time == datetime.datetime(2025, 1, 2)
        assert cfg.log_interval == timedelta(hours=1)

    def test_quoted_boolean_rejected(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text('max_time: 10\nstop_when_drained: "false"\n')
        with pytest.raises(TypeError):
            RunConfig.from_yaml(p)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RunConfig.from_yaml(tmp_path / "nope.yaml")

    def test_yaml_list_rejected(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text("- 1\n- 2\n")
        with pytest.raises(TypeError):
            load_config(p)

    def test_load_config_overrides(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text("max_time: 1000\nlog_interval: 100\n")
        cfg = load_config(p, max_time=50, log_interval=None)
        assert cfg.max_time == 50
        assert cfg.log_interval == 100

    def test_load_config_without_file(self):
        cfg = load_config(max_time=20, start_time=5)
        assert (cfg.start_time, cfg.max_time) == (5, 20)


def test_run_config_drives_manager():
    cfg = RunConfig.from_dict({"max_time": 100, "log_interval": 10, "stop_when_drained": True})
    m = EventManager()
    m.add(Event(12, OneShot(lambda t: None)))
    lines = []
    executor = m.run_config(cfg, log_sink=lines.append)
    assert lines == ["t = 12"]
    assert executor.current_time == 12


def test_configure_logging_writes_bare_lines():
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    m = EventManager()
    m.add(Event(5, OneShot(lambda t: None)))
    m.run(0, 5, 5)
    assert stream.getvalue() == "t = 5\n"


def test_configure_logging_replaces_previous_handler():
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(stream=first)
    configure_logging(stream=second)
    logging.getLogger("simcore.progress").info("t = 1")
    assert first.getvalue() == ""
    assert second.getvalue() == "t = 1\n"


def test_configure_logging_updates_root_level():
    configure_logging("INFO", stream=io.StringIO())
    configure_logging("DEBUG", stream=io.StringIO())
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("warning", stream=io.StringIO())
    assert logging.getLogger().level == logging.WARNING
