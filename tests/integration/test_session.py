from __future__ import annotations

"""
Integration tests for the process-level LoggingSession.
"""

import logging

import pytest

from columnlog.domain.config import LoggerConfig
from columnlog.infra.file_sink import SinkState
from columnlog.infra.stdlib_bridge import LeveledLoggerHandler
from columnlog.session import LoggingSession


@pytest.fixture
def config(tmp_path) -> LoggerConfig:
    return LoggerConfig(log_dir=str(tmp_path), console=False)


def test_logger_requires_start(config):
    session = LoggingSession("App", config)

    assert session.active is False
    with pytest.raises(RuntimeError):
        _ = session.logger


def test_start_is_idempotent(config, fixed_clock):
    session = LoggingSession("App", config, clock=fixed_clock)

    first = session.start()
    second = session.start()

    assert first is second
    assert session.logger is first
    session.shutdown()


def test_force_restart_closes_previous_logger(config, fixed_clock):
    session = LoggingSession("App", config, clock=fixed_clock)
    first = session.start()

    second = session.start(force=True)

    assert second is not first
    assert first.file_sink.state is SinkState.CLOSED
    session.shutdown()


def test_shared_logger_is_injected_into_components(config, fixed_clock, tmp_path):
    class Worker:
        def __init__(self, log):
            self.log = log

        def run(self):
            self.log.info("started")

    with LoggingSession("Worker", config, clock=fixed_clock) as log:
        Worker(log).run()

    content = (tmp_path / "log.txt").read_text(encoding="utf-8")
    assert "[Worker.run]" in content
    assert content.rstrip("\n").endswith("started")


def test_shutdown_is_idempotent(config, fixed_clock):
    session = LoggingSession("App", config, clock=fixed_clock)
    log = session.start()

    session.shutdown()
    session.shutdown()

    assert session.active is False
    assert log.file_sink.state is SinkState.CLOSED


def test_stdlib_bridge_lifecycle(config, fixed_clock):
    session = LoggingSession("App", config, bridge_stdlib=True, clock=fixed_clock)
    root = logging.getLogger()

    session.start()
    assert any(isinstance(h, LeveledLoggerHandler) for h in root.handlers)

    session.shutdown()
    assert not any(isinstance(h, LeveledLoggerHandler) for h in root.handlers)
