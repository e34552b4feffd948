from __future__ import annotations

"""
Integration tests for first-failure-disables-file-logging semantics.

Verifies:
1. After a write failure the logger keeps printing to the console only.
2. No further file write is attempted until set_append_to_file().
3. Logging never raises into the caller.
"""

from columnlog.domain.levels import Level


class _UnwritableHandle:
    """Stands in for a destination that became unwritable."""

    def __init__(self) -> None:
        self.attempts = 0
        self.closed = False

    def write(self, data):
        self.attempts += 1
        raise OSError(28, "No space left on device")

    def flush(self):
        pass

    def close(self):
        self.closed = True


def _break_file(lg) -> _UnwritableHandle:
    sink = lg.file_sink
    sink._handle.close()
    broken = _UnwritableHandle()
    sink._handle = broken
    return broken


def test_failure_falls_back_to_console_only(make_logger, tmp_path, capsys):
    lg = make_logger("Svc", level=Level.DEBUG)
    lg.info("before", caller="x")
    broken = _break_file(lg)

    lg.info("during", caller="x")
    captured = capsys.readouterr()
    assert "during" in captured.out
    assert "Error writing to log file. File logging disabled." in captured.err
    assert lg.file_logging_enabled is False

    for i in range(5):
        lg.warning(f"after {i}", caller="x")

    captured = capsys.readouterr()
    assert captured.out.count("after") == 5
    assert captured.err == ""
    assert broken.attempts == 1

    lines = (tmp_path / "log.txt").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1 and lines[0].endswith("before")


def test_reinitialization_resumes_file_logging(make_logger, tmp_path):
    lg = make_logger("Svc", console=False)
    _break_file(lg)
    lg.error("lost", caller="x")
    assert lg.file_logging_enabled is False

    lg.set_append_to_file(True)
    lg.error("back", caller="x")

    assert lg.file_logging_enabled is True
    assert lg.file_sink.part_index == 0
    content = (tmp_path / "log.txt").read_text(encoding="utf-8")
    assert "back" in content
    assert "lost" not in content


def test_unopenable_destination_disables_file_without_raising(tmp_path, fixed_clock, capsys):
    from columnlog.core.logger import LeveledLogger
    from columnlog.domain.config import LoggerConfig

    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    lg = LeveledLogger("Svc", LoggerConfig(log_dir=str(blocker / "nested")), clock=fixed_clock)
    captured = capsys.readouterr()
    assert "Failed to initialize log file" in captured.err
    assert "Failed to initialize" not in captured.out

    lg.info("still visible", caller="x")
    assert "still visible" in capsys.readouterr().out
    assert lg.file_logging_enabled is False
    lg.close()
