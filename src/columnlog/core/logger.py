from __future__ import annotations

"""
Leveled Logger Core.

Orchestrates a log call end to end: threshold gate, timestamp and
call-site resolution, fixed-column formatting, then fan-out to the
console sink and the rotating file sink.

Logging never raises into the host program. Configuration mistakes
degrade to level OFF, and I/O problems degrade to console-only output.
"""

import logging
import threading
from typing import Any, List, Optional

from columnlog.core.caller import resolve_caller
from columnlog.core.formatter import format_line, format_off_notice
from columnlog.domain.config import LoggerConfig
from columnlog.domain.levels import CYAN, Level, is_emitted, level_color, parse_level
from columnlog.domain.models import LogRecord
from columnlog.infra.clock import Clock
from columnlog.infra.console_sink import ConsoleSink
from columnlog.infra.file_sink import FileSink, SinkState

logger = logging.getLogger(__name__)


class LeveledLogger:
    """
    Named logger writing colored console lines and a rotating log file.

    A single re-entrant lock serializes level changes, console writes and
    every file sink operation, so lines from concurrent threads never
    tear and rotation happens at most once per threshold crossing.
    """

    def __init__(
            self,
            name: str,
            config: Optional[LoggerConfig] = None,
            *,
            clock: Optional[Clock] = None,
            console: Optional[ConsoleSink] = None,
    ) -> None:
        """
        Create the logger and open its log file when file logging is on.

        Args:
            name: Identity shown in every line.
            config: Initial settings. Defaults to LoggerConfig().
            clock: Time source for timestamps and file stamps.
            console: Console sink. Defaults to the process streams.
        """
        cfg = config or LoggerConfig()

        self._name = name
        self._config = cfg
        self._lock = threading.RLock()
        self._clock = clock or Clock()
        self._console = console or ConsoleSink()

        self._level: Level = cfg.initial_level
        self._console_enabled = cfg.console
        self._file_enabled = cfg.file_logging

        self._file_sink = FileSink(
            self._console,
            log_dir=cfg.log_dir,
            base_name=cfg.base_name,
            extension=cfg.extension,
            append=cfg.append,
            max_file_size=cfg.max_file_size,
            file_datefmt=cfg.file_datefmt,
            clock=self._clock,
            lock=self._lock,
        )
        if self._file_enabled:
            self._file_sink.open()

    def __enter__(self) -> LeveledLogger:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<LeveledLogger {self._name!r} level={self._level.name}>"

    # -------------------------------------------------------------------------
    # STATE INSPECTION
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> Level:
        return self._level

    @property
    def console_logging_enabled(self) -> bool:
        return self._console_enabled

    @property
    def file_logging_enabled(self) -> bool:
        """Effective file logging: requested by the host and not failed."""
        return self._file_enabled and not self._file_sink.failed

    @property
    def append_to_file(self) -> bool:
        return self._file_sink.append

    @property
    def max_file_size(self) -> int:
        return self._file_sink.max_file_size

    @property
    def file_sink(self) -> FileSink:
        return self._file_sink

    def get_level(self) -> Level:
        return self._level

    def get_level_string(self) -> str:
        """Return the threshold name, "OFF" included."""
        return self._level.name

    # -------------------------------------------------------------------------
    # CONFIGURATION SURFACE
    # -------------------------------------------------------------------------

    def set_level(self, new_level: Any) -> None:
        """
        Change the threshold, announcing the change.

        Valid levels are announced (at INFO, against the new threshold)
        before being applied. Switching to OFF prints a console notice
        first. An invalid value reports an error and a warning, then
        forces OFF, unless the logger is already OFF, in which case the
        request is ignored.

        Args:
            new_level: Level member, integer in {-1, 0, 1, 2, 3} or level name.
        """
        with self._lock:
            resolved = parse_level(new_level)

            if resolved is None:
                if self._level == Level.OFF:
                    return
                self._emit(Level.ERROR, f"Invalid log level: {new_level}", caller="set_level")
                self._emit(Level.WARNING, "Automatic resolution: Set log level to OFF", caller="set_level")
                self._level = Level.OFF
                return

            if resolved == Level.OFF:
                if self._level != Level.OFF and self._console_enabled:
                    self._console.write(format_off_notice(self._name), CYAN)
                self._level = Level.OFF
                return

            if is_emitted(resolved, Level.INFO):
                self._emit(Level.INFO, f"Log level set to: {resolved.name}", caller="set_level")
            self._level = resolved

    def set_max_file_size(self, max_bytes: int) -> None:
        """Set the rotation threshold in bytes; invalid or non-positive values are ignored."""
        try:
            size = int(max_bytes)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"LeveledLogger: Ignoring invalid max file size {max_bytes!r}")
            return
        if size <= 0:
            logger.debug(f"LeveledLogger: Ignoring non-positive max file size {size}")
            return
        self._file_sink.max_file_size = size

    def set_file_logging_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._file_enabled = bool(enabled)
            if self._file_enabled and self._file_sink.state == SinkState.UNINITIALIZED:
                self._file_sink.open()

    def set_console_logging_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._console_enabled = bool(enabled)

    def set_append_to_file(self, append: bool) -> None:
        """
        Switch append mode and restart the file cycle.

        Always closes the previous file, resets the part counter and clears
        a previous write failure.
        """
        with self._lock:
            self._file_sink.reinitialize(bool(append))

    def close(self) -> None:
        """Release the log file. Idempotent; never raises."""
        with self._lock:
            self._file_sink.close()

    def get_recent_logs(self, n_lines: int = 100) -> List[str]:
        """
        Return the last lines of the active log file.

        Args:
            n_lines: Maximum number of lines.

        Returns:
            List[str]: Tail lines, oldest first.
        """
        return self._file_sink.read_recent_lines(n_lines)

    # -------------------------------------------------------------------------
    # LOGGING API
    # -------------------------------------------------------------------------

    def log(self, level: Any, message: Optional[str], *, caller: Optional[str] = None) -> None:
        """
        Emit `message` at `level` if the threshold allows it.

        Args:
            level: Severity of the call.
            message: Text to log. None is ignored.
            caller: Explicit call-site name; resolved from the stack when omitted.
        """
        resolved = parse_level(level)
        if message is None or resolved is None or not is_emitted(self._level, resolved):
            return
        self._emit(resolved, message, caller=caller)

    def debug(self, message: Optional[str], *, caller: Optional[str] = None) -> None:
        self.log(Level.DEBUG, message, caller=caller)

    def info(self, message: Optional[str], *, caller: Optional[str] = None) -> None:
        self.log(Level.INFO, message, caller=caller)

    def warning(self, message: Optional[str], *, caller: Optional[str] = None) -> None:
        self.log(Level.WARNING, message, caller=caller)

    def error(self, message: Optional[str], *, caller: Optional[str] = None) -> None:
        self.log(Level.ERROR, message, caller=caller)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _emit(self, level: Level, message: str, *, caller: Optional[str] = None) -> None:
        """Format and dispatch a record that already passed the gate."""
        record = LogRecord(
            timestamp=self._clock.format(self._config.datefmt),
            level=level,
            logger_name=self._name,
            caller_name=caller or resolve_caller(),
            message=str(message),
        )
        line = format_line(record)

        with self._lock:
            if self._console_enabled:
                self._console.write(line, level_color(level))
            if self.file_logging_enabled:
                self._file_sink.write(line)
