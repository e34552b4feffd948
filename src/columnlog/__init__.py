from __future__ import annotations

"""
columnlog: leveled, fixed-column console and file logging.

Public facade over the domain, core and infra layers.
"""

from columnlog.core.caller import UNKNOWN_CALLER, resolve_caller
from columnlog.core.formatter import format_line, format_off_notice
from columnlog.core.logger import LeveledLogger
from columnlog.domain.config import LoggerConfig
from columnlog.domain.levels import Level, is_emitted, parse_level
from columnlog.domain.models import LogRecord
from columnlog.infra.clock import Clock
from columnlog.infra.console_sink import ConsoleSink
from columnlog.infra.file_sink import FileSink, SinkState
from columnlog.infra.stdlib_bridge import LeveledLoggerHandler, install_bridge, uninstall_bridge
from columnlog.session import LoggingSession

__version__ = "0.1.0"

__all__ = [
    "Clock",
    "ConsoleSink",
    "FileSink",
    "Level",
    "LeveledLogger",
    "LeveledLoggerHandler",
    "LogRecord",
    "LoggerConfig",
    "LoggingSession",
    "SinkState",
    "UNKNOWN_CALLER",
    "format_line",
    "format_off_notice",
    "install_bridge",
    "is_emitted",
    "parse_level",
    "resolve_caller",
    "uninstall_bridge",
]
