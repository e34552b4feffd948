from __future__ import annotations

"""
Logger Configuration Model.

Defines the immutable parameters a LeveledLogger starts from. Runtime
setters on the logger mutate its live state; this object only captures
the initial values and file naming conventions.
"""

from dataclasses import dataclass, replace
from typing import Any

from columnlog.domain.levels import Level, parse_level

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_MAX_FILE_SIZE = 1024 * 1024  # 1 MB
DEFAULT_BASE_NAME = "log"
DEFAULT_EXTENSION = ".txt"
LINE_DATEFMT = "%Y-%m-%d %H:%M:%S"
FILE_DATEFMT = "%Y%m%d_%H%M%S"


@dataclass(frozen=True)
class LoggerConfig:
    """
    Initial settings for a LeveledLogger instance.

    Attributes:
        level: Starting threshold (Level, int or level name).
        console: Enable colored stdout output.
        file_logging: Enable the file sink.
        append: Reuse the canonical file instead of a per-run stamped one.
        max_file_size: Rotation threshold in bytes.
        log_dir: Directory that receives log files.
        base_name: File stem used for the canonical and stamped files.
        extension: File extension for every log file.
        datefmt: Timestamp pattern of each log line.
        file_datefmt: Timestamp pattern embedded in non-append file names.
    """
    level: Any = Level.DEBUG
    console: bool = True
    file_logging: bool = True
    append: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    log_dir: str = "."
    base_name: str = DEFAULT_BASE_NAME
    extension: str = DEFAULT_EXTENSION
    datefmt: str = LINE_DATEFMT
    file_datefmt: str = FILE_DATEFMT

    def __post_init__(self) -> None:
        if parse_level(self.level) is None:
            raise ValueError(f"Invalid log level: {self.level!r}")
        if int(self.max_file_size) <= 0:
            raise ValueError(f"max_file_size must be positive, got {self.max_file_size}")
        if not self.base_name:
            raise ValueError("base_name must not be empty")

    @property
    def initial_level(self) -> Level:
        """Resolved starting threshold."""
        resolved = parse_level(self.level)
        if resolved is None:
            raise ValueError(f"Invalid log level: {self.level!r}")
        return resolved

    def replace(self, **changes: Any) -> LoggerConfig:
        """Return a copy with the given fields overridden."""
        return replace(self, **changes)
