from __future__ import annotations

"""
Rotating File Sink.

Owns the single open log file of a logger instance. Tracks the exact
number of bytes in the active file, rotates to `<base>_partN` files once
the size threshold is reached, and disables itself permanently on the
first I/O failure (until it is explicitly reinitialized).

Every mutation of the sink state happens under one re-entrant lock,
shared with the owning logger, so that writes and rotations issued from
different threads never interleave.
"""

import logging
import threading
from enum import Enum
from typing import IO, Any, List, Optional

from columnlog.domain.config import DEFAULT_BASE_NAME, DEFAULT_EXTENSION, DEFAULT_MAX_FILE_SIZE, FILE_DATEFMT
from columnlog.infra.clock import Clock
from columnlog.infra.console_sink import ConsoleSink
from columnlog.infra.fs import (
    current_size,
    ensure_parent_dir,
    initial_log_path,
    read_tail,
    rotated_log_path,
)

logger = logging.getLogger(__name__)

# Unencodable characters (lone surrogates) are escaped, never fatal
_ENCODING = "utf-8"
_ENCODING_ERRORS = "backslashreplace"


# -----------------------------------------------------------------------------
# SINK STATE DEFINITIONS
# -----------------------------------------------------------------------------

class SinkState(Enum):
    """Lifecycle states of a FileSink."""
    UNINITIALIZED = "UNINITIALIZED"
    OPEN = "OPEN"
    ROTATING = "ROTATING"
    CLOSED = "CLOSED"
    FAILED = "FAILED"


# -----------------------------------------------------------------------------
# FILE SINK
# -----------------------------------------------------------------------------

class FileSink:
    """
    Size-rotated, fail-safe text file writer.

    The sink never raises on I/O problems. A failed open, write or
    rotation moves it to FAILED, prints a notice on stderr and turns every
    later write into a no-op until reinitialize() is called.
    """

    def __init__(
            self,
            console: ConsoleSink,
            *,
            log_dir: str = ".",
            base_name: str = DEFAULT_BASE_NAME,
            extension: str = DEFAULT_EXTENSION,
            append: bool = True,
            max_file_size: int = DEFAULT_MAX_FILE_SIZE,
            file_datefmt: str = FILE_DATEFMT,
            clock: Optional[Clock] = None,
            lock: Optional[Any] = None,
    ) -> None:
        """
        Prepare the sink. No file is touched until open() is called.

        Args:
            console: Destination of operational notices.
            log_dir: Directory receiving the log files.
            base_name: File stem of the first file of each cycle.
            extension: Extension shared by all files.
            append: Append to (True) or truncate (False) opened files.
            max_file_size: Rotation threshold in bytes.
            file_datefmt: Stamp pattern for non-append file names.
            clock: Time source for the stamp.
            lock: Lock shared with the owning logger.
        """
        self._console = console
        self._log_dir = log_dir
        self._base_name = base_name
        self._extension = extension
        self._append = append
        self._max_file_size = int(max_file_size)
        self._file_datefmt = file_datefmt
        self._clock = clock or Clock()
        self._lock = lock if lock is not None else threading.RLock()

        self._handle: Optional[IO[str]] = None
        self._origin_path: str = ""
        self._current_path: str = ""
        self._bytes_written: int = 0
        self._part_index: int = 0
        self._state = SinkState.UNINITIALIZED

    # -------------------------------------------------------------------------
    # STATE INSPECTION
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def failed(self) -> bool:
        """True once an I/O failure disabled the sink."""
        return self._state == SinkState.FAILED

    @property
    def current_path(self) -> str:
        return self._current_path

    @property
    def part_index(self) -> int:
        return self._part_index

    @property
    def bytes_written(self) -> int:
        """Exact size in bytes of the active file."""
        return self._bytes_written

    @property
    def append(self) -> bool:
        return self._append

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    @max_file_size.setter
    def max_file_size(self, value: int) -> None:
        with self._lock:
            self._max_file_size = int(value)

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def open(self) -> bool:
        """
        Open the first file of a cycle according to the append mode.

        Returns:
            bool: True if the sink is ready to write.
        """
        with self._lock:
            path = initial_log_path(
                self._log_dir,
                self._base_name,
                self._extension,
                self._append,
                self._clock.now(),
                self._file_datefmt,
            )
            try:
                self._handle = self._open_handle(path)
            except OSError as e:
                self._fail(f"FileSink: Failed to initialize log file. File logging disabled. Error: {e}")
                return False

            self._origin_path = path
            self._part_index = 0
            self._state = SinkState.OPEN
            logger.debug(f"FileSink: Opened {path} (append={self._append}, size={self._bytes_written})")
            return True

    def reinitialize(self, append: Optional[bool] = None) -> bool:
        """
        Close the active file and start a fresh cycle.

        Clears a previous failure, resets the part counter and re-opens.

        Args:
            append: New append mode. Keeps the current one when None.

        Returns:
            bool: True if the new file was opened.
        """
        with self._lock:
            if append is not None:
                self._append = bool(append)
            self._release(report_errors=False)
            self._part_index = 0
            self._state = SinkState.UNINITIALIZED
            logger.debug(f"FileSink: Reinitializing (append={self._append})")
            return self.open()

    def close(self) -> None:
        """
        Flush and release the active file. Safe to call repeatedly.

        Errors are reported on stderr and never raised.
        """
        with self._lock:
            if self._state == SinkState.CLOSED:
                return
            self._release(report_errors=True)
            if self._state != SinkState.FAILED:
                self._state = SinkState.CLOSED
            logger.debug("FileSink: Closed")

    # -------------------------------------------------------------------------
    # WRITING
    # -------------------------------------------------------------------------

    def write(self, line: str) -> bool:
        """
        Append one line to the active file, rotating first if it is full.

        Args:
            line: Formatted log line without terminator.

        Returns:
            bool: False if the sink is (or just became) unusable.
        """
        with self._lock:
            handle = self._handle
            if self._state != SinkState.OPEN or handle is None:
                return False

            data = line + "\n"
            try:
                size = len(data.encode(_ENCODING, _ENCODING_ERRORS))
                if self._bytes_written >= self._max_file_size:
                    handle = self._rotate()
                handle.write(data)
                handle.flush()
            except (OSError, ValueError) as e:
                self._fail(f"FileSink: Error writing to log file. File logging disabled. Error: {e}")
                return False

            self._bytes_written += size
            return True

    def read_recent_lines(self, n_lines: int = 100) -> List[str]:
        """
        Return the tail of the active file.

        Args:
            n_lines: Maximum number of lines to return.

        Returns:
            List[str]: Lines without terminators; empty when no file is active.
        """
        with self._lock:
            if not self._current_path:
                return []
            try:
                return read_tail(self._current_path, n_lines)
            except OSError as e:
                logger.warning(f"FileSink: Could not read {self._current_path}: {e}")
                return []

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _open_handle(self, path: str) -> IO[str]:
        ensure_parent_dir(path)
        mode = "a" if self._append else "w"
        handle = open(path, mode, encoding=_ENCODING, errors=_ENCODING_ERRORS, newline="\n")
        self._current_path = path
        self._bytes_written = current_size(path) if self._append else 0
        return handle

    def _rotate(self) -> IO[str]:
        """
        Switch to the next `_partN` file.

        Returns:
            IO[str]: The handle of the new part.

        Raises:
            OSError: If the current file cannot be closed or the new one opened.
        """
        self._state = SinkState.ROTATING
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.close()

        self._part_index += 1
        new_path = rotated_log_path(self._origin_path, self._part_index, self._extension)
        new_handle = self._open_handle(new_path)
        self._handle = new_handle
        self._state = SinkState.OPEN

        logger.debug(f"FileSink: Rotated to part {self._part_index}")
        self._console.notice(f"FileSink: Log file rotated to {new_path}")
        return new_handle

    def _release(self, report_errors: bool) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.flush()
            handle.close()
        except OSError as e:
            if report_errors:
                self._console.alert(f"FileSink: Error closing log file: {e}")

    def _fail(self, message: str) -> None:
        self._release(report_errors=False)
        self._state = SinkState.FAILED
        logger.debug(message)
        self._console.alert(message)
