from __future__ import annotations

"""
Console Output Sink.

Best-effort writer for colored log lines (stdout) and for the sink's
own operational notices (stdout for information, stderr for failures).
A failing stream never disables later console writes.
"""

import sys
from typing import Optional, TextIO

from columnlog.domain.levels import RED, RESET, YELLOW


class ConsoleSink:
    """
    Writes colorized lines to the process streams.

    Streams are looked up at write time unless explicitly injected, so
    pytest's capture and host-level redirections are honoured.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def write(self, line: str, color: str) -> None:
        """
        Print a formatted line wrapped in `color` and a reset suffix.

        Args:
            line: Formatted log line.
            color: ANSI prefix for the line's level.
        """
        self._emit(self.stdout, f"{color}{line}{RESET}")

    def notice(self, message: str) -> None:
        """Print an informational sink notice (e.g. rotation) to stdout."""
        self._emit(self.stdout, f"{YELLOW}{message}{RESET}")

    def alert(self, message: str) -> None:
        """Print a sink failure notice to stderr."""
        self._emit(self.stderr, f"{RED}{message}{RESET}")

    @staticmethod
    def _emit(stream: TextIO, text: str) -> None:
        try:
            stream.write(text + "\n")
            stream.flush()
        except (OSError, ValueError, AttributeError):
            # Closed or broken stream: console output is best effort only
            pass
