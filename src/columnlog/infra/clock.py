from __future__ import annotations

"""
Wall-Clock Time Source.

Thin seam over `datetime.now` so that tests and hosts can pin the time
used for line timestamps and for the stamped file names.
"""

from datetime import datetime
from typing import Callable, Optional

NowFn = Callable[[], datetime]


class Clock:
    """Supplies the current local time, formatted on demand."""

    def __init__(self, now: Optional[NowFn] = None) -> None:
        self._now: NowFn = now or datetime.now

    def now(self) -> datetime:
        return self._now()

    def format(self, pattern: str) -> str:
        """
        Render the current time with a strftime pattern.

        Args:
            pattern: strftime-compatible format string.

        Returns:
            str: The formatted timestamp.
        """
        return self._now().strftime(pattern)
