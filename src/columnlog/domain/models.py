from __future__ import annotations

"""
Log Record Data Model.

Ephemeral value passed from the logger core to the line formatter. It is
never persisted as such; only its rendered text reaches the sinks.
"""

from dataclasses import dataclass

from columnlog.domain.levels import Level


@dataclass(frozen=True)
class LogRecord:
    """
    A single log call, fully resolved.

    Attributes:
        timestamp: Formatted wall-clock time of the call.
        level: Severity of the call.
        logger_name: Identity of the emitting logger.
        caller_name: Function that issued the call.
        message: Raw message text.
    """
    timestamp: str
    level: Level
    logger_name: str
    caller_name: str
    message: str
