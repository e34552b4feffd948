from __future__ import annotations

"""
Severity Levels and Threshold Gate.

Defines the closed set of severities understood by the facility, the
terminal colors associated with each of them, and the emission rule
that decides whether a call at a given level reaches the sinks.
"""

from enum import IntEnum
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# ANSI ESCAPES
# -----------------------------------------------------------------------------
RESET = "\u001B[0m"
RED = "\u001B[31m"
YELLOW = "\u001B[33m"
PURPLE = "\u001B[35m"
CYAN = "\u001B[36m"


# -----------------------------------------------------------------------------
# LEVEL DEFINITIONS
# -----------------------------------------------------------------------------

class Level(IntEnum):
    """Severity thresholds. OFF sits outside the ordered range."""
    OFF = -1
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


LEVEL_COLORS: Dict[Level, str] = {
    Level.DEBUG: PURPLE,
    Level.INFO: CYAN,
    Level.WARNING: YELLOW,
    Level.ERROR: RED,
}

_NAME_MAP: Dict[str, Level] = {
    "OFF": Level.OFF,
    "DEBUG": Level.DEBUG,
    "INFO": Level.INFO,
    "WARNING": Level.WARNING,
    "WARN": Level.WARNING,
    "ERROR": Level.ERROR,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_level(value: Any) -> Optional[Level]:
    """
    Resolve a raw level value into a Level member.

    Accepts Level members, plain integers in {-1, 0, 1, 2, 3} and
    case-insensitive level names.

    Args:
        value: Candidate level value.

    Returns:
        Optional[Level]: The matching level, or None if the value is invalid.
    """
    if isinstance(value, Level):
        return value

    # bool is an int subclass; True/False are not levels
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        try:
            return Level(value)
        except ValueError:
            return None

    if isinstance(value, str):
        return _NAME_MAP.get(value.strip().upper())

    return None


def is_emitted(threshold: Level, level: Any) -> bool:
    """
    Decide whether a call at `level` passes the `threshold` gate.

    Args:
        threshold: Current logger threshold.
        level: Severity of the incoming call.

    Returns:
        bool: True when the call must be written to the sinks.
    """
    if threshold == Level.OFF:
        return False
    resolved = parse_level(level)
    if resolved is None or resolved == Level.OFF:
        return False
    return resolved >= threshold


def level_name(level: Level) -> str:
    """Return the display name of a level ("OFF" included)."""
    return level.name


def level_color(level: Level) -> str:
    """Return the ANSI color prefix used for console output at `level`."""
    return LEVEL_COLORS.get(level, RESET)
