from __future__ import annotations

"""
Fixed-Column Line Formatter.

Renders a LogRecord into a single line with left-aligned columns:

    <timestamp> [LEVEL]   [logger.caller]                  message

Color codes are never part of the rendered line; the console sink wraps
the text on its own.
"""

from columnlog.domain.levels import Level, level_name
from columnlog.domain.models import LogRecord

# -----------------------------------------------------------------------------
# COLUMN LAYOUT
# -----------------------------------------------------------------------------
TIMESTAMP_WIDTH = 19
LEVEL_WIDTH = 9
ORIGIN_WIDTH = 32

OFF_NOTICE = "Logging is now turned OFF."


def _columns(timestamp: str, level: str, origin: str, message: str) -> str:
    return "{} {:<{lw}} {:<{ow}} {}".format(
        timestamp,
        f"[{level}]",
        f"[{origin}]",
        message,
        lw=LEVEL_WIDTH,
        ow=ORIGIN_WIDTH,
    )


def format_line(record: LogRecord) -> str:
    """
    Render a record as one fixed-column line.

    Args:
        record: The resolved log call.

    Returns:
        str: Formatted line without a terminator.
    """
    return _columns(
        record.timestamp,
        level_name(record.level),
        f"{record.logger_name}.{record.caller_name}",
        record.message,
    )


def format_off_notice(logger_name: str) -> str:
    """
    Render the notice printed when a logger is switched OFF.

    The timestamp column is left blank and no caller is shown, keeping
    the message aligned with regular lines.

    Args:
        logger_name: Identity of the logger being switched off.

    Returns:
        str: Formatted notice line.
    """
    return _columns(
        " " * TIMESTAMP_WIDTH,
        level_name(Level.INFO),
        logger_name,
        OFF_NOTICE,
    )
