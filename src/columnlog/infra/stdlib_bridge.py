from __future__ import annotations

"""
Standard Library Logging Bridge.

Lets code that already logs through the `logging` module feed a
LeveledLogger, so third-party libraries end up in the same fixed-column
console and file output as the host application.
"""

import logging
from typing import Optional

from columnlog.core.logger import LeveledLogger
from columnlog.domain.levels import Level

# Records from the facility itself are dropped to avoid feedback loops
_INTERNAL_PREFIX = "columnlog"

# Internal attribute used to tag handlers installed by install_bridge()
_HANDLER_TAG_ATTR: str = "_columnlog_bridge"

_EXC_FORMATTER = logging.Formatter()


def map_stdlib_level(levelno: int) -> Level:
    """
    Map a stdlib numeric level onto the closed Level set.

    CRITICAL collapses onto ERROR; anything below INFO is DEBUG.
    """
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    return Level.DEBUG


class InternalRecordFilter(logging.Filter):
    """
    Reject records emitted by the facility itself.

    Attached as a handler filter, so it runs before the handler lock is
    taken. A sink diagnostic logged while the LeveledLogger lock is held
    therefore never waits on a bridge handler that another thread holds.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name or ""
        return not (name == _INTERNAL_PREFIX or name.startswith(_INTERNAL_PREFIX + "."))


class LeveledLoggerHandler(logging.Handler):
    """
    logging.Handler forwarding records to a LeveledLogger.

    The stdlib record's function name is used as the caller, so no stack
    inspection happens on this path. Threshold filtering is left to the
    target logger.
    """

    def __init__(self, target: LeveledLogger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = target
        self.addFilter(InternalRecordFilter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info:
                message = f"{message} | {_EXC_FORMATTER.formatException(record.exc_info)}"
            # Keep one record per line in the target file
            message = message.replace("\r", " ").replace("\n", " | ")
            self.target.log(map_stdlib_level(record.levelno), message, caller=record.funcName)
        except Exception:
            self.handleError(record)


def install_bridge(target: LeveledLogger, logger_name: Optional[str] = None) -> LeveledLoggerHandler:
    """
    Attach a tagged bridge handler to a stdlib logger (root by default).

    Previously installed bridge handlers on the same logger are removed,
    so repeated calls do not duplicate output.

    Args:
        target: LeveledLogger receiving the records.
        logger_name: Name of the stdlib logger to hook. None means root.

    Returns:
        LeveledLoggerHandler: The installed handler.
    """
    std_logger = logging.getLogger(logger_name)
    uninstall_bridge(logger_name)

    handler = LeveledLoggerHandler(target)
    setattr(handler, _HANDLER_TAG_ATTR, True)
    std_logger.addHandler(handler)
    return handler


def uninstall_bridge(logger_name: Optional[str] = None) -> None:
    """Detach every bridge handler previously installed on a stdlib logger."""
    std_logger = logging.getLogger(logger_name)
    for h in list(std_logger.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            std_logger.removeHandler(h)
            h.close()
