from __future__ import annotations

"""
Call-Site Resolution.

Walks the active call stack to find the function that issued a log call.
The result is cosmetic: any failure degrades to a sentinel name.
"""

import sys
from types import FrameType
from typing import Optional, Tuple

UNKNOWN_CALLER = "UnknownMethod"

# Module prefixes whose frames are never reported as the caller
_SKIPPED_MODULES: Tuple[str, ...] = ("columnlog", "threading")


def _is_skipped(module_name: str) -> bool:
    for prefix in _SKIPPED_MODULES:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return True
    return False


def resolve_caller(start: Optional[FrameType] = None) -> str:
    """
    Return the name of the innermost function outside the facility.

    Args:
        start: Frame to start scanning from. Defaults to the caller of
            this function.

    Returns:
        str: Function name, or UNKNOWN_CALLER when no eligible frame exists.
    """
    try:
        frame = start if start is not None else sys._getframe(1)
    except ValueError:
        return UNKNOWN_CALLER

    while frame is not None:
        module_name = frame.f_globals.get("__name__", "")
        if not _is_skipped(str(module_name)):
            return frame.f_code.co_name
        frame = frame.f_back

    return UNKNOWN_CALLER
