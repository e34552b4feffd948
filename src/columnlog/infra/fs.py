from __future__ import annotations

"""
FileSystem Helpers for the File Sink.

Centralizes log file naming (canonical, run-stamped and rotated parts),
parent directory creation and tail extraction, so the sink itself only
deals with handles and byte accounting.
"""

import os
from collections import deque
from datetime import datetime
from typing import List

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def initial_log_path(
        log_dir: str,
        base_name: str,
        extension: str,
        append: bool,
        started_at: datetime,
        file_datefmt: str,
) -> str:
    """
    Compute the path of the first file opened by a sink.

    Append mode always reuses `<base><ext>`; otherwise the facility start
    time is embedded as `<base>_<stamp><ext>`.

    Args:
        log_dir: Target directory.
        base_name: File stem.
        extension: File extension including the dot.
        append: Whether the canonical file is reused across runs.
        started_at: Facility start time.
        file_datefmt: strftime pattern for the stamp.

    Returns:
        str: Absolute path of the log file.
    """
    if append:
        file_name = f"{base_name}{extension}"
    else:
        file_name = f"{base_name}_{started_at.strftime(file_datefmt)}{extension}"
    return os.path.abspath(os.path.join(log_dir, file_name))


def rotated_log_path(origin_path: str, part_index: int, extension: str) -> str:
    """
    Derive the path of a rotated part from the first file of the cycle.

    `/logs/log.txt` with part 2 becomes `/logs/log_part2.txt`.

    Args:
        origin_path: Path returned by initial_log_path.
        part_index: Rotation counter (>= 1).
        extension: File extension including the dot.

    Returns:
        str: Path of the rotated part.
    """
    directory, file_name = os.path.split(origin_path)
    if extension and file_name.endswith(extension):
        stem = file_name[: -len(extension)]
    else:
        stem = os.path.splitext(file_name)[0]
    return os.path.join(directory, f"{stem}_part{part_index}{extension}")


def ensure_parent_dir(path: str) -> None:
    """
    Create the directory hierarchy that contains `path`.

    Raises:
        OSError: If the hierarchy cannot be created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)


def current_size(path: str) -> int:
    """Return the on-disk size of `path`, or 0 if it does not exist."""
    try:
        return os.path.getsize(path)
    except OSError:
        return 0


def read_tail(path: str, n_lines: int) -> List[str]:
    """
    Return the last `n_lines` lines of a text file without terminators.

    Args:
        path: File to read.
        n_lines: Maximum number of lines.

    Returns:
        List[str]: Tail lines, oldest first. Empty if the file is missing.
    """
    if n_lines <= 0 or not os.path.exists(path):
        return []

    # errors='replace' keeps partially corrupted files readable
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        tail = deque(f, maxlen=n_lines)
    return [line.rstrip("\n") for line in tail]
