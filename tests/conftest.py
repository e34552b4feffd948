from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A pinned clock and factories for loggers writing into tmp_path.
"""

import os
import sys
from datetime import datetime
from typing import Any, Callable, Generator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from columnlog.core.logger import LeveledLogger  # noqa: E402
from columnlog.domain.config import LoggerConfig  # noqa: E402
from columnlog.infra.clock import Clock  # noqa: E402

FIXED_NOW = datetime(2024, 3, 9, 14, 5, 7)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixed_clock() -> Clock:
    """Clock pinned to FIXED_NOW (2024-03-09 14:05:07)."""
    return Clock(lambda: FIXED_NOW)


@pytest.fixture
def make_logger(tmp_path: Any, fixed_clock: Clock) -> Generator[Callable[..., LeveledLogger], None, None]:
    """
    Factory building loggers whose files live under tmp_path.

    Every logger created through the factory is closed on teardown.

    Yields:
        Callable[..., LeveledLogger]: factory(name="Test", **config_fields).
    """
    created: List[LeveledLogger] = []

    def _factory(name: str = "Test", **fields: Any) -> LeveledLogger:
        fields.setdefault("log_dir", str(tmp_path))
        lg = LeveledLogger(name, LoggerConfig(**fields), clock=fixed_clock)
        created.append(lg)
        return lg

    yield _factory

    for lg in created:
        lg.close()
