from __future__ import annotations

"""
Process-Level Logging Session.

Owns the single shared LeveledLogger of a process. The host builds the
session once at startup, hands `session.logger` to the components that
need it and shuts the session down on exit. Nothing here is reachable
through module-level globals.
"""

import atexit
import logging
import threading
from typing import Any, Optional

from columnlog.core.logger import LeveledLogger
from columnlog.domain.config import LoggerConfig
from columnlog.infra.stdlib_bridge import install_bridge, uninstall_bridge

logger = logging.getLogger(__name__)

DEFAULT_SESSION_NAME = "App"


class LoggingSession:
    """
    Explicit lifecycle wrapper around one shared LeveledLogger.

    start() is idempotent unless `force=True` is passed, in which case the
    previous logger is closed and a new one built. shutdown() is also
    registered with atexit so the log file is released on interpreter exit.
    """

    def __init__(
            self,
            name: str = DEFAULT_SESSION_NAME,
            config: Optional[LoggerConfig] = None,
            *,
            bridge_stdlib: bool = False,
            **logger_kwargs: Any,
    ) -> None:
        """
        Args:
            name: Identity of the shared logger.
            config: Initial logger settings.
            bridge_stdlib: Forward root `logging` records into the shared logger.
            **logger_kwargs: Extra keyword arguments for LeveledLogger (clock, console).
        """
        self._name = name
        self._config = config or LoggerConfig()
        self._bridge_stdlib = bridge_stdlib
        self._logger_kwargs = logger_kwargs
        self._lock = threading.Lock()
        self._logger: Optional[LeveledLogger] = None
        self._atexit_registered = False

    def __enter__(self) -> LeveledLogger:
        return self.start()

    def __exit__(self, *exc: Any) -> None:
        self.shutdown()

    @property
    def active(self) -> bool:
        return self._logger is not None

    @property
    def logger(self) -> LeveledLogger:
        """
        The shared logger.

        Raises:
            RuntimeError: If the session has not been started.
        """
        if self._logger is None:
            raise RuntimeError("LoggingSession has not been started")
        return self._logger

    def start(self, *, force: bool = False) -> LeveledLogger:
        """
        Build the shared logger.

        Args:
            force: Rebuild even if the session is already active.

        Returns:
            LeveledLogger: The shared logger.
        """
        with self._lock:
            if self._logger is not None and not force:
                return self._logger

            if self._logger is not None:
                self._teardown()

            self._logger = LeveledLogger(self._name, self._config, **self._logger_kwargs)
            if self._bridge_stdlib:
                install_bridge(self._logger)

            if not self._atexit_registered:
                atexit.register(self.shutdown)
                self._atexit_registered = True

            logger.debug(f"LoggingSession: Started shared logger {self._name!r}")
            return self._logger

    def shutdown(self) -> None:
        """Close the shared logger. Safe to call repeatedly."""
        with self._lock:
            if self._logger is None:
                return
            self._teardown()
            logger.debug(f"LoggingSession: Shut down shared logger {self._name!r}")

    def _teardown(self) -> None:
        if self._bridge_stdlib:
            uninstall_bridge()
        current, self._logger = self._logger, None
        if current is not None:
            current.close()
