"""
debug.py - Logging facade for the Connect Four engine and its front ends

All modules log through the ``debug`` singleton defined here instead of
creating their own loggers. Messages are tagged with a component name
("board", "game", "env", "cli") so that noisy parts of the system can be
filtered without touching the rest.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, List, Optional, Set, TextIO


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Mapping to standard logging levels
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,  # logging has no TRACE level
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Routes tagged log messages to a stdlib logger (``connect4`` by default)."""

    def __init__(self, stream: Optional[TextIO] = None, name: str = "connect4"):
        self._name = name
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._enabled_components: Set[str] = set()  # empty means all
        self._console_handler: Optional[logging.Handler] = None
        self._file_handler: Optional[logging.Handler] = None
        self._timers: Dict[str, float] = {}
        self._logger = self._setup_logger(stream)

    def _setup_logger(self, stream: Optional[TextIO]) -> logging.Logger:
        logger = logging.getLogger(self._name)
        logger.setLevel(LEVEL_MAP[self._level])
        logger.propagate = False

        if self._console_handler is not None:
            logger.removeHandler(self._console_handler)
        self._console_handler = logging.StreamHandler(stream or sys.stdout)
        self._console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(self._console_handler)

        return logger

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: DebugLevel = None,
                  enabled: bool = None,
                  log_file: str = None,
                  components: List[str] = None,
                  stream: TextIO = None):
        """
        Configure the debug manager.

        Args:
            level: Verbosity to log at
            enabled: Master switch for all output
            log_file: Path to also write log records to ("" disables file logging)
            components: Components to log for (empty list for all)
            stream: Replacement stream for console output
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if stream is not None:
            self._logger = self._setup_logger(stream)
            self._logger.setLevel(LEVEL_MAP[self._level])

        if log_file is not None:
            if self._file_handler is not None:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
                self._file_handler = None

            self._log_file = log_file or None
            if self._log_file:
                self._file_handler = logging.FileHandler(self._log_file)
                self._file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(self._file_handler)

        if components is not None:
            self._enabled_components = set(components)

    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        if not self._enabled or self._level == DebugLevel.NONE:
            return False

        if level.value > self._level.value:
            return False

        if component and self._enabled_components and component not in self._enabled_components:
            return False

        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """Log ``message`` at ``level``, tagged with ``component`` when given."""
        if not self._should_log(level, component):
            return

        if component:
            message = f"[{component}] {message}"

        if level == DebugLevel.ERROR:
            self._logger.error(message)
        elif level == DebugLevel.WARNING:
            self._logger.warning(message)
        elif level == DebugLevel.INFO:
            self._logger.info(message)
        elif level == DebugLevel.DEBUG:
            self._logger.debug(message)
        elif level == DebugLevel.TRACE:
            self._logger.debug(f"TRACE: {message}")

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker_name: str):
        """Start a performance timer."""
        self._timers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """
        Stop a performance timer and log the elapsed time at TRACE.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a command-line string; returns False if unknown."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False

        self.configure(level=level)
        self.debug(f"Debug level set to {level.name}")
        return True


debug = DebugManager()
