"""Bridges to other logging stacks.

`LoguruSink` sends sinklog messages into loguru. `InterceptHandler` does the
reverse for stdlib `logging`, so logging.getLogger('x').info(...) ends up
in the active sinklog sink.
"""
from __future__ import annotations

import logging
import threading

from loguru import logger as _loguru

from sinklog.capabilities import Capability
from sinklog.levels import Severity
from sinklog.manager import LogManager, get_manager
from sinklog.sinks import _Threshold

__all__ = ['InterceptHandler', 'LoguruSink', 'intercept_stdlib']

_LOGURU_LEVELS = {
    Severity.DEBUG: 'DEBUG',
    Severity.INFO: 'INFO',
    Severity.WARNING: 'WARNING',
    Severity.ERROR: 'ERROR',
    Severity.FATAL: 'CRITICAL',
}


class LoguruSink(_Threshold):
    """Sink that forwards messages to loguru's logger.

    Loguru's own sinks decide where the text goes; this sink only adds its
    threshold in front.
    """
    capabilities = Capability.EMIT | Capability.LEVEL_FILTER

    def __init__(self, name: str | None = None) -> None:
        super().__init__()
        self._logger = _loguru.bind(logger_name=name) if name else _loguru
        self._lock = threading.Lock()

    def emit(self, level: Severity, message: str) -> None:
        if not self._accepts(level):
            return
        try:
            levelname = _LOGURU_LEVELS.get(level, 'INFO')
        except TypeError:
            levelname = 'INFO'
        with self._lock:
            self._logger.log(levelname, message)


def _severity_for(levelno: int) -> Severity:
    """Map a stdlib level number onto the severity scale.
    """
    if levelno >= logging.CRITICAL:
        return Severity.FATAL
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    if levelno >= logging.INFO:
        return Severity.INFO
    return Severity.DEBUG


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging records to a sinklog manager.

    Uses the process-wide manager unless one is given.
    """

    def __init__(self, manager: LogManager | None = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._manager = manager

    @property
    def manager(self) -> LogManager:
        return self._manager if self._manager is not None else get_manager()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = record.getMessage()
        except (TypeError, ValueError, KeyError, IndexError, OverflowError):
            msg = f'{record.msg} {record.args!r}' if record.args else str(record.msg)
        if record.exc_info:
            msg = f'{msg}\n{logging.Formatter().formatException(record.exc_info)}'
        self.manager.log(_severity_for(record.levelno), msg)


def intercept_stdlib(logger_names: list[str] | None = None,
                     manager: LogManager | None = None) -> None:
    """Route stdlib `logging` records into a sinklog manager.

    The root logger always gets an `InterceptHandler`, replacing its current
    handlers. Each name in `logger_names` gets a handler of its own, stops
    propagating to the root (so records are not delivered twice) and is
    opened down to DEBUG, leaving the sink thresholds to decide what shows.

    Args:
        logger_names: Extra loggers to route directly.
        manager: Manager receiving the records; the process-wide one by default.
    """
    logging.basicConfig(handlers=[InterceptHandler(manager)], level=0, force=True)

    if logger_names:
        for name in logger_names:
            stdlib_logger = logging.getLogger(name)
            stdlib_logger.handlers = [InterceptHandler(manager)]
            stdlib_logger.propagate = False
            stdlib_logger.setLevel(logging.DEBUG)  # sink thresholds apply
