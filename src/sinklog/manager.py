"""Manager - owns the active sink and the formatter bound to it.

Configuration calls are forwarded to the active sink only when it supports
the matching capability; otherwise they do nothing.
"""
from __future__ import annotations

import atexit
import threading
from typing import Any

from sinklog import config as config_log
from sinklog.capabilities import Capability, Logger, supports
from sinklog.formatter import LogFormatter
from sinklog.levels import Severity, as_severity
from sinklog.sinks import CompositeSink, EnhancedConsoleSink, NullSink

__all__ = ['LogManager', 'default_sink', 'get_manager']


def default_sink(settings: config_log.LogSettings | None = None) -> Logger:
    """Build the sink a fresh manager starts with.

    Disabled logging gets a `NullSink`. Otherwise an enhanced console sink,
    or a console+file composite when a log file is configured.
    """
    settings = settings or config_log.log
    if not settings.enabled:
        return NullSink()
    if settings.file:
        sink = CompositeSink()
        sink.init(settings.file)
    else:
        sink = EnhancedConsoleSink()
    sink.set_min_level(settings.level)
    sink.set_color_enabled(settings.color)
    return sink


class LogManager:
    """Facade over whichever sink is currently active.

    Construct one directly for an isolated logger, or use `get_manager()`
    for the process-wide instance.
    """

    def __init__(self, sink: Logger | None = None) -> None:
        self._lock = threading.Lock()
        self._sink: Logger | None = None
        self._formatter = LogFormatter(None)
        self.set_sink(sink if sink is not None else default_sink())

    def set_sink(self, sink: Logger | None) -> None:
        """Replace the active sink, closing the previous one first.
        """
        with self._lock:
            old = self._sink
            if old is not None and old is not sink and supports(old, Capability.LIFECYCLE):
                old.close()
            self._sink = sink
            self._formatter = LogFormatter(sink)

    def get_sink(self) -> Logger | None:
        return self._sink

    def get_formatter(self) -> LogFormatter:
        return self._formatter

    def init(self, parameter: str | None = None) -> None:
        sink = self._sink
        if supports(sink, Capability.LIFECYCLE):
            sink.init(parameter)

    def close(self) -> None:
        sink = self._sink
        if supports(sink, Capability.LIFECYCLE):
            sink.close()

    def set_min_level(self, level: Severity | str) -> None:
        """Set the active sink's threshold; level names are accepted too.

        Unknown names fall back to INFO; anything else that names no severity
        leaves the threshold unchanged.
        """
        if isinstance(level, str):
            level = Severity.parse(level, Severity.INFO)
        severity = as_severity(level)
        sink = self._sink
        if severity is not None and supports(sink, Capability.LEVEL_FILTER):
            sink.set_min_level(severity)

    def set_color_enabled(self, enabled: bool) -> None:
        sink = self._sink
        if supports(sink, Capability.COLOR_CONTROL):
            sink.set_color_enabled(enabled)

    def log(self, level: Severity, fmt: str, *args: Any) -> None:
        self._formatter.log(level, fmt, *args)

    def debug(self, fmt: str, *args: Any) -> None:
        self._formatter.debug(fmt, *args)

    def info(self, fmt: str, *args: Any) -> None:
        self._formatter.info(fmt, *args)

    def warning(self, fmt: str, *args: Any) -> None:
        self._formatter.warning(fmt, *args)

    def error(self, fmt: str, *args: Any) -> None:
        self._formatter.error(fmt, *args)

    def fatal(self, fmt: str, *args: Any) -> None:
        self._formatter.fatal(fmt, *args)

    # Aliases
    warn = warning


# Process-wide instance
_manager: LogManager | None = None
_manager_lock = threading.Lock()


def get_manager() -> LogManager:
    """Get the process-wide manager, creating it on first use.

    Creation happens once even under concurrent first calls, and registers
    `close()` to run at interpreter exit.
    """
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                manager = LogManager()
                atexit.register(manager.close)
                _manager = manager
    return _manager
