"""Small synchronous logging facade over swappable sinks.

Public API - users should only import from this module.

Usage:
    import sinklog

    sinklog.info('Application started')
    sinklog.error('error code: %d', code)

    # Console plus file
    sinklog.set_sink(sinklog.CompositeSink())
    sinklog.init('app.log')
    sinklog.set_min_level(sinklog.Severity.WARNING)

When logging is disabled (SINKLOG_ENABLED=0, or by default under
`python -O`) the log functions are no-ops bound at import time: no sink is
built and no message is formatted.
"""
from sinklog import config as _config
from sinklog._backend import InterceptHandler, LoguruSink, intercept_stdlib
from sinklog.capabilities import Capability, ColorControl, LevelFilter
from sinklog.capabilities import Lifecycle, Logger, capabilities_of, supports
from sinklog.colors import Color, color_for
from sinklog.formatter import LogFormatter
from sinklog.levels import Severity, level_tag
from sinklog.manager import LogManager, get_manager
from sinklog.sinks import AnsiConsoleSink, CompositeSink, ConsoleSink
from sinklog.sinks import EnhancedConsoleSink, FileSink, NullSink

ENABLED = _config.log.enabled


if ENABLED:

    def log(level: Severity, fmt: str, *args) -> None:
        """Log a message at the given level."""
        get_manager().log(level, fmt, *args)

    def debug(fmt: str, *args) -> None:
        """Log a debug message."""
        get_manager().debug(fmt, *args)

    def info(fmt: str, *args) -> None:
        """Log an info message."""
        get_manager().info(fmt, *args)

    def warning(fmt: str, *args) -> None:
        """Log a warning message."""
        get_manager().warning(fmt, *args)

    def error(fmt: str, *args) -> None:
        """Log an error message."""
        get_manager().error(fmt, *args)

    def fatal(fmt: str, *args) -> None:
        """Log a fatal message."""
        get_manager().fatal(fmt, *args)

else:

    def _disabled(*args) -> None:
        """Logging is switched off."""

    log = debug = info = warning = error = fatal = _disabled


# Aliases
warn = warning


def set_sink(sink: Logger | None) -> None:
    """Replace the active sink, closing the old one."""
    get_manager().set_sink(sink)


def get_sink() -> Logger | None:
    return get_manager().get_sink()


def get_formatter() -> LogFormatter:
    return get_manager().get_formatter()


def init(parameter: str | None = None) -> None:
    """Initialise the active sink (e.g. open its log file)."""
    get_manager().init(parameter)


def close() -> None:
    """Release the active sink's resources."""
    get_manager().close()


def set_min_level(level: Severity | str) -> None:
    get_manager().set_min_level(level)


def set_color_enabled(enabled: bool) -> None:
    get_manager().set_color_enabled(enabled)


__all__ = [
    'ENABLED',
    # Logging methods
    'log',
    'debug',
    'info',
    'warning',
    'warn',
    'error',
    'fatal',
    # Configuration
    'set_min_level',
    'set_color_enabled',
    'init',
    'close',
    # Sink management
    'set_sink',
    'get_sink',
    'get_formatter',
    'get_manager',
    'LogManager',
    'LogFormatter',
    # Levels and colors
    'Severity',
    'level_tag',
    'Color',
    'color_for',
    # Capabilities
    'Capability',
    'Logger',
    'Lifecycle',
    'LevelFilter',
    'ColorControl',
    'capabilities_of',
    'supports',
    # Sinks
    'ConsoleSink',
    'AnsiConsoleSink',
    'EnhancedConsoleSink',
    'FileSink',
    'NullSink',
    'CompositeSink',
    'LoguruSink',
    # stdlib interception
    'InterceptHandler',
    'intercept_stdlib',
]
