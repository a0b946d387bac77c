"""Environment-driven settings, read once at import.

SINKLOG_ENABLED  log entry points active (default: follows `__debug__`)
SINKLOG_LEVEL    minimum level of the default sink (default: DEBUG)
SINKLOG_COLOR    colored console output (default: on; NO_COLOR turns it off)
SINKLOG_FILE     also append to this file through a composite sink
"""
import os
from dataclasses import dataclass

from sinklog.levels import Severity

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name, '').strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


@dataclass(frozen=True)
class LogSettings:
    enabled: bool
    level: Severity
    color: bool
    file: str | None


log = LogSettings(
    enabled=_env_flag('SINKLOG_ENABLED', __debug__),
    level=Severity.parse(os.getenv('SINKLOG_LEVEL'), Severity.DEBUG),
    color=_env_flag('SINKLOG_COLOR', True) and 'NO_COLOR' not in os.environ,
    file=os.getenv('SINKLOG_FILE') or None,
)
