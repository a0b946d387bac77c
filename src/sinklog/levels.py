"""Severity scale shared by every sink.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any

__all__ = ['Severity', 'as_severity', 'level_tag', 'rank']


class Severity(IntEnum):
    """Ordered log severity, compared by numeric rank.
    """
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @classmethod
    def parse(cls, name: str | None, default: Severity | None = None) -> Severity | None:
        """Look up a severity by name, case-insensitive.

        >>> Severity.parse('warn')
        <Severity.WARNING: 2>
        >>> Severity.parse('critical')
        <Severity.FATAL: 4>
        >>> Severity.parse('bogus', Severity.INFO)
        <Severity.INFO: 1>
        """
        if not name:
            return default
        name = str(name).strip().upper()
        return _ALIASES.get(name) or cls.__members__.get(name, default)


_ALIASES = {
    'WARN': Severity.WARNING,
    'CRITICAL': Severity.FATAL,
}

_TAGS = {
    Severity.DEBUG: '[DEBUG]',
    Severity.INFO: '[INFO]',
    Severity.WARNING: '[WARN]',
    Severity.ERROR: '[ERROR]',
    Severity.FATAL: '[FATAL]',
}

UNKNOWN_TAG = '[UNKNOWN]'

# Non-integer levels pass every threshold
UNKNOWN_RANK = max(Severity) + 1


def _is_int(level: Any) -> bool:
    return isinstance(level, int) and not isinstance(level, bool)


def as_severity(level: Any) -> Severity | None:
    """Resolve a Severity, an int in range or a level name; None otherwise.
    """
    if isinstance(level, str):
        return Severity.parse(level)
    return _as_severity(level)


def _as_severity(level: Any) -> Severity | None:
    if isinstance(level, Severity):
        return level
    if _is_int(level):
        try:
            return Severity(level)
        except ValueError:
            return None
    return None


def level_tag(level: Any) -> str:
    """Return the bracketed tag for a level, `[UNKNOWN]` if unrecognized.

    >>> level_tag(Severity.WARNING)
    '[WARN]'
    >>> level_tag(42)
    '[UNKNOWN]'
    """
    severity = _as_severity(level)
    if severity is None:
        return UNKNOWN_TAG
    return _TAGS[severity]


def rank(level: Any) -> int:
    """Numeric rank used for threshold checks.

    Out-of-range ints rank by their own value; anything else that is not a
    severity ranks above FATAL.

    >>> rank(-1) < rank(Severity.DEBUG)
    True
    >>> rank('loud') > rank(Severity.FATAL)
    True
    """
    if _is_int(level):
        return int(level)
    return UNKNOWN_RANK


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
