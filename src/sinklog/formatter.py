"""Formatter - renders printf-style templates and hands the text to one sink.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sinklog.capabilities import Logger
from sinklog.levels import Severity

__all__ = ['LogFormatter', 'MAX_MESSAGE_LENGTH', 'render']

# Longest message handed to a sink; longer ones are cut, not rejected.
MAX_MESSAGE_LENGTH = 1023


def render(fmt: Any, args: tuple = ()) -> str:
    """Apply `%`-style `args` to `fmt`, never raising.

    Without args the template is returned as-is, so a literal `%` is safe.
    A mismatch between template and arguments falls back to the template
    followed by the arguments.

    >>> render('%d items in %s', (3, 'cart'))
    '3 items in cart'
    >>> render('%(user)s logged in', ({'user': 'ann'},))
    'ann logged in'
    >>> render('100%')
    '100%'
    >>> render('Value is %', ('unused',))
    "Value is % ('unused',)"
    >>> render('char %c', (2 ** 40,))
    'char %c (1099511627776,)'
    """
    msg = str(fmt)
    if args:
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            args = args[0]
        try:
            msg = msg % args
        except (TypeError, ValueError, KeyError, IndexError, OverflowError):
            msg = f'{msg} {args!r}'
    return msg[:MAX_MESSAGE_LENGTH]


class LogFormatter:
    """Per-level convenience calls bound to a single sink.

    Holds a reference to the sink, nothing else.
    """

    def __init__(self, sink: Logger | None) -> None:
        self._sink = sink

    @property
    def sink(self) -> Logger | None:
        return self._sink

    def log(self, level: Severity, fmt: str, *args: Any) -> None:
        """Format then emit.
        """
        if self._sink is None:
            return
        self._sink.emit(level, render(fmt, args))

    def debug(self, fmt: str, *args: Any) -> None:
        self.log(Severity.DEBUG, fmt, *args)

    def info(self, fmt: str, *args: Any) -> None:
        self.log(Severity.INFO, fmt, *args)

    def warning(self, fmt: str, *args: Any) -> None:
        self.log(Severity.WARNING, fmt, *args)

    def error(self, fmt: str, *args: Any) -> None:
        self.log(Severity.ERROR, fmt, *args)

    def fatal(self, fmt: str, *args: Any) -> None:
        self.log(Severity.FATAL, fmt, *args)

    # Aliases
    warn = warning


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
