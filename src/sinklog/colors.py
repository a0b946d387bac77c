"""Console color hints and scoped color switching, cross-platform.

A `Color` is a rendering hint only. It carries both the Windows console
attribute and the ANSI escape for the same hue, and `set_color` picks
whichever the target stream understands.
"""
from __future__ import annotations

import platform
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, TextIO

import colorama
from colorama import Fore, Style

from sinklog.levels import Severity, _as_severity

__all__ = [
    'ANSI_RESET',
    'Color',
    'color_for',
    'enable_ansi',
    'set_color',
    'write_color',
    ]

ANSI_RESET = Style.RESET_ALL

# Windows console character attributes (wincon.h)
_BLUE = 0x0001
_GREEN = 0x0002
_RED = 0x0004
_INTENSITY = 0x0008

_STD_OUTPUT_HANDLE = -11
_STD_ERROR_HANDLE = -12


class Color(Enum):
    """Rendering hint: (windows console attribute, ansi escape).
    """
    DEFAULT = (_RED | _GREEN | _BLUE, Style.RESET_ALL)
    DARK_GRAY = (_INTENSITY, Fore.LIGHTBLACK_EX)
    CYAN = (_GREEN | _BLUE | _INTENSITY, Fore.LIGHTCYAN_EX)
    YELLOW = (_RED | _GREEN | _INTENSITY, Fore.LIGHTYELLOW_EX)
    RED = (_RED | _INTENSITY, Fore.LIGHTRED_EX)
    MAGENTA = (_RED | _BLUE | _INTENSITY, Fore.LIGHTMAGENTA_EX)
    WHITE = (_RED | _GREEN | _BLUE | _INTENSITY, Fore.LIGHTWHITE_EX)

    def __init__(self, attribute: int, ansi: str) -> None:
        self.attribute = attribute
        self.ansi = ansi


_LEVEL_COLORS = {
    Severity.DEBUG: Color.DARK_GRAY,
    Severity.INFO: Color.CYAN,
    Severity.WARNING: Color.YELLOW,
    Severity.ERROR: Color.RED,
    Severity.FATAL: Color.MAGENTA,
}


def color_for(level: Any) -> Color:
    """Choose color based on log level, `Color.DEFAULT` if unrecognized.
    """
    severity = _as_severity(level)
    if severity is None:
        return Color.DEFAULT
    return _LEVEL_COLORS[severity]


def enable_ansi() -> None:
    """Turn on escape-sequence interpretation where the console needs it.

    Only does anything on Windows consoles; safe to call repeatedly.
    """
    colorama.just_fix_windows_console()


def _use_console_api(stream: TextIO) -> bool:
    """Native console attributes only apply to a real Windows console.
    """
    if 'Win' not in platform.system():
        return False
    if stream is not sys.__stdout__ and stream is not sys.__stderr__:
        return False
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def _set_console_attribute(stream: TextIO, attribute: int) -> None:
    import ctypes
    kernel32 = ctypes.windll.kernel32
    which = _STD_ERROR_HANDLE if stream is sys.__stderr__ else _STD_OUTPUT_HANDLE
    kernel32.SetConsoleTextAttribute(kernel32.GetStdHandle(which), attribute)


@contextmanager
def set_color(color: Color, stream: TextIO | None = None) -> Iterator[None]:
    """Write inside the block in `color`, restoring the default on exit.

    >>> import io
    >>> buf = io.StringIO()
    >>> with set_color(Color.RED, buf):  # doctest: +SKIP
    ...     buf.write('alert')
    """
    if stream is None:
        stream = sys.stdout
    if _use_console_api(stream):
        stream.flush()
        _set_console_attribute(stream, color.attribute)
        try:
            yield
        finally:
            stream.flush()
            _set_console_attribute(stream, Color.DEFAULT.attribute)
        return
    stream.write(color.ansi)
    try:
        yield
    finally:
        stream.write(ANSI_RESET)


def write_color(color: Color, text: str, stream: TextIO | None = None) -> None:
    """Write `text` in `color`.
    """
    if stream is None:
        stream = sys.stdout
    with set_color(color, stream):
        stream.write(text)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
